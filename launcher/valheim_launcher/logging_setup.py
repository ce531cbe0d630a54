"""
Centralized logging setup for the Valheim launcher
--------------------------------------------------
Console + rotating file output, optional structured (JSON) logs.
"""
from __future__ import annotations
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from .settings import Settings

class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

def setup_logging(settings: Settings, *, log_to_file: bool = True) -> None:
    level = settings.effective_log_level

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    fmt = _JsonFormatter() if settings.log_json else logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_to_file:
        try:
            settings.logs_dir.mkdir(parents=True, exist_ok=True)
            fh = RotatingFileHandler(settings.logs_dir / "launcher.log", maxBytes=5_000_000,
                                     backupCount=3, encoding="utf-8")
            fh.setFormatter(fmt)
            fh.setLevel(level)
            root.addHandler(fh)
        except OSError:
            # keep console logging
            root.warning("Could not open %s, continuing with console logging only.",
                         settings.logs_dir / "launcher.log")

    logging.getLogger("valheim.launcher").debug("Debugging set to %s", settings.debug_mode)

def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
