from __future__ import annotations
import argparse
import os
import uvicorn
from pathlib import Path
from datetime import datetime
from .api import create_app
from .backup import backup
from .config_resolver import ConfigResolver
from .lifecycle import lifecycle
from .logging_setup import get_logger, setup_logging
from .notifications import EventKind, NotificationDispatcher, NotificationEvent, fetch_webhook_url
from .server import ServerLauncher
from .settings import Settings
from .steamcmd import SteamCMD

log = get_logger("valheim.launcher.cli")

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="valheim-launcher")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (same as DEBUG_MODE=1)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("install", help="Install or validate the dedicated server via SteamCMD")
    sub.add_parser("update", help="Update the dedicated server via SteamCMD")
    sub.add_parser("start", help="Start the server (with BepInEx when installed)")
    sub.add_parser("stop", help="Stop the running server")

    backup_p = sub.add_parser("backup", help="Write a tar.gz backup of a directory")
    backup_p.add_argument("input_dir", type=Path)
    backup_p.add_argument("output_file", type=Path, nargs="?", default=None,
                          help="Defaults to BACKUP_DIR/worlds-<timestamp>.tar.gz")

    notify_p = sub.add_parser("notify", help="Send a broadcast notification")
    notify_p.add_argument("message")
    notify_p.add_argument("--webhook", default=None, help="Webhook URL to use instead of WEBHOOK_URL")

    api_p = sub.add_parser("api", help="Run REST API (FastAPI)")
    api_p.add_argument("--host", default="0.0.0.0")
    api_p.add_argument("--port", type=int, default=8000)
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    if args.debug:
        settings.debug_mode = True
    setup_logging(settings)
    if not settings.debug_mode:
        log.info("Run with DEBUG_MODE as 1 if you think there is an issue with the launcher")

    resolver = ConfigResolver(os.environ)
    dispatcher = NotificationDispatcher.from_settings(settings, resolver)

    if args.cmd == "install":
        try:
            SteamCMD(settings).install_server()
        except Exception as e:
            log.exception("Install failed: %s", e)
            return 1
        log.info("Successfully installed Valheim!")
        return 0

    if args.cmd == "update":
        try:
            with lifecycle(dispatcher, EventKind.UPDATE):
                SteamCMD(settings).install_server()
        except Exception as e:
            log.exception("Update failed: %s", e)
            return 1
        return 0

    if args.cmd == "start":
        try:
            with lifecycle(dispatcher, EventKind.START):
                ServerLauncher(settings, resolver).start()
        except Exception as e:
            log.exception("Server launch failed: %s", e)
            return 1
        return 0

    if args.cmd == "stop":
        try:
            with lifecycle(dispatcher, EventKind.STOP):
                ServerLauncher(settings, resolver).stop()
        except Exception as e:
            log.exception("Stopping the server failed: %s", e)
            return 1
        return 0

    if args.cmd == "backup":
        output = args.output_file or settings.backup_dir / f"worlds-{datetime.now():%Y%m%d-%H%M%S}.tar.gz"
        try:
            with lifecycle(dispatcher, EventKind.BACKUP):
                backup(args.input_dir, output)
        except Exception as e:
            log.exception("Backup failed: %s", e)
            return 1
        return 0

    if args.cmd == "notify":
        event = NotificationEvent.broadcast()
        if args.webhook:
            dispatcher.send_custom(event, args.webhook, args.message)
        elif dispatcher.is_enabled():
            dispatcher.send_custom(event, fetch_webhook_url(resolver), args.message)
        else:
            log.warning("No webhook configured; set WEBHOOK_URL or pass --webhook")
        return 0

    if args.cmd == "api":
        app = create_app(settings, resolver)
        uvicorn.run(app, host=args.host, port=args.port, log_level=settings.effective_log_level.lower())
        return 0

    return 2
