from __future__ import annotations
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional
from .bepinex import LaunchEnvironment
from .logging_setup import get_logger

log = get_logger("valheim.launcher.proc")

@dataclass
class ProcessHandle:
    name: str
    proc: subprocess.Popen

    @property
    def pid(self) -> int:
        return self.proc.pid

def _open_log_file(path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    return open(path, "a", encoding="utf-8", buffering=1)

class ProcessRunner:
    def __init__(self):
        self.handles: List[ProcessHandle] = []

    def start(self, name: str, cmd: List[str], *, cwd: Optional[Path] = None, log_file: Optional[Path] = None,
              env: Optional[dict] = None) -> ProcessHandle:
        """Spawn ``cmd`` and return immediately; the child is not waited on."""
        log.info("Starting %s: %s", name, " ".join(cmd))
        stdout = stderr = None
        if log_file:
            stdout = _open_log_file(log_file)
            stderr = subprocess.STDOUT

        try:
            proc = subprocess.Popen(cmd, cwd=str(cwd) if cwd else None, stdout=stdout, stderr=stderr, env=env)
        finally:
            # the child holds its own copy of the descriptor
            if stdout is not None:
                stdout.close()
        h = ProcessHandle(name=name, proc=proc)
        self.handles.append(h)
        return h

    def status(self) -> dict:
        return {h.name: {"pid": h.proc.pid, "returncode": h.proc.poll()} for h in self.handles}

def launch_with_environment(runner: ProcessRunner, name: str, cmd: List[str], launch_env: LaunchEnvironment, *,
                            base_env: Mapping[str, str], cwd: Optional[Path] = None,
                            log_file: Optional[Path] = None) -> ProcessHandle:
    """
    Spawn ``cmd`` with the seven BepInEx bindings applied on top of ``base_env``.
    OSError from the spawn propagates to the caller.
    """
    log.info("BepInEx found! Setting up Environment...")
    env = dict(base_env)
    env.update(launch_env.as_environ())
    return runner.start(name, cmd, cwd=cwd, log_file=log_file, env=env)
