"""
server.py — Starts and stops the Valheim dedicated server
---------------------------------------------------------
Builds the server command line, decides between the BepInEx and the vanilla
environment, spawns the process and records its pid so a later ``stop`` can
signal it. The launcher does not supervise the server once it is running.
"""
from __future__ import annotations
import os
import signal
import time
from pathlib import Path
from typing import Dict, List, Optional
from .bepinex import LD_LIBRARY_PATH_VAR, compose_environment, is_installed
from .config_resolver import ConfigResolver
from .logging_setup import get_logger
from .process_runner import ProcessHandle, ProcessRunner, launch_with_environment
from .settings import Settings

log = get_logger("valheim.launcher.server")

class ServerLauncher:
    def __init__(self, settings: Settings, resolver: ConfigResolver, runner: Optional[ProcessRunner] = None):
        self.settings = settings
        self.resolver = resolver
        self.runner = runner or ProcessRunner()

    @property
    def executable(self) -> Path:
        return self.settings.working_dir / self.settings.server_executable

    def build_command(self) -> List[str]:
        s = self.settings
        return [
            str(self.executable),
            "-nographics",
            "-batchmode",
            "-port", str(s.port),
            "-name", s.name,
            "-world", s.world,
            "-password", s.password,
            "-public", str(s.public),
        ]

    def vanilla_environment(self) -> Dict[str, str]:
        env = dict(self.resolver.values)
        existing = self.resolver.lookup(LD_LIBRARY_PATH_VAR)
        env[LD_LIBRARY_PATH_VAR] = f"./linux64:{existing}" if existing else "./linux64"
        env["SteamAppId"] = str(self.settings.steam_app_id)
        return env

    def start(self) -> ProcessHandle:
        """Spawn the server. Raises FileNotFoundError or OSError when it cannot be started."""
        if not self.executable.exists():
            raise FileNotFoundError(f"Server executable not found at {self.executable}. Run install first.")
        if len(self.settings.password) < 5:
            log.warning("Server password is shorter than 5 characters; Valheim will refuse to start a public server.")

        cmd = self.build_command()
        log_file = self.settings.logs_dir / "valheim_server.log"
        launch_env = compose_environment(self.settings.working_dir, self.resolver)
        if is_installed(launch_env):
            handle = launch_with_environment(
                self.runner, "server", cmd, launch_env,
                base_env=self.resolver.values, cwd=self.settings.working_dir, log_file=log_file,
            )
        else:
            log.info("BepInEx not found, starting vanilla server.")
            handle = self.runner.start("server", cmd, cwd=self.settings.working_dir, log_file=log_file,
                                       env=self.vanilla_environment())

        self.settings.pid_file.write_text(str(handle.pid), encoding="utf-8")
        log.info("Valheim server started (pid=%s)", handle.pid)
        return handle

    def read_pid(self) -> Optional[int]:
        p = self.settings.pid_file
        if not p.is_file():
            return None
        try:
            return int(p.read_text(encoding="utf-8").strip())
        except ValueError:
            log.warning("Ignoring malformed pid file %s", p)
            return None

    @staticmethod
    def is_running(pid: int) -> bool:
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            return True
        return True

    def status(self) -> dict:
        pid = self.read_pid()
        return {"pid": pid, "running": bool(pid and self.is_running(pid))}

    def stop(self) -> bool:
        """
        Send SIGINT to the recorded server so it saves the world, then wait up
        to ``stop_timeout`` seconds. Returns False when nothing was running.
        """
        pid = self.read_pid()
        if pid is None or not self.is_running(pid):
            log.warning("No running server recorded in %s", self.settings.pid_file)
            self.settings.pid_file.unlink(missing_ok=True)
            return False

        log.info("Stopping Valheim server (pid=%s)", pid)
        os.kill(pid, signal.SIGINT)
        deadline = time.monotonic() + self.settings.stop_timeout
        while self.is_running(pid):
            if time.monotonic() >= deadline:
                raise TimeoutError(f"Server (pid={pid}) did not exit within {self.settings.stop_timeout}s")
            time.sleep(0.5)
        self.settings.pid_file.unlink(missing_ok=True)
        log.info("Server stopped.")
        return True
