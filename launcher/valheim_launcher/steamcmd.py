from __future__ import annotations
import subprocess
from pathlib import Path
from typing import List, Optional
from .settings import Settings
from .logging_setup import get_logger

log = get_logger("valheim.launcher.steamcmd")

class SteamCMD:
    def __init__(self, settings: Settings):
        self.settings = settings
        self.bin = settings.steamcmd_sh

    def _run(self, args: List[str]) -> None:
        cmd = [str(self.bin)] + args
        log.info("SteamCMD: %s", " ".join(cmd))
        proc = subprocess.run(cmd, capture_output=True, text=True)
        if proc.stdout:
            log.debug("steamcmd stdout: %s", proc.stdout[-4000:])
        if proc.stderr:
            log.debug("steamcmd stderr: %s", proc.stderr[-4000:])
        if proc.returncode != 0:
            raise RuntimeError(f"SteamCMD failed (rc={proc.returncode}). See launcher.log for details.")

    def ensure_app(self, app_id: int, install_dir: Path, *, validate: bool = True,
                   beta_branch: Optional[str] = None) -> None:
        # the Valheim dedicated server is available to anonymous accounts
        args: List[str] = [
            "+force_install_dir", str(install_dir),
            "+login", "anonymous",
            "+app_update", str(app_id),
        ]
        if beta_branch:
            args += ["-beta", beta_branch]
        if validate:
            args.append("validate")
        args += ["+quit"]
        self._run(args)

    def install_server(self) -> None:
        log.info("Installing Valheim dedicated server (app_id=%s) into %s",
                 self.settings.valheim_app_id, self.settings.working_dir)
        self.ensure_app(self.settings.valheim_app_id, self.settings.working_dir, validate=True)
