from __future__ import annotations
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    working_dir: Path = Field(default_factory=Path.cwd, alias="WORKING_DIR")
    server_executable: str = Field(default="valheim_server.x86_64", alias="SERVER_EXECUTABLE")
    steamcmd_sh: Path = Field(default=Path("/steamcmd/steamcmd.sh"), alias="STEAMCMD_SH")
    backup_dir: Path = Field(default=Path("/home/steam/backups"), alias="BACKUP_DIR")

    name: str = Field(default="My Server", alias="NAME")
    port: int = Field(default=2456, alias="PORT")
    world: str = Field(default="Dedicated", alias="WORLD")
    password: str = Field(default="", alias="PASSWORD")
    public: int = Field(default=1, alias="PUBLIC")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    debug_mode: bool = Field(default=False, alias="DEBUG_MODE")

    webhook_timeout: float = Field(default=10.0, alias="WEBHOOK_TIMEOUT")
    webhook_retries: int = Field(default=0, ge=0, le=3, alias="WEBHOOK_RETRIES")
    stop_timeout: float = Field(default=60.0, alias="STOP_TIMEOUT")

    valheim_app_id: int = Field(default=896660, alias="VALHEIM_APP_ID")
    steam_app_id: int = Field(default=892970, alias="STEAM_APP_ID")

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level.upper()

    @property
    def logs_dir(self) -> Path:
        return self.working_dir / "logs"

    @property
    def pid_file(self) -> Path:
        return self.working_dir / "valheim_server.pid"
