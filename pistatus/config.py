from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    # --- app ---
    app_name: str = "Pi Status"
    debug: bool = False
    log_level: str = "INFO"
    version: str = "1.0.0"

    # --- sampling ---
    cache_ttl: float = 10.0  # seconds a live sample stays fresh
    cpu_sample_interval: float = 0.2  # seconds psutil measures cpu load over
    disk_mount: str = "/"

    # --- external commands ---
    command_timeout: float = 2.0
    vcgencmd_path: str = "vcgencmd"
    ssid_command: list[str] = ["iwgetid", "-r"]

    # --- server ---
    host: str = "0.0.0.0"
    port: int = 10002
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_prefix": "PISTATUS_"}


settings = Settings()
