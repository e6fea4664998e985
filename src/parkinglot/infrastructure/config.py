# File: src/parkinglot/infrastructure/config.py
"""
Application settings

Values come from environment variables prefixed with PARKING_LOT_
(e.g. PARKING_LOT_LOG_LEVEL=DEBUG) or from a local .env file.
Command-line flags override them.
"""

from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ParkingLotSettings(BaseSettings):
    """Settings for the command processor"""

    model_config = SettingsConfigDict(
        env_prefix="PARKING_LOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # === LOGGING ===
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # === PROTOCOL ===
    include_empty_in_status: bool = False
    exit_command: str = "exit"

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level

    @field_validator('exit_command')
    @classmethod
    def validate_exit_command(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Exit command cannot be empty")
        return v.strip()


def load_settings(**overrides) -> ParkingLotSettings:
    """Load settings from the environment, applying non-None overrides"""
    values = {key: value for key, value in overrides.items() if value is not None}
    return ParkingLotSettings(**values)
