"""Configuration management for pollwatch."""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .watcher.stat import OSStatProvider


class Settings(BaseSettings):
    """Polling settings loaded from POLLWATCH_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="POLLWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    root: Path | None = Field(
        default=None,
        description="Base directory for relative watched paths",
    )
    poll_interval: float = Field(
        default=1.0,
        gt=0,
        description="Seconds between scans",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    @field_validator("root", mode="before")
    @classmethod
    def validate_root(cls, v: str | Path | None) -> Path | None:
        """Convert string to Path and validate it is an existing directory."""
        if v is None or v == "":
            return None
        path = Path(v) if isinstance(v, str) else v
        if not path.exists():
            raise ValueError(f"Root path does not exist: {path}")
        if not path.is_dir():
            raise ValueError(f"Root path is not a directory: {path}")
        return path.resolve()

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return upper_v

    def create_provider(self) -> OSStatProvider:
        """Build the stat provider for these settings."""
        return OSStatProvider(root=self.root)


def setup_logging(level: str) -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
