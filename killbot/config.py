import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MEMORY_DATABASE = ":memory:"


class DatabaseSettings(BaseSettings):
    """Configuration for the database."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="DATABASE_", extra="ignore"
    )

    type: str = Field("sqlite", description="Database backend to connect to")
    host: str = Field("", description="Host (directory for file-backed databases)")
    user: str = Field("", description="Database user")
    password: str = Field("", description="Database password")
    schema_name: str = Field("killbot", description="Schema (database) name")
    path: Optional[str] = Field(None, description="Explicit database file, overrides host/schema")

    @property
    def target(self) -> str:
        """Return the connection target assembled from the configured values."""
        if self.path:
            return self.path
        if self.schema_name == MEMORY_DATABASE:
            return MEMORY_DATABASE
        filename = f"{self.schema_name}.db"
        if self.host:
            return str(Path(self.host) / filename)
        return filename


class AppSettings(BaseSettings):
    """General application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    debug: bool = Field(False, description="Enable debug mode for development")
    log_level: str = Field("INFO", description="Logging level")

    db: DatabaseSettings = DatabaseSettings()

    @property
    def log_level_value(self) -> int:
        """Return the numeric value of the log level."""
        return logging.getLevelName(self.log_level.upper())


@lru_cache
def get_settings() -> AppSettings:
    """
    Get application settings.
    If the TEST_MODE environment variable is set, it returns an in-memory
    configuration suitable for testing, otherwise loads the configuration
    from the environment and the .env file.
    """
    if os.getenv("TEST_MODE"):
        return AppSettings(
            debug=True,
            log_level="DEBUG",
            db=DatabaseSettings(path=MEMORY_DATABASE),
        )
    return AppSettings()
