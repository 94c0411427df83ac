"""Configuration management for dockrun.

Settings are read from ``DOCKRUN_``-prefixed environment variables and an
optional ``.env`` file in the working directory.

Usage:
    from dockrun.config import settings

    # Grouped access
    settings.docker.stop_timeout
    settings.logging.level

    # Flat access
    settings.docker_stop_timeout
    settings.log_level
"""

import logging as std_logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .docker import DockerConfig
from .logging import LoggingConfig


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="DOCKRUN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Docker Configuration
    docker_base_url: str | None = Field(
        default=None,
        description="Daemon URL, e.g. unix:///var/run/docker.sock (empty = use DOCKER_HOST)",
    )
    docker_timeout: int = Field(default=60, ge=1, description="SDK request timeout in seconds")
    docker_stop_timeout: int = Field(
        default=30,
        ge=1,
        description="Grace period in seconds before a stopped container is killed",
    )
    docker_wait_timeout: float | None = Field(
        default=600.0,
        description="Seconds to wait for a command container to exit (0 = no limit)",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")
    log_file: str | None = Field(default=None)
    log_max_size_mb: int = Field(default=10, ge=1)
    log_backup_count: int = Field(default=3, ge=1)

    # ========================================================================
    # VALIDATORS
    # ========================================================================

    @field_validator("docker_base_url", mode="before")
    @classmethod
    def normalize_base_url(cls, v):
        """Treat a blank daemon URL as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("docker_wait_timeout")
    @classmethod
    def normalize_wait_timeout(cls, v):
        """Map zero or negative timeouts to an unbounded wait."""
        if v is not None and v <= 0:
            return None
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure the log level is one the logging module knows."""
        level = v.upper()
        if not isinstance(std_logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level

    # ========================================================================
    # GROUPED CONFIG ACCESS
    # ========================================================================

    @property
    def docker(self) -> DockerConfig:
        """Access Docker configuration group."""
        return DockerConfig(
            docker_base_url=self.docker_base_url,
            docker_timeout=self.docker_timeout,
            docker_stop_timeout=self.docker_stop_timeout,
            docker_wait_timeout=self.docker_wait_timeout,
        )

    @property
    def logging(self) -> LoggingConfig:
        """Access logging configuration group."""
        return LoggingConfig(
            log_level=self.log_level,
            log_format=self.log_format,
            log_file=self.log_file,
            log_max_size_mb=self.log_max_size_mb,
            log_backup_count=self.log_backup_count,
        )


settings = Settings()

__all__ = ["Settings", "DockerConfig", "LoggingConfig", "settings"]
