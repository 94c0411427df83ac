"""Docker configuration."""

from pydantic import Field
from pydantic_settings import BaseSettings


class DockerConfig(BaseSettings):
    """Docker daemon connection and lifecycle settings."""

    base_url: str | None = Field(default=None, alias="docker_base_url")
    timeout: int = Field(default=60, ge=1, alias="docker_timeout")

    # Container lifecycle
    stop_timeout: int = Field(default=30, ge=1, alias="docker_stop_timeout")
    wait_timeout: float | None = Field(default=600.0, alias="docker_wait_timeout")

    class Config:
        env_prefix = ""
        extra = "ignore"
