"""Docker client factory and initialization."""

from typing import Optional

import docker
import structlog

from ...config import settings
from ...models.errors import DaemonConnectionError
from ...utils.error_handlers import DAEMON_ERRORS

logger = structlog.get_logger(__name__)


class DockerClientFactory:
    """Creates the Docker client for one CLI invocation and closes it afterwards.

    Use as a context manager::

        with DockerClientFactory() as client:
            ...
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[int] = None):
        self.base_url = base_url if base_url is not None else settings.docker_base_url
        self.timeout = timeout or settings.docker_timeout
        self.client: Optional[docker.DockerClient] = None

    def create(self) -> docker.DockerClient:
        """Create the client and check that the daemon answers."""
        if self.client is not None:
            return self.client

        try:
            if self.base_url:
                logger.debug("Creating Docker client", base_url=self.base_url)
                client = docker.DockerClient(base_url=self.base_url, timeout=self.timeout)
            else:
                logger.debug("Creating Docker client from environment")
                client = docker.from_env(timeout=self.timeout)
        except DAEMON_ERRORS as e:
            logger.error(f"Failed to create Docker client: {e}")
            raise DaemonConnectionError(e) from e

        try:
            client.ping()
        except DAEMON_ERRORS as e:
            logger.error(f"Docker daemon did not answer ping: {e}")
            client.close()
            raise DaemonConnectionError(e) from e

        logger.debug("Docker client initialized")
        self.client = client
        return client

    def close(self) -> None:
        """Close Docker client connection."""
        if self.client is None:
            return
        try:
            self.client.close()
        except Exception as e:
            logger.error(f"Error closing Docker client: {e}")
        finally:
            self.client = None

    def __enter__(self) -> docker.DockerClient:
        return self.create()

    def __exit__(self, *args) -> None:
        self.close()
