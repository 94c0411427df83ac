"""Container lifecycle management."""

import asyncio
import functools
from typing import Any, Callable, List, Optional, Sequence

import docker
import structlog
from requests.exceptions import Timeout

from ...models.container import ContainerSummary, WaitResult
from ...models.errors import (
    ContainerOperationError,
    DockrunException,
    Stage,
    ValidationError,
    WaitTimeoutError,
)
from ...utils.containers import image_short_name
from ...utils.error_handlers import DAEMON_ERRORS, STREAM_ERRORS, wrap_daemon_error

logger = structlog.get_logger(__name__)

STOP_TIMEOUT = 30
WAIT_TIMEOUT = 600.0


class ContainerManager:
    """Runs, stops and lists containers through a Docker client.

    Each operation is one daemon call or a short fixed sequence of them.
    Daemon errors are re-raised as :class:`ContainerOperationError` tagged
    with the stage that failed; nothing is retried and containers left
    behind by a failed run are not cleaned up.
    """

    def __init__(
        self,
        client: docker.DockerClient,
        stop_timeout: int = STOP_TIMEOUT,
        wait_timeout: Optional[float] = WAIT_TIMEOUT,
    ):
        """Initialize the container manager.

        Args:
            client: Connected Docker client, owned by the caller
            stop_timeout: Grace period in seconds before a stop turns into a kill
            wait_timeout: Seconds to wait for a command container to exit,
                ``None`` to wait indefinitely
        """
        self.client = client
        self.stop_timeout = stop_timeout
        self.wait_timeout = wait_timeout

    async def _call(
        self,
        stage: Stage,
        func: Callable[..., Any],
        *args,
        errors: tuple = DAEMON_ERRORS,
        **kwargs,
    ) -> Any:
        """Run a blocking SDK call in the executor and tag its failures."""
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(func, *args, **kwargs))
        except errors as e:
            raise wrap_daemon_error(stage, e) from e

    @staticmethod
    def _require_image(image: str) -> None:
        if not image or not image.strip():
            raise ValidationError("image not provided")

    async def _pull_create_start(self, image: str, **create_options) -> Any:
        """Pull ``image``, create a container from it and start it."""
        logger.info(f"Pulling image {image}")
        await self._call(Stage.PULL, self.client.images.pull, image)

        name = image_short_name(image)
        logger.info(f"Creating container {name}")
        container = await self._call(
            Stage.CREATE, self.client.containers.create, image=name, **create_options
        )

        logger.info(f"Starting container {container.id}")
        await self._call(Stage.START, container.start)
        return container

    async def run_background(self, image: str) -> str:
        """Create a container from ``image`` and start it without waiting.

        Returns:
            ID of the started container
        """
        self._require_image(image)
        logger.info(f"Starting image {image}")
        container = await self._pull_create_start(image)
        return container.id

    async def run_command(self, image: str, command: Sequence[str]) -> str:
        """Run ``command`` in a new container and return what it printed.

        The container gets a pseudo-terminal. Once it has stopped running,
        its stdout log is read in full and decoded as UTF-8.
        """
        self._require_image(image)
        if not command:
            raise ValidationError("command not provided")

        container = await self._pull_create_start(image, command=list(command), tty=True)

        result = await self.wait_for_exit(container.id)
        if not result.ok:
            if isinstance(result.error, DockrunException):
                raise ContainerOperationError(
                    Stage.WAIT, result.error, error_type=result.error.error_type
                ) from result.error
            raise wrap_daemon_error(Stage.WAIT, result.error) from result.error

        return await self.read_output(container.id)

    async def wait_for_exit(self, container_id: str) -> WaitResult:
        """Block until the container is no longer running.

        Never raises for daemon failures; they are returned in the result
        together with timeouts.
        """
        logger.info(f"Waiting for container {container_id}")
        loop = asyncio.get_event_loop()
        wait = functools.partial(
            self.client.api.wait,
            container_id,
            timeout=self.wait_timeout,
            condition="not-running",
        )
        try:
            response = await asyncio.wait_for(
                loop.run_in_executor(None, wait), timeout=self.wait_timeout
            )
        except (asyncio.TimeoutError, Timeout):
            return WaitResult(error=WaitTimeoutError(self.wait_timeout, container_id))
        except DAEMON_ERRORS as e:
            return WaitResult(error=e)

        status_code = (response or {}).get("StatusCode")
        logger.info(f"Container {container_id} exited", status_code=status_code)
        return WaitResult(status_code=status_code)

    async def read_output(self, container_id: str) -> str:
        """Read the full stdout log of a stopped container."""
        stream = await self._call(
            Stage.LOGS,
            self.client.api.logs,
            container_id,
            stdout=True,
            stderr=False,
            stream=True,
            follow=False,
        )
        try:
            chunks = await self._call(Stage.READ, list, stream, errors=STREAM_ERRORS)
        finally:
            self._close_stream(stream)
        return b"".join(chunks).decode("utf-8", errors="replace")

    @staticmethod
    def _close_stream(stream: Any) -> None:
        try:
            stream.close()
        except Exception as e:
            logger.warning(f"Error on closing container logs output: {e}")

    async def stop_container(self, container_id: str) -> None:
        """Stop a container, killing it after the grace period."""
        logger.info(f"Stopping container {container_id}")
        await self._call(
            Stage.STOP, self.client.api.stop, container_id, timeout=self.stop_timeout
        )

    async def list_containers(self) -> List[ContainerSummary]:
        """List running containers in the order the daemon returns them."""
        containers = await self._call(Stage.LIST, self.client.containers.list, sparse=True)
        return [ContainerSummary.from_container(c) for c in containers]
