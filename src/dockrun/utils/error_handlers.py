"""Translation of Docker SDK errors into dockrun exceptions."""

import structlog
from docker.errors import APIError, DockerException, ImageNotFound, NotFound
from requests.exceptions import RequestException
from urllib3.exceptions import HTTPError as TransportError

from ..models.errors import ContainerOperationError, Stage

logger = structlog.get_logger(__name__)

# Exceptions raised by the SDK for daemon-side or transport failures.
DAEMON_ERRORS = (DockerException, RequestException)

# Reading a raw log stream can also fail below the requests layer.
STREAM_ERRORS = DAEMON_ERRORS + (TransportError, OSError)


def describe_docker_error(error: Exception) -> str:
    """Return a short human-readable description of an SDK error."""
    if isinstance(error, ImageNotFound):
        return f"image not found: {error.explanation or error}"
    if isinstance(error, NotFound):
        return f"not found: {error.explanation or error}"
    if isinstance(error, APIError):
        if error.explanation:
            return f"daemon returned {error.status_code}: {error.explanation}"
        return str(error)
    return str(error) or error.__class__.__name__


def wrap_daemon_error(stage: Stage, error: Exception) -> ContainerOperationError:
    """Wrap an SDK error with the stage it happened in.

    Callers raise the result ``from`` the original error.
    """
    description = describe_docker_error(error)
    logger.error(
        "Docker operation failed",
        stage=stage.value,
        error_class=error.__class__.__name__,
        error=description,
    )
    return ContainerOperationError(stage, error, description=description)
