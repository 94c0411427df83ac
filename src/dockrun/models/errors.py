"""Error types and exception classes for dockrun."""

from enum import Enum
from typing import Optional


class ErrorType(str, Enum):
    """Error type enumeration."""

    VALIDATION = "validation"
    UNKNOWN_COMMAND = "unknown_command"
    CONNECTION = "connection"
    DAEMON = "daemon"
    TIMEOUT = "timeout"


class Stage(str, Enum):
    """Daemon interaction stage, used as the label of a wrapped error."""

    CONNECT = "create client"
    PULL = "pull image"
    CREATE = "create container"
    START = "start container"
    WAIT = "wait for container"
    LOGS = "read container logs"
    READ = "read command output"
    STOP = "stop container"
    LIST = "list containers"


class DockrunException(Exception):
    """Base exception for dockrun."""

    def __init__(
        self,
        message: str,
        error_type: ErrorType = ErrorType.DAEMON,
        exit_code: int = 1,
    ):
        self.message = message
        self.error_type = error_type
        self.exit_code = exit_code
        super().__init__(message)

    def context(self, label: str) -> str:
        """Return the message prefixed with a caller-supplied context label."""
        return f"{label}: {self.message}"


class ValidationError(DockrunException):
    """Invalid command-line input."""

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message=message, error_type=ErrorType.VALIDATION, exit_code=2)


class UnknownCommandError(DockrunException):
    """Mode not recognised by the dispatcher."""

    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(
            message=f"unknown mode {mode!r} (expected run, stop or list)",
            error_type=ErrorType.UNKNOWN_COMMAND,
            exit_code=2,
        )


class ContainerOperationError(DockrunException):
    """A daemon call failed at a given stage."""

    def __init__(
        self,
        stage: Stage,
        cause: Exception,
        error_type: ErrorType = ErrorType.DAEMON,
        description: Optional[str] = None,
    ):
        self.stage = stage
        self.cause = cause
        super().__init__(
            message=f"{stage.value}: {description or cause}", error_type=error_type
        )


class DaemonConnectionError(ContainerOperationError):
    """The Docker client could not be created or could not reach the daemon."""

    def __init__(self, cause: Exception):
        super().__init__(Stage.CONNECT, cause, error_type=ErrorType.CONNECTION)


class WaitTimeoutError(DockrunException):
    """Container did not reach the not-running condition in time."""

    def __init__(self, timeout: Optional[float], container_id: Optional[str] = None):
        self.timeout = timeout
        self.container_id = container_id
        if timeout is None:
            limit = "before the request timed out"
        else:
            limit = f"within {timeout:g} seconds"
        message = f"container did not exit {limit}"
        if container_id:
            message = f"container {container_id[:12]} did not exit {limit}"
        super().__init__(message=message, error_type=ErrorType.TIMEOUT)
