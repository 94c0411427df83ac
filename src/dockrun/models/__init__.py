"""Data models for dockrun."""

from .container import ContainerSummary, WaitResult
from .errors import (
    ContainerOperationError,
    DaemonConnectionError,
    DockrunException,
    ErrorType,
    Stage,
    UnknownCommandError,
    ValidationError,
    WaitTimeoutError,
)

__all__ = [
    "ContainerSummary",
    "WaitResult",
    "ContainerOperationError",
    "DaemonConnectionError",
    "DockrunException",
    "ErrorType",
    "Stage",
    "UnknownCommandError",
    "ValidationError",
    "WaitTimeoutError",
]
