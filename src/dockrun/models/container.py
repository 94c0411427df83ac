"""Data models for containers reported by the daemon."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ContainerSummary:
    """A container as returned by the daemon's list call."""

    id: str
    image: Optional[str] = None
    status: Optional[str] = None

    @classmethod
    def from_container(cls, container: Any) -> "ContainerSummary":
        """Build a summary from a docker SDK container object."""
        attrs = getattr(container, "attrs", None) or {}
        return cls(
            id=container.id,
            image=attrs.get("Image"),
            status=attrs.get("State"),
        )


@dataclass
class WaitResult:
    """Outcome of waiting for a container to stop running.

    Either ``status_code`` holds the terminal exit status reported by the
    daemon, or ``error`` holds the failure that ended the wait.
    """

    status_code: Optional[int] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None
