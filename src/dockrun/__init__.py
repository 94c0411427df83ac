"""dockrun - run, stop and list containers through the Docker daemon."""

from ._version import __version__

__all__ = ["__version__"]
