"""Container management services.

- client.py: Docker client factory and initialization
- manager.py: Container lifecycle management
"""

from .client import DockerClientFactory
from .manager import ContainerManager

__all__ = ["ContainerManager", "DockerClientFactory"]
