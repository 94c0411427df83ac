"""Pytest configuration and shared fixtures."""

import os
from unittest.mock import MagicMock

import pytest
import structlog
from docker import DockerClient
from docker.api.client import APIClient

# Pin settings that tests rely on before importing config
os.environ["DOCKRUN_DOCKER_STOP_TIMEOUT"] = "30"
os.environ["DOCKRUN_DOCKER_WAIT_TIMEOUT"] = "600"
os.environ["DOCKRUN_LOG_FORMAT"] = "console"
os.environ.pop("DOCKRUN_DOCKER_BASE_URL", None)

from dockrun.services.container import ContainerManager


@pytest.fixture(autouse=True)
def stdlib_structlog():
    """Send structlog events through stdlib logging so stdout only carries command output."""
    structlog.configure(
        processors=[structlog.processors.KeyValueRenderer()],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


CONTAINER_ID = "3f2a9c1d7e4b5a6c8d9e0f1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e"


class FakeLogStream:
    """Stand-in for the SDK's cancellable log stream."""

    def __init__(self, chunks, error=None, close_error=None):
        self.chunks = list(chunks)
        self.error = error
        self.close_error = close_error
        self.closed = False

    def __iter__(self):
        yield from self.chunks
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


@pytest.fixture
def mock_container():
    """Mock container as returned by containers.create."""
    container = MagicMock()
    container.id = CONTAINER_ID
    container.start.return_value = None
    return container


@pytest.fixture
def log_stream():
    """Log stream holding the output of ``echo hi``."""
    return FakeLogStream([b"hi\r\n"])


@pytest.fixture
def mock_docker(mock_container, log_stream):
    """Mock Docker client for testing."""
    mock_client = MagicMock(spec=DockerClient)
    # api is set per instance, so the class spec does not carry it
    mock_client.api = MagicMock(spec=APIClient)

    mock_client.images.pull.return_value = MagicMock()
    mock_client.containers.create.return_value = mock_container
    mock_client.containers.list.return_value = []
    mock_client.api.wait.return_value = {"StatusCode": 0, "Error": None}
    mock_client.api.logs.return_value = log_stream
    mock_client.api.stop.return_value = None
    mock_client.ping.return_value = True

    return mock_client


@pytest.fixture
def manager(mock_docker):
    """ContainerManager wired to the mock Docker client."""
    return ContainerManager(mock_docker, stop_timeout=30, wait_timeout=600.0)


@pytest.fixture
def listed_container():
    """Factory for sparse containers as returned by containers.list."""

    def _make(container_id, image="alpine", state="running"):
        container = MagicMock()
        container.id = container_id
        container.attrs = {"Id": container_id, "Image": image, "State": state}
        return container

    return _make


@pytest.fixture
def make_log_stream():
    """Factory for fake log streams."""
    return FakeLogStream
