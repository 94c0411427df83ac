"""Unit tests for dockrun exceptions and SDK error translation."""

from docker.errors import APIError, DockerException, ImageNotFound, NotFound
from requests.exceptions import ConnectionError as RequestsConnectionError

from dockrun.models.errors import (
    ContainerOperationError,
    DaemonConnectionError,
    DockrunException,
    ErrorType,
    Stage,
    UnknownCommandError,
    ValidationError,
    WaitTimeoutError,
)
from dockrun.utils.error_handlers import (
    DAEMON_ERRORS,
    STREAM_ERRORS,
    describe_docker_error,
    wrap_daemon_error,
)


class TestExceptions:
    """Tests for exception classes."""

    def test_base_defaults(self):
        """Test the base exception defaults."""
        exc = DockrunException("something broke")
        assert exc.error_type == ErrorType.DAEMON
        assert exc.exit_code == 1
        assert str(exc) == "something broke"

    def test_context_prefix(self):
        """Test context labels are prefixed."""
        exc = DockrunException("image not provided")
        assert exc.context("run container") == "run container: image not provided"

    def test_validation_error(self):
        """Test validation errors exit with 2."""
        exc = ValidationError("image not provided")
        assert exc.error_type == ErrorType.VALIDATION
        assert exc.exit_code == 2

    def test_unknown_command_error(self):
        """Test unknown command errors keep the mode."""
        exc = UnknownCommandError("restart")
        assert exc.mode == "restart"
        assert exc.exit_code == 2
        assert "restart" in exc.message

    def test_operation_error_message(self):
        """Test stage labels lead the message."""
        cause = DockerException("boom")
        exc = ContainerOperationError(Stage.PULL, cause)
        assert exc.message == "pull image: boom"
        assert exc.stage is Stage.PULL
        assert exc.cause is cause

    def test_operation_error_description_overrides_cause(self):
        """Test an explicit description is used in the message."""
        exc = ContainerOperationError(Stage.STOP, DockerException("x"), description="not found")
        assert exc.message == "stop container: not found"

    def test_connection_error(self):
        """Test connection errors are tagged with the client stage."""
        exc = DaemonConnectionError(DockerException("socket missing"))
        assert exc.stage is Stage.CONNECT
        assert exc.error_type == ErrorType.CONNECTION
        assert exc.message == "create client: socket missing"

    def test_wait_timeout_error(self):
        """Test the timeout message uses the short container ID."""
        exc = WaitTimeoutError(30, "0123456789abcdef")
        assert exc.error_type == ErrorType.TIMEOUT
        assert exc.message == "container 0123456789ab did not exit within 30 seconds"
        assert WaitTimeoutError(1.5).message == "container did not exit within 1.5 seconds"

    def test_wait_timeout_error_without_limit(self):
        """Test an unbounded wait that timed out still has a message."""
        exc = WaitTimeoutError(None, "0123456789abcdef")

        assert exc.timeout is None
        assert exc.message == "container 0123456789ab did not exit before the request timed out"

    def test_stage_labels(self):
        """Test every stage has its wrap label."""
        assert [s.value for s in Stage] == [
            "create client",
            "pull image",
            "create container",
            "start container",
            "wait for container",
            "read container logs",
            "read command output",
            "stop container",
            "list containers",
        ]


class TestErrorTranslation:
    """Tests for SDK error translation."""

    def test_daemon_errors_cover_sdk_and_transport(self):
        """Test both SDK and requests failures are daemon errors."""
        assert isinstance(APIError("x"), DAEMON_ERRORS)
        assert isinstance(RequestsConnectionError("x"), DAEMON_ERRORS)
        assert OSError in STREAM_ERRORS

    def test_describe_image_not_found(self):
        """Test image-not-found wording."""
        assert describe_docker_error(ImageNotFound("alpine:nope")) == "image not found: alpine:nope"

    def test_describe_not_found_uses_explanation(self):
        """Test the daemon explanation is preferred."""
        error = NotFound("404", explanation="No such container: abc")
        assert describe_docker_error(error) == "not found: No such container: abc"

    def test_describe_plain_error(self):
        """Test plain exceptions fall back to str or the class name."""
        assert describe_docker_error(DockerException("bad")) == "bad"
        assert describe_docker_error(DockerException()) == "DockerException"

    def test_wrap_daemon_error(self):
        """Test wrapping keeps the original error as the cause."""
        error = APIError("conflict")
        wrapped = wrap_daemon_error(Stage.CREATE, error)
        assert isinstance(wrapped, ContainerOperationError)
        assert wrapped.cause is error
        assert wrapped.message == "create container: conflict"
