"""Error taxonomy for the task client.

Adapters raise these; the task store catches them and turns them into a
user-visible message.
"""


class TaskClientError(Exception):
    """Base class for every failure the task client knows how to report."""

    pass


class ConfigurationError(TaskClientError):
    """Raised when no task server endpoint is configured."""

    pass


class TransportFailure(TaskClientError):
    """Raised when the task server cannot be reached."""

    def __init__(self, message: str = "Cannot reach the task server. Check that it is running."):
        super().__init__(message)


class FetchFailure(TaskClientError):
    """Raised when listing tasks returns a non-success status."""

    def __init__(self, status: int):
        self.status = status
        super().__init__(f"Failed to load tasks. ({status})")


class RemoteFailure(TaskClientError):
    """Raised when the server rejects a write."""

    def __init__(self, message: str, status: int | None = None):
        self.message = message
        self.status = status
        super().__init__(message)


class MalformedResponse(TaskClientError):
    """Raised when a success response does not have the expected shape."""

    def __init__(self, preview: str):
        self.preview = preview
        super().__init__(f"Unexpected response from server. (received: {preview})")


class ValidationFailure(TaskClientError):
    """Raised by client-side guards, e.g. an empty title."""

    pass


class InvalidDeadline(TaskClientError):
    """Raised when a deadline value cannot be parsed."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid deadline: {value!r}")
