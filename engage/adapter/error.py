"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class ApiError(AdapterError):
    """Request to the backend API failed.

    Covers HTTP error statuses as well as timeouts and unreachable hosts
    (``status_code`` is None for the latter).
    """

    def __init__(
        self, message: str, status_code: int | None = None, url: str | None = None
    ):
        self.message = message
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class MalformedResponseError(AdapterError):
    """Response body did not match any known envelope shape."""

    pass
