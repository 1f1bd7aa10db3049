"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Content rejected on the client before any network call."""

    pass


class OperationFailedError(DomainError):
    """A remote operation failed.

    Transport failures (timeouts, unreachable host) and server errors
    (4xx/5xx) are surfaced identically. Retry policy belongs to the caller.
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        self.message = message
        super().__init__(f"{operation} failed: {message}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to edit content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to edit {resource} {resource_id}"
        )


class AuthenticationRequiredError(DomainError):
    """Raised when an operation needs a signed-in user and there is none."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} requires a signed-in user")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
