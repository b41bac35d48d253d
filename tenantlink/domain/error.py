"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user acts on a property or invite they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not authorized to manage {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class RateLimitExceededError(DomainError):
    """Raised when a caller exceeds the attempt budget for its scope."""

    def __init__(self, retry_after_seconds: int):
        self.retry_after_seconds = retry_after_seconds
        super().__init__(f"Too many attempts, retry after {retry_after_seconds}s")


class StoreUnavailableError(DomainError):
    """Raised when the data store cannot serve a request right now.

    Always transient: callers may retry with backoff.
    """

    pass


class LockTimeoutError(StoreUnavailableError):
    """Raised when a row lock is not granted within the configured timeout."""

    pass


class DuplicateTokenHashError(DomainError):
    """Raised when an active invite already uses the same token hash."""

    pass


class TokenGenerationError(DomainError):
    """Raised when no unique token could be generated."""

    pass
