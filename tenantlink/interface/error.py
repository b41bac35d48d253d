"""Interface layer errors and HTTP mapping of domain errors."""

from fastapi import HTTPException, status

from tenantlink.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitExceededError,
    StoreUnavailableError,
    TokenGenerationError,
    ValidationError,
)

# Suggested client backoff for transient store failures
RETRY_AFTER_UNAVAILABLE_SECONDS = 1


def service_unavailable() -> HTTPException:
    """503 telling the client to retry shortly."""
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Service temporarily unavailable, please retry",
        headers={"Retry-After": str(RETRY_AFTER_UNAVAILABLE_SECONDS)},
    )


def to_http_exception(error: DomainError) -> HTTPException:
    """Map a domain error to the HTTP response a client sees.

    Args:
        error: Domain error raised by a use case

    Returns:
        HTTPException to raise from the route
    """
    if isinstance(error, NotAuthorizedError):
        return HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized"
        )
    if isinstance(error, NotFoundError):
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"{error.resource} not found"
        )
    if isinstance(error, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    if isinstance(error, RateLimitExceededError):
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Too many attempts",
            headers={"Retry-After": str(error.retry_after_seconds)},
        )
    if isinstance(error, (StoreUnavailableError, TokenGenerationError)):
        return service_unavailable()
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal error"
    )
