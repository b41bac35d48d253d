"""Unit tests for HTTP mapping of domain errors."""

import pytest

from tenantlink.domain.error import (
    DomainError,
    LockTimeoutError,
    NotAuthorizedError,
    NotFoundError,
    RateLimitExceededError,
    StoreUnavailableError,
    TokenGenerationError,
    ValidationError,
)
from tenantlink.interface.error import to_http_exception


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (NotAuthorizedError("property", "p1", "u1"), 403),
        (NotFoundError("Invite", "i1"), 404),
        (ValidationError("bad input"), 400),
        (RateLimitExceededError(7), 429),
        (StoreUnavailableError("down"), 503),
        (LockTimeoutError("busy"), 503),
        (TokenGenerationError("exhausted"), 503),
        (DomainError("unexpected"), 500),
    ],
)
def test_status_codes(error, status_code):
    assert to_http_exception(error).status_code == status_code


def test_rate_limit_sets_retry_after():
    exc = to_http_exception(RateLimitExceededError(7))

    assert exc.headers == {"Retry-After": "7"}


def test_unavailable_sets_retry_after():
    exc = to_http_exception(StoreUnavailableError("down"))

    assert "Retry-After" in exc.headers


def test_forbidden_hides_identifiers():
    exc = to_http_exception(NotAuthorizedError("property", "p1", "u1"))

    assert "u1" not in exc.detail
    assert "p1" not in exc.detail
