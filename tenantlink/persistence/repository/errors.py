"""Translation of driver errors into domain errors."""

from sqlalchemy.exc import DBAPIError

from tenantlink.domain.error import LockTimeoutError, StoreUnavailableError

# lock_not_available
LOCK_NOT_AVAILABLE = "55P03"


def _sqlstate(error: DBAPIError) -> str | None:
    orig = error.orig
    for source in (orig, getattr(orig, "__cause__", None)):
        code = getattr(source, "sqlstate", None) or getattr(source, "pgcode", None)
        if code:
            return code
    return None


def store_error(error: Exception, operation: str) -> StoreUnavailableError:
    """Map a driver failure to the domain error callers retry on.

    Args:
        error: Exception raised by SQLAlchemy or the driver
        operation: Short name of the failed operation, for the message

    Returns:
        LockTimeoutError for lock waits that ran out, StoreUnavailableError
        otherwise
    """
    if isinstance(error, DBAPIError) and _sqlstate(error) == LOCK_NOT_AVAILABLE:
        return LockTimeoutError(f"{operation}: row lock not granted in time")
    return StoreUnavailableError(f"{operation}: {error.__class__.__name__}")
