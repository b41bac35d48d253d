"""Infrastructure DI providers."""

from tenantlink.util.di.infrastructure.persistence import (
    PersistenceProvider,
    ProdPersistenceProvider,
)
from tenantlink.util.di.infrastructure.ratelimit import (
    ProdRateLimitProvider,
    RateLimitProvider,
)

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdRateLimitProvider",
    "RateLimitProvider",
]
