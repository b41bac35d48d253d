"""Domain services."""

from .base import Service
from .invite_acceptor import InviteAcceptor
from .invite_service import InviteService
from .invite_validator import InviteValidator
from .jwt_service import JWTService
from .rate_limiter import RateLimiter
from .token_generator import TokenGenerator
from .token_hasher import TokenHasher

__all__ = [
    "InviteAcceptor",
    "InviteService",
    "InviteValidator",
    "JWTService",
    "RateLimiter",
    "Service",
    "TokenGenerator",
    "TokenHasher",
]
