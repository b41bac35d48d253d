"""JWT token domain service."""

from uuid import UUID

import logfire

from tenantlink.config import AuthSettings
from tenantlink.domain.value import UserId
from tenantlink.util.jwt import JWTError, TokenPayload, verify_token

from .base import Service


class JWTService(Service):
    """Checks session tokens minted by the identity provider."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def verify_token(self, token: str) -> TokenPayload:
        """Verify JWT token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("JWT token verification failed", error=str(e))
                raise

    def authenticate(self, token: str | None) -> UserId:
        """Resolve the calling user from a session token.

        Args:
            token: Value of the auth cookie, if any

        Returns:
            The caller's user id

        Raises:
            JWTError: If the token is missing, invalid, expired, or its
                subject is not a user id
        """
        if not token:
            raise JWTError("Not authenticated")

        payload = self.verify_token(token)
        try:
            return UserId(UUID(payload.user_id))
        except ValueError as e:
            raise JWTError("Token subject is not a user id") from e
