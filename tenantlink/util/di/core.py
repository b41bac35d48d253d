"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from tenantlink.config import AuthSettings, InviteSettings, RateLimitSettings, Settings
from tenantlink.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_invite_settings(self, settings: Settings) -> InviteSettings:
        """Provide invite settings."""
        return settings.invites

    @provide(scope=Scope.APP)
    def provide_rate_limit_settings(self, settings: Settings) -> RateLimitSettings:
        """Provide rate limit settings."""
        return settings.rate_limit
