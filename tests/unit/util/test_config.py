"""Unit tests for settings validation."""

import pytest
from pydantic import SecretStr, ValidationError

from tenantlink.config import (
    MAX_USES_CEILING,
    AuthSettings,
    InviteSettings,
    Settings,
)
from tenantlink.util.error import ConfigurationError


class TestPlaceholderSecrets:
    """Deployed environments must not run on development secrets."""

    def test_development_allows_defaults(self):
        settings = Settings(environment="development")

        assert settings.invites.ttl_hours == 48

    def test_production_rejects_default_jwt_secret(self):
        with pytest.raises(ConfigurationError, match="AUTH__JWT_SECRET"):
            Settings(
                environment="production",
                invites=InviteSettings(token_hash_key=SecretStr("k" * 32)),
            )

    def test_production_rejects_default_hash_key(self):
        with pytest.raises(ConfigurationError, match="INVITES__TOKEN_HASH_KEY"):
            Settings(
                environment="production",
                auth=AuthSettings(jwt_secret="s" * 32),
            )

    def test_production_with_real_secrets(self):
        settings = Settings(
            environment="production",
            auth=AuthSettings(jwt_secret="s" * 32),
            invites=InviteSettings(token_hash_key=SecretStr("k" * 32)),
        )

        assert settings.api.protocol == "https"


class TestInviteLimits:
    """Use limits can't outgrow what the invites table accepts."""

    def test_default_limit_is_table_ceiling(self):
        assert InviteSettings().max_uses_limit == MAX_USES_CEILING

    def test_limit_above_ceiling_rejected(self):
        with pytest.raises(ValidationError):
            InviteSettings(max_uses_limit=MAX_USES_CEILING + 1)

    def test_lower_limit_allowed(self):
        assert InviteSettings(max_uses_limit=10).max_uses_limit == 10
