"""Unit tests for ValidateInviteUseCase."""

import pytest

from tenantlink.application.usecase.invite import (
    ValidateInviteRequest,
    ValidateInviteUseCase,
)
from tenantlink.domain.error import RateLimitExceededError
from tenantlink.domain.value import DeliveryMethod
from tests.conftest import create_test_invite, expire_invite
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestValidateInviteUseCase:
    """Tests for ValidateInviteUseCase."""

    @pytest.mark.asyncio
    async def test_valid_token(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ValidateInviteUseCase)
        created, _, property_id = await create_test_invite(
            unit_env,
            delivery_method=DeliveryMethod.EMAIL,
            intended_email="tenant@example.com",
        )

        # Act
        response = await use_case.execute(
            ValidateInviteRequest(token=created.token.root, scope="192.0.2.1")
        )

        # Assert
        assert response.valid is True
        assert response.property.property_id == str(property_id)
        assert response.property.name == "12 Harbour View"
        assert response.intended_email == "tenant@example.com"
        assert response.max_uses == 1
        assert response.use_count == 0

    @pytest.mark.asyncio
    async def test_invalid_token_reveals_nothing(self, unit_env):
        """Unknown and expired tokens produce byte-identical responses."""
        use_case = await unit_env.get(ValidateInviteUseCase)
        created, _, _ = await create_test_invite(unit_env)
        await expire_invite(unit_env, created.invite_id)

        expired = await use_case.execute(ValidateInviteRequest(token=created.token.root))
        unknown = await use_case.execute(ValidateInviteRequest(token="not a token"))

        assert expired.model_dump(exclude_none=True) == {"valid": False}
        assert unknown.model_dump_json() == expired.model_dump_json()

    @pytest.mark.asyncio
    async def test_throttled_raises(self, unit_env):
        """The default budget is 20 lookups per window and scope."""
        use_case = await unit_env.get(ValidateInviteUseCase)
        for _ in range(20):
            await use_case.execute(
                ValidateInviteRequest(token="zzzzzzzzzzzz", scope="198.51.100.7")
            )

        with pytest.raises(RateLimitExceededError) as exc_info:
            await use_case.execute(
                ValidateInviteRequest(token="zzzzzzzzzzzz", scope="198.51.100.7")
            )

        assert exc_info.value.retry_after_seconds >= 1
