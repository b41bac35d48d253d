"""Unit tests for AcceptInviteUseCase."""

import pytest

from tenantlink.adapter.ratelimit import SlidingWindowRateLimiter
from tenantlink.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteUseCase,
    ValidateInviteRequest,
    ValidateInviteUseCase,
)
from tenantlink.config import InviteSettings, Settings
from tenantlink.domain.error import RateLimitExceededError
from tenantlink.domain.repository import TenantPropertyLinkRepository
from tenantlink.domain.service import InviteService, RateLimiter
from tenantlink.domain.value import AcceptStatus
from tests.conftest import create_test_invite, seed_profile
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestAcceptInviteUseCase:
    """Tests for AcceptInviteUseCase."""

    @pytest.mark.asyncio
    async def test_accept_then_validate_again(self, unit_env):
        """After tenant A redeems a single-use token, tenant B is turned away."""
        # Arrange
        accept = await unit_env.get(AcceptInviteUseCase)
        validate = await unit_env.get(ValidateInviteUseCase)
        link_repo = await unit_env.get(TenantPropertyLinkRepository)
        created, _, property_id = await create_test_invite(unit_env)
        tenant_a = await seed_profile(unit_env)
        tenant_b = await seed_profile(unit_env)
        token = created.token.root

        # Act
        before = await validate.execute(ValidateInviteRequest(token=token))
        first = await accept.execute(
            AcceptInviteRequest(token=token, tenant_id=str(tenant_a))
        )
        after = await validate.execute(ValidateInviteRequest(token=token))
        second = await accept.execute(
            AcceptInviteRequest(token=token, tenant_id=str(tenant_b))
        )

        # Assert
        assert before.valid is True
        assert first.status == AcceptStatus.OK
        assert first.property.property_id == str(property_id)
        assert after.valid is False
        assert second.status == AcceptStatus.INVALID
        assert second.property is None
        assert await link_repo.find(tenant_b, property_id) is None

    @pytest.mark.asyncio
    async def test_already_linked_returns_property(self, unit_env):
        accept = await unit_env.get(AcceptInviteUseCase)
        created, _, property_id = await create_test_invite(unit_env)
        tenant_id = await seed_profile(unit_env)
        request = AcceptInviteRequest(token=created.token.root, tenant_id=str(tenant_id))

        await accept.execute(request)
        response = await accept.execute(request)

        assert response.status == AcceptStatus.ALREADY_LINKED
        assert response.property.property_id == str(property_id)

    @pytest.mark.asyncio
    async def test_capacity_disclosed_when_enabled(self, unit_env):
        created, _, _ = await create_test_invite(unit_env)
        tenant_a = await seed_profile(unit_env)
        tenant_b = await seed_profile(unit_env)
        accept = AcceptInviteUseCase(
            invite_service=await unit_env.get(InviteService),
            rate_limiter=await unit_env.get(RateLimiter),
            settings=Settings(invites=InviteSettings(disclose_capacity_reached=True)),
        )

        await accept.execute(
            AcceptInviteRequest(token=created.token.root, tenant_id=str(tenant_a))
        )
        response = await accept.execute(
            AcceptInviteRequest(token=created.token.root, tenant_id=str(tenant_b))
        )

        assert response.status == AcceptStatus.CAPACITY_REACHED

    @pytest.mark.asyncio
    async def test_throttled_per_tenant(self, unit_env):
        tenant_a = await seed_profile(unit_env)
        tenant_b = await seed_profile(unit_env)
        accept = AcceptInviteUseCase(
            invite_service=await unit_env.get(InviteService),
            rate_limiter=SlidingWindowRateLimiter(
                max_attempts=2, window_seconds=60, stale_after_seconds=3600
            ),
            settings=Settings(),
        )

        for _ in range(2):
            await accept.execute(
                AcceptInviteRequest(token="zzzzzzzzzzzz", tenant_id=str(tenant_a))
            )

        with pytest.raises(RateLimitExceededError):
            await accept.execute(
                AcceptInviteRequest(token="zzzzzzzzzzzz", tenant_id=str(tenant_a))
            )

        response = await accept.execute(
            AcceptInviteRequest(token="zzzzzzzzzzzz", tenant_id=str(tenant_b))
        )
        assert response.status == AcceptStatus.INVALID
