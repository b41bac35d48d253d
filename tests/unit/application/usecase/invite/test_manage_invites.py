"""Unit tests for the owner-facing invite use cases."""

from uuid import uuid4

import pytest

from tenantlink.application.usecase.invite import (
    CleanupExpiredInvitesRequest,
    CleanupExpiredInvitesUseCase,
    CreateInviteRequest,
    CreateInviteUseCase,
    ListPropertyInvitesRequest,
    ListPropertyInvitesUseCase,
    RevokeInviteRequest,
    RevokeInviteUseCase,
)
from tenantlink.domain.error import NotAuthorizedError
from tenantlink.domain.value import DeliveryMethod, InviteState
from tests.conftest import seed_property
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateInviteUseCase:
    """Tests for CreateInviteUseCase."""

    @pytest.mark.asyncio
    async def test_create_returns_token_once(self, unit_env):
        # Arrange
        create = await unit_env.get(CreateInviteUseCase)
        list_invites = await unit_env.get(ListPropertyInvitesUseCase)
        owner_id, property_id = await seed_property(unit_env)

        # Act
        response = await create.execute(
            CreateInviteRequest(
                owner_id=str(owner_id),
                property_id=str(property_id),
                delivery_method=DeliveryMethod.CODE,
                max_uses=4,
            )
        )
        listing = await list_invites.execute(
            ListPropertyInvitesRequest(
                property_id=str(property_id), user_id=str(owner_id)
            )
        )

        # Assert
        assert len(response.token) == 12
        assert response.token.isalnum()
        [item] = listing.invites
        assert item.invite_id == response.invite_id
        assert item.max_uses == 4
        assert item.state == InviteState.ACTIVE
        assert response.token not in listing.model_dump_json()

    @pytest.mark.asyncio
    async def test_create_by_non_owner(self, unit_env):
        create = await unit_env.get(CreateInviteUseCase)
        _, property_id = await seed_property(unit_env)

        with pytest.raises(NotAuthorizedError):
            await create.execute(
                CreateInviteRequest(
                    owner_id=str(uuid4()),
                    property_id=str(property_id),
                    delivery_method=DeliveryMethod.CODE,
                )
            )


class TestRevokeInviteUseCase:
    """Tests for RevokeInviteUseCase."""

    @pytest.mark.asyncio
    async def test_revoked_invite_listed_as_revoked(self, unit_env):
        create = await unit_env.get(CreateInviteUseCase)
        revoke = await unit_env.get(RevokeInviteUseCase)
        list_invites = await unit_env.get(ListPropertyInvitesUseCase)
        owner_id, property_id = await seed_property(unit_env)
        created = await create.execute(
            CreateInviteRequest(
                owner_id=str(owner_id),
                property_id=str(property_id),
                delivery_method=DeliveryMethod.CODE,
            )
        )

        first = await revoke.execute(
            RevokeInviteRequest(invite_id=created.invite_id, user_id=str(owner_id))
        )
        second = await revoke.execute(
            RevokeInviteRequest(invite_id=created.invite_id, user_id=str(owner_id))
        )

        assert first == second
        listing = await list_invites.execute(
            ListPropertyInvitesRequest(
                property_id=str(property_id), user_id=str(owner_id)
            )
        )
        assert listing.invites[0].state == InviteState.REVOKED


class TestCleanupExpiredInvitesUseCase:
    """Tests for CleanupExpiredInvitesUseCase."""

    @pytest.mark.asyncio
    async def test_empty_sweep(self, unit_env):
        cleanup = await unit_env.get(CleanupExpiredInvitesUseCase)

        response = await cleanup.execute(CleanupExpiredInvitesRequest())

        assert response.soft_deleted == 0
        assert response.purged == 0
        assert response.rate_limit_entries_pruned == 0
