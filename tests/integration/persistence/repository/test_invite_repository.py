"""Integration tests for the PostgreSQL repositories.

Requires a running postgres with migrations applied (DATABASE__URL).
Every test writes rows with fresh ids, so no cleanup is needed between runs.
"""

import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from tenantlink.domain.error import DuplicateTokenHashError
from tenantlink.domain.model import Invite, TenantPropertyLink
from tenantlink.domain.repository import (
    InviteRepository,
    ProfileRepository,
    TenantPropertyLinkRepository,
)
from tenantlink.domain.service import (
    InviteAcceptor,
    InviteService,
    TokenGenerator,
    TokenHasher,
)
from tenantlink.domain.value import (
    AcceptStatus,
    DeliveryMethod,
    InviteId,
    LinkId,
    UserRole,
    ValidationStatus,
)
from tenantlink.util.time import utcnow
from tests.conftest import create_test_invite, seed_profile, seed_property
from tests.harness import create_container_fixture, create_env_fixture

integration_env = create_env_fixture(unmock={"persistence"})
integration_container = create_container_fixture(unmock={"persistence"})


async def new_invite(env, **overrides) -> Invite:
    owner_id, property_id = await seed_property(env)
    hasher = await env.get(TokenHasher)
    now = utcnow()
    fields = {
        "id": InviteId(uuid4()),
        "property_id": property_id,
        "created_by": owner_id,
        "token_hash": hasher.hash(TokenGenerator().generate()),
        "delivery_method": DeliveryMethod.CODE,
        "created_at": now,
        "expires_at": now + timedelta(hours=48),
    }
    fields.update(overrides)
    return Invite(**fields)


class TestInviteRepositoryIntegration:
    """Tests for PostgresInviteRepository."""

    @pytest.mark.asyncio
    async def test_create_and_find_by_token_hash(self, integration_env):
        # Arrange
        invite_repo = await integration_env.get(InviteRepository)
        invite = await new_invite(integration_env, max_uses=3)

        # Act
        await invite_repo.create(invite)
        found = await invite_repo.find_by_token_hash(invite.token_hash)

        # Assert
        assert found is not None
        assert found.id == invite.id
        assert found.token_hash == invite.token_hash
        assert found.max_uses == 3
        assert found.use_count == 0
        assert found.delivery_method == DeliveryMethod.CODE

    @pytest.mark.asyncio
    async def test_duplicate_live_hash_rejected(self, integration_env):
        invite_repo = await integration_env.get(InviteRepository)
        first = await new_invite(integration_env)
        await invite_repo.create(first)

        clash = first.model_copy(update={"id": InviteId(uuid4())})

        with pytest.raises(DuplicateTokenHashError):
            await invite_repo.create(clash)

        # The session is still usable after the failed insert
        assert await invite_repo.find_by_id(first.id) is not None

    @pytest.mark.asyncio
    async def test_hash_reusable_after_soft_delete(self, integration_env):
        invite_repo = await integration_env.get(InviteRepository)
        first = await new_invite(integration_env)
        await invite_repo.create(first)
        await invite_repo.soft_delete(first.id, None, utcnow())

        second = first.model_copy(update={"id": InviteId(uuid4())})
        await invite_repo.create(second)

        found = await invite_repo.find_by_token_hash(first.token_hash)
        assert found.id == second.id

    @pytest.mark.asyncio
    async def test_record_validation_attempt(self, integration_env):
        invite_repo = await integration_env.get(InviteRepository)
        invite = await invite_repo.create(await new_invite(integration_env))

        assert await invite_repo.record_validation_attempt(invite.id, utcnow())

        found = await invite_repo.find_by_id(invite.id)
        assert found.validation_attempts == 1
        assert found.last_validation_attempt is not None

    @pytest.mark.asyncio
    async def test_mark_accepted_stops_at_max_uses(self, integration_env):
        invite_repo = await integration_env.get(InviteRepository)
        invite = await invite_repo.create(await new_invite(integration_env))
        first_tenant = await seed_profile(integration_env)
        second_tenant = await seed_profile(integration_env)

        first = await invite_repo.mark_accepted(invite.id, first_tenant, utcnow())
        second = await invite_repo.mark_accepted(invite.id, second_tenant, utcnow())

        assert first.use_count == 1
        assert first.accepted_by == first_tenant
        assert second is None

    @pytest.mark.asyncio
    async def test_soft_delete_stale_and_purge(self, integration_env):
        invite_repo = await integration_env.get(InviteRepository)
        now = utcnow()
        stale = await invite_repo.create(
            await new_invite(
                integration_env,
                created_at=now - timedelta(days=20),
                expires_at=now - timedelta(days=18),
            )
        )

        soft_deleted = await invite_repo.soft_delete_stale(now - timedelta(days=7), now)
        purged = await invite_repo.purge_deleted(now + timedelta(seconds=1))

        assert soft_deleted >= 1
        assert purged >= 1
        assert await invite_repo.find_by_id(stale.id) is None


class TestLinkAndProfileRepositoryIntegration:
    """Tests for the link and profile repositories."""

    @pytest.mark.asyncio
    async def test_create_if_absent_is_unique_per_pair(self, integration_env):
        link_repo = await integration_env.get(TenantPropertyLinkRepository)
        owner_id, property_id = await seed_property(integration_env)
        tenant_id = await seed_profile(integration_env)

        def link():
            return TenantPropertyLink(
                id=LinkId(uuid4()),
                tenant_id=tenant_id,
                property_id=property_id,
                landlord_id=owner_id,
            )

        assert await link_repo.create_if_absent(link())
        assert not await link_repo.create_if_absent(link())
        assert (await link_repo.find(tenant_id, property_id)).landlord_id == owner_id

    @pytest.mark.asyncio
    async def test_fill_role_if_empty(self, integration_env):
        profile_repo = await integration_env.get(ProfileRepository)
        blank = await seed_profile(integration_env)
        landlord = await seed_profile(integration_env, role=UserRole.LANDLORD)

        assert await profile_repo.fill_role_if_empty(blank, UserRole.TENANT)
        assert not await profile_repo.fill_role_if_empty(landlord, UserRole.TENANT)
        assert (await profile_repo.find_by_id(landlord)).role == UserRole.LANDLORD


class TestInviteFlowIntegration:
    """Validate and accept against real row locks."""

    @pytest.mark.asyncio
    async def test_validate_and_accept(self, integration_env):
        invite_service = await integration_env.get(InviteService)
        created, _, _ = await create_test_invite(integration_env)
        tenant_id = await seed_profile(integration_env)

        validation = await invite_service.validate_invite(created.token.root)
        accepted = await invite_service.accept_invite(created.token.root, tenant_id)
        repeated = await invite_service.accept_invite(created.token.root, tenant_id)

        assert validation.status == ValidationStatus.VALID
        assert accepted.status == AcceptStatus.OK
        assert repeated.status == AcceptStatus.ALREADY_LINKED

    @pytest.mark.asyncio
    async def test_concurrent_accepts_link_one_tenant(self, integration_container):
        async with integration_container() as setup:
            created, _, _ = await create_test_invite(setup)
            tenants = [await seed_profile(setup) for _ in range(10)]

        async def accept(tenant_id):
            async with integration_container() as request_container:
                acceptor = await request_container.get(InviteAcceptor)
                return await acceptor.accept(created.token.root, tenant_id)

        results = await asyncio.gather(*(accept(tenant) for tenant in tenants))

        statuses = [r.status for r in results]
        assert statuses.count(AcceptStatus.OK) == 1
        assert statuses.count(AcceptStatus.CAPACITY_REACHED) == 9

        async with integration_container() as check:
            link_repo = await check.get(TenantPropertyLinkRepository)
            assert await link_repo.count_by_invite(created.invite_id) == 1

    @pytest.mark.asyncio
    async def test_accept_is_committed_before_it_returns(self, integration_container):
        """Another session sees the link while the accepting scope is still open."""
        async with integration_container() as setup:
            created, _, property_id = await create_test_invite(setup)
            tenant_id = await seed_profile(setup)

        async with integration_container() as request_container:
            acceptor = await request_container.get(InviteAcceptor)
            result = await acceptor.accept(created.token.root, tenant_id)

            async with integration_container() as observer:
                link_repo = await observer.get(TenantPropertyLinkRepository)
                invite_repo = await observer.get(InviteRepository)
                assert result.status == AcceptStatus.OK
                assert await link_repo.find(tenant_id, property_id) is not None
                invite = await invite_repo.find_by_id(created.invite_id)
                assert invite.use_count == 1
