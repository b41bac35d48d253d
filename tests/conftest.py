"""Test configuration and shared helpers."""

from datetime import timedelta
from uuid import uuid4

from dishka import AsyncContainer

from tenantlink.domain.model import CreatedInvite, Profile, Property
from tenantlink.domain.repository import (
    InviteRepository,
    ProfileRepository,
    PropertyRepository,
)
from tenantlink.domain.service import InviteService
from tenantlink.domain.value import DeliveryMethod, InviteId, PropertyId, UserId, UserRole
from tenantlink.util.time import utcnow


async def seed_property(
    container: AsyncContainer,
    name: str = "12 Harbour View",
    owner_display_name: str | None = "Jane Landlord",
) -> tuple[UserId, PropertyId]:
    """Create an owner profile and a property owned by them.

    Args:
        container: Request-scoped container to write through
        name: Property name
        owner_display_name: Display name shown to redeemers

    Returns:
        (owner_id, property_id)
    """
    owner_id = UserId(uuid4())
    property_id = PropertyId(uuid4())

    profile_repo = await container.get(ProfileRepository)
    property_repo = await container.get(PropertyRepository)

    await profile_repo.save(
        Profile(id=owner_id, display_name=owner_display_name, role=UserRole.LANDLORD)
    )
    await property_repo.save(
        Property(id=property_id, owner_id=owner_id, name=name, address="Cork")
    )
    return owner_id, property_id


async def seed_profile(
    container: AsyncContainer, role: UserRole | None = None
) -> UserId:
    """Create a profile, with no role unless one is given.

    Returns:
        The new user's id
    """
    user_id = UserId(uuid4())
    profile_repo = await container.get(ProfileRepository)
    await profile_repo.save(Profile(id=user_id, role=role))
    return user_id


async def create_test_invite(
    container: AsyncContainer,
    delivery_method: DeliveryMethod = DeliveryMethod.CODE,
    intended_email: str | None = None,
    max_uses: int | None = None,
) -> tuple[CreatedInvite, UserId, PropertyId]:
    """Seed a property and create an invite for it through InviteService.

    Returns:
        (created invite with plaintext token, owner_id, property_id)
    """
    owner_id, property_id = await seed_property(container)
    invite_service = await container.get(InviteService)
    created = await invite_service.create_invite(
        owner_id,
        property_id,
        delivery_method,
        intended_email=intended_email,
        max_uses=max_uses,
    )
    return created, owner_id, property_id


async def expire_invite(container: AsyncContainer, invite_id: InviteId) -> None:
    """Move an in-memory invite's expiry into the past."""
    invite_repo = await container.get(InviteRepository)
    invite = await invite_repo.find_by_id(invite_id)
    invite_repo.session.put(
        invite_repo.session.database.invites,
        invite_id,
        invite.model_copy(update={"expires_at": utcnow() - timedelta(seconds=1)}),
    )
