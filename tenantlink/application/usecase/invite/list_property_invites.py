"""List property invites use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from tenantlink.application.usecase.base import BaseUseCase
from tenantlink.domain.model import Invite
from tenantlink.domain.service import InviteService
from tenantlink.domain.value import DeliveryMethod, InviteState, PropertyId, UserId
from tenantlink.util.time import utcnow


class ListPropertyInvitesRequest(BaseModel):
    """List property invites request."""

    property_id: str
    user_id: str


class InviteItem(BaseModel):
    """Invite metadata. Tokens and hashes are never listed."""

    invite_id: str
    delivery_method: DeliveryMethod
    intended_email: str | None
    state: InviteState
    created_at: datetime
    expires_at: datetime
    accepted_at: datetime | None
    max_uses: int
    use_count: int
    validation_attempts: int

    @classmethod
    def from_invite(cls, invite: Invite, now: datetime) -> "InviteItem":
        return cls(
            invite_id=str(invite.id),
            delivery_method=invite.delivery_method,
            intended_email=invite.intended_email,
            state=invite.state(now),
            created_at=invite.created_at,
            expires_at=invite.expires_at,
            accepted_at=invite.accepted_at,
            max_uses=invite.max_uses,
            use_count=invite.use_count,
            validation_attempts=invite.validation_attempts,
        )


class ListPropertyInvitesResponse(BaseModel):
    """List property invites response."""

    invites: list[InviteItem]


class ListPropertyInvitesUseCase(BaseUseCase):
    """Use case for an owner reviewing a property's invites."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(
        self, request: ListPropertyInvitesRequest
    ) -> ListPropertyInvitesResponse:
        """List invites of a property.

        Raises:
            NotAuthorizedError: If the caller does not own the property
        """
        with logfire.span(
            "list_property_invites.execute", property_id=request.property_id
        ):
            invites = await self.invite_service.list_property_invites(
                PropertyId(UUID(request.property_id)), UserId(UUID(request.user_id))
            )
            now = utcnow()
            return ListPropertyInvitesResponse(
                invites=[InviteItem.from_invite(invite, now) for invite in invites]
            )
