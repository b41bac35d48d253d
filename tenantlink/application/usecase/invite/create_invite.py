"""Create invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from tenantlink.application.usecase.base import BaseUseCase
from tenantlink.domain.service import InviteService
from tenantlink.domain.value import DeliveryMethod, PropertyId, UserId


class CreateInviteRequest(BaseModel):
    """Request to create an invite."""

    owner_id: str
    property_id: str
    delivery_method: DeliveryMethod
    intended_email: str | None = None
    max_uses: int | None = None


class CreateInviteResponse(BaseModel):
    """Response after creating an invite.

    The only response that ever carries a plaintext token.
    """

    invite_id: str
    token: str
    expires_at: datetime


class CreateInviteUseCase(BaseUseCase):
    """Use case for an owner creating an invite for a property."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: CreateInviteRequest) -> CreateInviteResponse:
        """Create an invite.

        Args:
            request: Creation request

        Returns:
            Invite id, token and expiry

        Raises:
            NotAuthorizedError: If the caller does not own the property
            ValidationError: If the request is invalid
            TokenGenerationError: If no unique token could be stored
        """
        with logfire.span(
            "create_invite.execute",
            owner_id=request.owner_id,
            property_id=request.property_id,
        ):
            created = await self.invite_service.create_invite(
                owner_id=UserId(UUID(request.owner_id)),
                property_id=PropertyId(UUID(request.property_id)),
                delivery_method=request.delivery_method,
                intended_email=request.intended_email,
                max_uses=request.max_uses,
            )
            return CreateInviteResponse(
                invite_id=str(created.invite_id),
                token=created.token.root,
                expires_at=created.expires_at,
            )
