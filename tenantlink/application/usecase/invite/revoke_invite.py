"""Revoke invite use case."""

from datetime import datetime
from uuid import UUID

import logfire
from pydantic import BaseModel

from tenantlink.application.usecase.base import BaseUseCase
from tenantlink.domain.service import InviteService
from tenantlink.domain.value import InviteId, UserId


class RevokeInviteRequest(BaseModel):
    """Revoke invite request."""

    invite_id: str
    user_id: str


class RevokeInviteResponse(BaseModel):
    """Revoke invite response."""

    invite_id: str
    revoked_at: datetime


class RevokeInviteUseCase(BaseUseCase):
    """Use case for an owner withdrawing an invite."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: RevokeInviteRequest) -> RevokeInviteResponse:
        """Revoke an invite. Repeating the call returns the original revocation.

        Raises:
            NotFoundError: If the invite doesn't exist
            NotAuthorizedError: If the caller may not manage the invite
        """
        with logfire.span(
            "revoke_invite.execute",
            invite_id=request.invite_id,
            user_id=request.user_id,
        ):
            invite = await self.invite_service.revoke_invite(
                InviteId(UUID(request.invite_id)), UserId(UUID(request.user_id))
            )
            return RevokeInviteResponse(
                invite_id=str(invite.id), revoked_at=invite.deleted_at
            )
