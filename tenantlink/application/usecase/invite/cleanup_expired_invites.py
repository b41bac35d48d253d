"""Cleanup expired invites use case."""

from datetime import datetime

import logfire
from pydantic import BaseModel

from tenantlink.application.usecase.base import BaseUseCase
from tenantlink.domain.service import InviteService


class CleanupExpiredInvitesRequest(BaseModel):
    """Cleanup request. The sweep takes no parameters."""


class CleanupExpiredInvitesResponse(BaseModel):
    """Counts from one sweep."""

    soft_deleted: int
    purged: int
    rate_limit_entries_pruned: int
    cleaned_at: datetime


class CleanupExpiredInvitesUseCase(BaseUseCase):
    """Use case run by the scheduler to sweep stale invites."""

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(
        self, request: CleanupExpiredInvitesRequest
    ) -> CleanupExpiredInvitesResponse:
        """Run one sweep."""
        with logfire.span("cleanup_expired_invites.execute"):
            result = await self.invite_service.cleanup_expired_invites()
            return CleanupExpiredInvitesResponse(**result.model_dump())
