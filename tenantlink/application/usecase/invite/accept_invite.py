"""Accept invite use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel

from tenantlink.application.usecase.base import BaseUseCase
from tenantlink.application.usecase.invite.common import PropertyItem
from tenantlink.config import Settings
from tenantlink.domain.error import RateLimitExceededError
from tenantlink.domain.service import InviteService, RateLimiter
from tenantlink.domain.value import AcceptStatus, UserId


class AcceptInviteRequest(BaseModel):
    """Accept invite request."""

    token: str
    tenant_id: str


class AcceptInviteResponse(BaseModel):
    """Accept invite response."""

    status: AcceptStatus
    property: PropertyItem | None = None


class AcceptInviteUseCase(BaseUseCase):
    """Use case for an authenticated tenant redeeming a token."""

    def __init__(
        self,
        invite_service: InviteService,
        rate_limiter: RateLimiter,
        settings: Settings,
    ) -> None:
        """Initialize accept invite use case.

        Args:
            invite_service: Invite domain service
            rate_limiter: Limiter applied per tenant
            settings: Application settings
        """
        self.invite_service = invite_service
        self.rate_limiter = rate_limiter
        self.settings = settings

    async def execute(self, request: AcceptInviteRequest) -> AcceptInviteResponse:
        """Accept an invite.

        CAPACITY_REACHED is reported as INVALID unless disclosure is enabled,
        so a redeemer can't tell a used-up token from a wrong one.

        Args:
            request: Accept request with token and tenant

        Returns:
            Accept response

        Raises:
            RateLimitExceededError: If the tenant ran out of attempts
        """
        with logfire.span("accept_invite.execute", tenant_id=request.tenant_id):
            decision = await self.rate_limiter.check(
                f"accept-invite:{request.tenant_id}"
            )
            if not decision.allowed:
                logfire.warn("Invite acceptance throttled", tenant_id=request.tenant_id)
                raise RateLimitExceededError(decision.retry_after_seconds or 1)

            result = await self.invite_service.accept_invite(
                request.token, UserId(UUID(request.tenant_id))
            )

            status = result.status
            if (
                status == AcceptStatus.CAPACITY_REACHED
                and not self.settings.invites.disclose_capacity_reached
            ):
                status = AcceptStatus.INVALID

            if status in (AcceptStatus.OK, AcceptStatus.ALREADY_LINKED):
                return AcceptInviteResponse(
                    status=status, property=PropertyItem.from_summary(result.property)
                )
            return AcceptInviteResponse(status=status)
