"""Validate invite use case."""

import logfire
from pydantic import BaseModel

from tenantlink.application.usecase.base import BaseUseCase
from tenantlink.application.usecase.invite.common import PropertyItem
from tenantlink.domain.error import RateLimitExceededError
from tenantlink.domain.service import InviteService
from tenantlink.domain.value import ValidationStatus


class ValidateInviteRequest(BaseModel):
    """Validate invite request."""

    token: str
    scope: str | None = None  # Rate-limit scope, the caller's IP


class ValidateInviteResponse(BaseModel):
    """Validate invite response.

    An invalid token always produces ``{"valid": false}`` and nothing else.
    """

    valid: bool
    property: PropertyItem | None = None
    intended_email: str | None = None
    max_uses: int | None = None
    use_count: int | None = None


class ValidateInviteUseCase(BaseUseCase):
    """Use case for checking a token before sign-in.

    Lets the frontend show what a token grants without authenticating.
    """

    def __init__(self, invite_service: InviteService) -> None:
        """Initialize validate invite use case.

        Args:
            invite_service: Invite domain service
        """
        self.invite_service = invite_service

    async def execute(self, request: ValidateInviteRequest) -> ValidateInviteResponse:
        """Validate an invite token.

        Args:
            request: Validation request with token

        Returns:
            Validation response

        Raises:
            RateLimitExceededError: If the scope ran out of attempts
        """
        with logfire.span("validate_invite.execute", scope=request.scope):
            result = await self.invite_service.validate_invite(
                request.token, request.scope
            )

            if result.status == ValidationStatus.THROTTLED:
                raise RateLimitExceededError(result.retry_after_seconds or 1)

            if result.status != ValidationStatus.VALID:
                return ValidateInviteResponse(valid=False)

            return ValidateInviteResponse(
                valid=True,
                property=PropertyItem.from_summary(result.property),
                intended_email=result.intended_email,
                max_uses=result.max_uses,
                use_count=result.use_count,
            )
