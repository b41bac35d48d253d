"""Application layer DI providers."""

from dishka import Scope, provide

from tenantlink.application.usecase.invite import (
    AcceptInviteUseCase,
    CleanupExpiredInvitesUseCase,
    CreateInviteUseCase,
    ListPropertyInvitesUseCase,
    RevokeInviteUseCase,
    ValidateInviteUseCase,
)
from tenantlink.config import Settings
from tenantlink.domain.service import InviteService, RateLimiter
from tenantlink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_create_invite_use_case(
        self, invite_service: InviteService
    ) -> CreateInviteUseCase:
        """Provide create invite use case."""
        return CreateInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_validate_invite_use_case(
        self, invite_service: InviteService
    ) -> ValidateInviteUseCase:
        """Provide validate invite use case."""
        return ValidateInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_accept_invite_use_case(
        self,
        invite_service: InviteService,
        rate_limiter: RateLimiter,
        settings: Settings,
    ) -> AcceptInviteUseCase:
        """Provide accept invite use case."""
        return AcceptInviteUseCase(
            invite_service=invite_service,
            rate_limiter=rate_limiter,
            settings=settings,
        )

    @provide(scope=Scope.REQUEST)
    def get_revoke_invite_use_case(
        self, invite_service: InviteService
    ) -> RevokeInviteUseCase:
        """Provide revoke invite use case."""
        return RevokeInviteUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_list_property_invites_use_case(
        self, invite_service: InviteService
    ) -> ListPropertyInvitesUseCase:
        """Provide list property invites use case."""
        return ListPropertyInvitesUseCase(invite_service=invite_service)

    @provide(scope=Scope.REQUEST)
    def get_cleanup_expired_invites_use_case(
        self, invite_service: InviteService
    ) -> CleanupExpiredInvitesUseCase:
        """Provide cleanup use case."""
        return CleanupExpiredInvitesUseCase(invite_service=invite_service)
