"""Domain layer DI providers."""

from dishka import Scope, provide

from tenantlink.config import AuthSettings, InviteSettings
from tenantlink.domain.repository import (
    InviteRepository,
    ProfileRepository,
    PropertyRepository,
    TenantPropertyLinkRepository,
    UnitOfWork,
)
from tenantlink.domain.service import (
    InviteAcceptor,
    InviteService,
    InviteValidator,
    JWTService,
    RateLimiter,
    TokenGenerator,
    TokenHasher,
)
from tenantlink.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services touching repositories are REQUEST-scoped to align with the
    session lifecycle. Stateless token helpers live for the whole app.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide(scope=Scope.APP)
    def get_token_generator(self) -> TokenGenerator:
        """Provide token generator."""
        return TokenGenerator()

    @provide(scope=Scope.APP)
    def get_token_hasher(self, invite_settings: InviteSettings) -> TokenHasher:
        """Provide keyed token hasher."""
        return TokenHasher(key=invite_settings.token_hash_key)

    @provide
    def get_invite_validator(
        self,
        invite_repository: InviteRepository,
        property_repository: PropertyRepository,
        token_hasher: TokenHasher,
        rate_limiter: RateLimiter,
    ) -> InviteValidator:
        """Provide invite validator."""
        return InviteValidator(
            invite_repository=invite_repository,
            property_repository=property_repository,
            token_hasher=token_hasher,
            rate_limiter=rate_limiter,
        )

    @provide
    def get_invite_acceptor(
        self,
        unit_of_work: UnitOfWork,
        invite_repository: InviteRepository,
        link_repository: TenantPropertyLinkRepository,
        property_repository: PropertyRepository,
        profile_repository: ProfileRepository,
        token_hasher: TokenHasher,
        invite_settings: InviteSettings,
    ) -> InviteAcceptor:
        """Provide invite acceptor."""
        return InviteAcceptor(
            unit_of_work=unit_of_work,
            invite_repository=invite_repository,
            link_repository=link_repository,
            property_repository=property_repository,
            profile_repository=profile_repository,
            token_hasher=token_hasher,
            lock_timeout_seconds=invite_settings.lock_timeout_seconds,
        )

    @provide
    def get_invite_service(
        self,
        invite_repository: InviteRepository,
        property_repository: PropertyRepository,
        token_generator: TokenGenerator,
        token_hasher: TokenHasher,
        validator: InviteValidator,
        acceptor: InviteAcceptor,
        rate_limiter: RateLimiter,
        invite_settings: InviteSettings,
    ) -> InviteService:
        """Provide invite domain service."""
        return InviteService(
            invite_repository=invite_repository,
            property_repository=property_repository,
            token_generator=token_generator,
            token_hasher=token_hasher,
            validator=validator,
            acceptor=acceptor,
            rate_limiter=rate_limiter,
            settings=invite_settings,
        )
