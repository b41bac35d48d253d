"""Invite use cases."""

from tenantlink.application.usecase.invite.accept_invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
)
from tenantlink.application.usecase.invite.cleanup_expired_invites import (
    CleanupExpiredInvitesRequest,
    CleanupExpiredInvitesResponse,
    CleanupExpiredInvitesUseCase,
)
from tenantlink.application.usecase.invite.common import PropertyItem
from tenantlink.application.usecase.invite.create_invite import (
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
)
from tenantlink.application.usecase.invite.list_property_invites import (
    InviteItem,
    ListPropertyInvitesRequest,
    ListPropertyInvitesResponse,
    ListPropertyInvitesUseCase,
)
from tenantlink.application.usecase.invite.revoke_invite import (
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
)
from tenantlink.application.usecase.invite.validate_invite import (
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)

__all__ = [
    "AcceptInviteRequest",
    "AcceptInviteResponse",
    "AcceptInviteUseCase",
    "CleanupExpiredInvitesRequest",
    "CleanupExpiredInvitesResponse",
    "CleanupExpiredInvitesUseCase",
    "CreateInviteRequest",
    "CreateInviteResponse",
    "CreateInviteUseCase",
    "InviteItem",
    "ListPropertyInvitesRequest",
    "ListPropertyInvitesResponse",
    "ListPropertyInvitesUseCase",
    "PropertyItem",
    "RevokeInviteRequest",
    "RevokeInviteResponse",
    "RevokeInviteUseCase",
    "ValidateInviteRequest",
    "ValidateInviteResponse",
    "ValidateInviteUseCase",
]
