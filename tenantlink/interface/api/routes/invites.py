"""Invite routes.

Tokens only ever travel in request and response bodies. URLs are recorded
by request tracing and proxies, so no route takes a token in its path or
query string.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Request, status
from pydantic import BaseModel, Field

from tenantlink.application.usecase.invite import (
    AcceptInviteRequest,
    AcceptInviteResponse,
    AcceptInviteUseCase,
    CreateInviteRequest,
    CreateInviteResponse,
    CreateInviteUseCase,
    ListPropertyInvitesRequest,
    ListPropertyInvitesResponse,
    ListPropertyInvitesUseCase,
    RevokeInviteRequest,
    RevokeInviteResponse,
    RevokeInviteUseCase,
    ValidateInviteRequest,
    ValidateInviteResponse,
    ValidateInviteUseCase,
)
from tenantlink.domain.error import DomainError
from tenantlink.domain.service import JWTService
from tenantlink.domain.value import AcceptStatus, DeliveryMethod
from tenantlink.interface.error import service_unavailable, to_http_exception
from tenantlink.util.jwt import JWTError

router = APIRouter(prefix="/invites", tags=["invites"], route_class=DishkaRoute)
property_router = APIRouter(
    prefix="/properties", tags=["invites"], route_class=DishkaRoute
)


class CreateInviteAPIRequest(BaseModel):
    """API request for creating an invite."""

    delivery_method: DeliveryMethod = DeliveryMethod.CODE
    intended_email: str | None = Field(default=None, max_length=320)
    max_uses: int | None = None


class TokenAPIRequest(BaseModel):
    """API request carrying a candidate token."""

    token: str = Field(max_length=256)


def _authenticate(jwt_service: JWTService, auth_token: str | None) -> str:
    """Resolve the caller's user id from the session cookie.

    Raises:
        HTTPException: 401 if the cookie is missing or invalid
    """
    try:
        return str(jwt_service.authenticate(auth_token))
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


@property_router.post(
    "/{property_id}/invites",
    response_model=CreateInviteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invite(
    property_id: UUID,
    request: CreateInviteAPIRequest,
    create_invite_use_case: FromDishka[CreateInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CreateInviteResponse:
    """Create an invite for a property the caller owns.

    Args:
        property_id: Property to invite a tenant to
        request: Delivery details
        create_invite_use_case: Create invite use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        Invite id, plaintext token and expiry

    Raises:
        HTTPException: 401 unauthenticated, 403 not the owner, 400 invalid
    """
    user_id = _authenticate(jwt_service, auth_token)

    try:
        return await create_invite_use_case.execute(
            CreateInviteRequest(
                owner_id=user_id,
                property_id=str(property_id),
                delivery_method=request.delivery_method,
                intended_email=request.intended_email,
                max_uses=request.max_uses,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@property_router.get(
    "/{property_id}/invites", response_model=ListPropertyInvitesResponse
)
async def list_property_invites(
    property_id: UUID,
    list_use_case: FromDishka[ListPropertyInvitesUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListPropertyInvitesResponse:
    """List a property's invites for its owner.

    Raises:
        HTTPException: 401 unauthenticated, 403 not the owner
    """
    user_id = _authenticate(jwt_service, auth_token)

    try:
        return await list_use_case.execute(
            ListPropertyInvitesRequest(property_id=str(property_id), user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post(
    "/validate",
    response_model=ValidateInviteResponse,
    response_model_exclude_none=True,
)
async def validate_invite(
    request: TokenAPIRequest,
    http_request: Request,
    validate_use_case: FromDishka[ValidateInviteUseCase],
) -> ValidateInviteResponse:
    """Check a token without signing in.

    Args:
        request: Body with the candidate token
        http_request: Raw request, for the client address
        validate_use_case: Validate invite use case from DI

    Returns:
        ``{"valid": false}`` for any unusable token, otherwise the property

    Raises:
        HTTPException: 429 with Retry-After when throttled
    """
    scope = http_request.client.host if http_request.client else None

    try:
        return await validate_use_case.execute(
            ValidateInviteRequest(token=request.token, scope=scope)
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.post("/accept", response_model=AcceptInviteResponse)
async def accept_invite(
    request: TokenAPIRequest,
    accept_use_case: FromDishka[AcceptInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> AcceptInviteResponse:
    """Redeem a token as the signed-in tenant.

    Args:
        request: Body with the candidate token
        accept_use_case: Accept invite use case from DI
        jwt_service: JWT service from DI
        auth_token: JWT token from cookie

    Returns:
        Outcome status, with the property on success

    Raises:
        HTTPException: 401 unauthenticated, 429 throttled, 503 when the
            store is unavailable (nothing was written, safe to retry)
    """
    user_id = _authenticate(jwt_service, auth_token)

    try:
        response = await accept_use_case.execute(
            AcceptInviteRequest(token=request.token, tenant_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)

    if response.status == AcceptStatus.ERROR:
        raise service_unavailable()
    return response


@router.delete("/{invite_id}", response_model=RevokeInviteResponse)
async def revoke_invite(
    invite_id: UUID,
    revoke_use_case: FromDishka[RevokeInviteUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RevokeInviteResponse:
    """Revoke an invite. Revoking twice returns the same result.

    Raises:
        HTTPException: 401 unauthenticated, 403 not the owner, 404 unknown
    """
    user_id = _authenticate(jwt_service, auth_token)

    try:
        return await revoke_use_case.execute(
            RevokeInviteRequest(invite_id=str(invite_id), user_id=user_id)
        )
    except DomainError as e:
        raise to_http_exception(e)
