"""Users API: signup, authentication, profile settings and invitations."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from roster.api.v1.dependencies import (
    get_current_user,
    get_current_user_for_write,
    get_user_service,
    get_user_service_for_write,
)
from roster.application.dtos.user import SettingsData, SignupData
from roster.application.services.user_service import UserService
from roster.core.limiter import limit_auth, limit_invite, limit_signup, limit_writes
from roster.domain.exceptions import InviteNotFoundException
from roster.infrastructure.persistence.database import get_db_transactional
from roster.infrastructure.persistence.models.user import User
from roster.schemas.auth import (
    AcceptInviteRequest,
    LoginRequest,
    SignupRequest,
    TokenResponse,
)
from roster.schemas.user import (
    InviteLookupResponse,
    InviteOutcomeResponse,
    InviteRequest,
    UserResponse,
    UserSettingsUpdate,
)

router = APIRouter()


@router.post("/signup", response_model=TokenResponse, status_code=201)
@limit_signup
async def signup(
    request: Request,
    body: SignupRequest,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Create a company and its owner; returns an access token."""
    result = await service.signup(
        SignupData(
            email=body.email,
            password=body.password,
            company_name=body.company_name,
            is_multi_company=body.is_multi_company,
            first_name=body.first_name,
            last_name=body.last_name,
            phone=body.phone,
        )
    )
    return TokenResponse(
        access_token=result.token, user=UserResponse.model_validate(result.user)
    )


@router.post("/auth", response_model=TokenResponse)
@limit_auth
async def authenticate(
    request: Request,
    body: LoginRequest,
    service: Annotated[UserService, Depends(get_user_service)],
):
    result = await service.authenticate(body.email, body.password)
    return TokenResponse(
        access_token=result.token, user=UserResponse.model_validate(result.user)
    )


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: Annotated[User, Depends(get_current_user)]):
    """Return the authenticated user."""
    return UserResponse.model_validate(current_user)


@router.put("/settings", response_model=UserResponse)
@limit_writes
async def update_settings(
    request: Request,
    body: UserSettingsUpdate,
    current_user: Annotated[User, Depends(get_current_user_for_write)],
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Update the caller's profile; omitted fields stay unchanged."""
    user = await service.update_settings(
        current_user, SettingsData(**body.model_dump(exclude_none=True))
    )
    return UserResponse.model_validate(user)


@router.post("/invite", response_model=list[InviteOutcomeResponse], status_code=201)
@limit_invite
async def invite_users(
    request: Request,
    body: InviteRequest,
    actor: Annotated[User, Depends(get_current_user)],
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
):
    """Invite users into the caller's company; one outcome per distinct email.

    Invitees are committed before any notification is sent.
    """
    outcomes = await service.invite_users(
        actor, [str(e) for e in body.emails], notify=False
    )
    await db.commit()
    outcomes = await service.deliver_invites(actor, outcomes)
    return [InviteOutcomeResponse.model_validate(o) for o in outcomes]


@router.get("/invites/{token}", response_model=InviteLookupResponse)
@limit_auth
async def get_invite(
    request: Request,
    token: str,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Look up a pending invite (e.g. to prefill the acceptance form)."""
    user = await service.find_user_by_invite(token)
    if user is None:
        raise InviteNotFoundException()
    return InviteLookupResponse(email=user.email, company_id=user.company_id)


@router.post("/accept-invite", response_model=TokenResponse)
@limit_auth
async def accept_invite(
    request: Request,
    body: AcceptInviteRequest,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
):
    """Activate an invited account and return an access token. Tokens are single use."""
    result = await service.accept_invite(
        body.token,
        body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    return TokenResponse(
        access_token=result.token, user=UserResponse.model_validate(result.user)
    )
