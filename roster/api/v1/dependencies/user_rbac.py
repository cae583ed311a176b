"""User, role and auth dependencies (composition root).

Read endpoints get repositories on a plain session (get_db); write endpoints
share one transactional session per request (get_db_transactional), so every
repository and service built for a write request works in the same unit of work.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from roster.application.interfaces.services import INotificationService
from roster.application.services.authorization_service import AuthorizationService
from roster.application.services.role_service import RoleService
from roster.application.services.user_service import UserService
from roster.core.config import get_settings
from roster.domain.exceptions import AuthenticationException
from roster.infrastructure.persistence.database import get_db, get_db_transactional
from roster.infrastructure.persistence.models.user import User
from roster.infrastructure.persistence.repositories import (
    CompanyRepository,
    RoleRepository,
    SubRoleRepository,
    UserRepository,
)
from roster.infrastructure.security.jwt import verify_token
from roster.infrastructure.services import LogOnlyNotificationService

from . import auth

_http_bearer = HTTPBearer(auto_error=False)


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    """User repository for read operations."""
    return UserRepository(db)


async def get_user_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> UserRepository:
    """User repository for writes (transactional)."""
    return UserRepository(db)


async def get_company_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> CompanyRepository:
    return CompanyRepository(db)


async def get_role_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RoleRepository:
    """Role repository for read operations (list, get by id)."""
    return RoleRepository(db)


async def get_role_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> RoleRepository:
    """Role repository for create/update/delete and assignments."""
    return RoleRepository(db)


async def get_sub_role_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> SubRoleRepository:
    return SubRoleRepository(db)


async def get_sub_role_repo_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> SubRoleRepository:
    return SubRoleRepository(db)


def get_authorization_service() -> AuthorizationService:
    return AuthorizationService()


def get_notification_service(request: Request) -> INotificationService:
    """Notification sender set in app lifespan; log-only when none is configured."""
    service = getattr(request.app.state, "notification_service", None)
    return service or LogOnlyNotificationService()


def get_role_service(
    role_repo: Annotated[RoleRepository, Depends(get_role_repo)],
    sub_role_repo: Annotated[SubRoleRepository, Depends(get_sub_role_repo)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> RoleService:
    """Role service for read endpoints (composition root)."""
    return RoleService(role_repo, sub_role_repo, user_repo, authz)


def get_role_service_for_write(
    role_repo: Annotated[RoleRepository, Depends(get_role_repo_for_write)],
    sub_role_repo: Annotated[SubRoleRepository, Depends(get_sub_role_repo_for_write)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> RoleService:
    """Role service for mutations; all repos share the request transaction."""
    return RoleService(role_repo, sub_role_repo, user_repo, authz)


def _build_user_service(
    user_repo: UserRepository,
    auth_security: auth.AuthSecurity,
    company_repo: CompanyRepository | None = None,
    notifier: INotificationService | None = None,
    authz: AuthorizationService | None = None,
) -> UserService:
    settings = get_settings()
    return UserService(
        user_repo=user_repo,
        auth_security=auth_security,
        company_repo=company_repo,
        notification_service=notifier,
        authorization=authz,
        invite_ttl_hours=settings.invite_token_ttl_hours,
        invite_subject=settings.invite_email_subject,
    )


def get_user_service(
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    auth_security: Annotated[auth.AuthSecurity, Depends(auth.get_auth_security)],
) -> UserService:
    """User service for lookups and authentication."""
    return _build_user_service(user_repo, auth_security)


def get_user_service_for_write(
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
    company_repo: Annotated[CompanyRepository, Depends(get_company_repo_for_write)],
    auth_security: Annotated[auth.AuthSecurity, Depends(auth.get_auth_security)],
    notifier: Annotated[INotificationService, Depends(get_notification_service)],
    authz: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> UserService:
    """User service for signup, settings and invitations (composition root)."""
    return _build_user_service(user_repo, auth_security, company_repo, notifier, authz)


def get_token_payload(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> dict[str, Any]:
    """Decode the bearer token. Resolved before any session is opened."""
    if not credentials:
        raise AuthenticationException("Not authenticated")
    try:
        return verify_token(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid or expired token") from None


async def _resolve_user(payload: dict[str, Any], user_repo: UserRepository) -> User:
    user = await user_repo.get_by_id_active(str(payload["sub"]))
    if user is None:
        raise AuthenticationException("User not found or inactive")
    return user


async def get_current_user(
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> User:
    """Return the active user named by the bearer token; 401 if missing or invalid."""
    return await _resolve_user(payload, user_repo)


async def get_current_user_for_write(
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo_for_write)],
) -> User:
    """Current user loaded in the request transaction, for endpoints that modify it."""
    return await _resolve_user(payload, user_repo)
