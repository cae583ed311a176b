"""Application services: authorization guard, role hierarchy, user directory."""

from roster.application.services.authorization_service import AuthorizationService
from roster.application.services.role_service import (
    RoleService,
    attach_role,
    attach_sub_role,
    detach_role,
    detach_sub_role,
)
from roster.application.services.user_service import UserService

__all__ = [
    "AuthorizationService",
    "RoleService",
    "UserService",
    "attach_role",
    "attach_sub_role",
    "detach_role",
    "detach_sub_role",
]
