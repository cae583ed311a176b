"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories and application
services. Routes depend only on these, not on infrastructure directly.
"""

from roster.api.v1.dependencies.auth import AuthSecurity, get_auth_security
from roster.api.v1.dependencies.user_rbac import (
    get_authorization_service,
    get_current_user,
    get_current_user_for_write,
    get_notification_service,
    get_role_service,
    get_role_service_for_write,
    get_user_service,
    get_user_service_for_write,
)

__all__ = [
    "AuthSecurity",
    "get_auth_security",
    "get_authorization_service",
    "get_current_user",
    "get_current_user_for_write",
    "get_notification_service",
    "get_role_service",
    "get_role_service_for_write",
    "get_user_service",
    "get_user_service_for_write",
]
