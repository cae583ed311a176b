"""Ports (Protocols) implemented by infrastructure."""

from roster.application.interfaces.repositories import (
    ICompanyRepository,
    IRoleRepository,
    ISubRoleRepository,
    IUserRepository,
)
from roster.application.interfaces.services import IAuthSecurity, INotificationService

__all__ = [
    "IAuthSecurity",
    "ICompanyRepository",
    "INotificationService",
    "IRoleRepository",
    "ISubRoleRepository",
    "IUserRepository",
]
