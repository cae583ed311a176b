"""Persistence repositories. Re-exports for dependency injection."""

from roster.infrastructure.persistence.repositories.base import BaseRepository
from roster.infrastructure.persistence.repositories.company_repo import CompanyRepository
from roster.infrastructure.persistence.repositories.role_repo import (
    RoleRepository,
    SubRoleRepository,
)
from roster.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "CompanyRepository",
    "RoleRepository",
    "SubRoleRepository",
    "UserRepository",
]
