"""Repository interfaces (ports) for the application layer.

Protocols define contracts that the SQLAlchemy repositories fulfill (DIP).
Entities are the ORM models; services mutate their collections and the
session flushes them as one unit of work.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from roster.infrastructure.persistence.models.company import Company
    from roster.infrastructure.persistence.models.role import Role, SubRole
    from roster.infrastructure.persistence.models.user import User


class ICompanyRepository(Protocol):
    """Protocol for company repository."""

    def build_company(self, name: str, *, is_multi_company: bool = False) -> Company:
        """Return an unsaved company."""


class IRoleRepository(Protocol):
    """Protocol for role repository (all lookups scoped by company)."""

    async def create_role(self, company_id: str, name: str, is_leader: bool) -> Role:
        """Create and flush a role."""

    async def get_by_company(self, company_id: str) -> tuple[list[Role], int]:
        """Return (roles, total) with child roles loaded."""

    async def get_entity_by_company_and_id(
        self, company_id: str, role_id: str
    ) -> Role | None:
        """Return role with users and child roles loaded, or None."""

    async def get_by_sub_role_and_user(self, sub_role: SubRole, user: User) -> Role | None:
        """Return the sub-role's parent role if the user holds it."""

    async def delete_by_company_and_id(self, company_id: str, role_id: str) -> bool:
        """Delete role; False when absent."""

    async def persist(self, *objs: object) -> None:
        """Stage and flush objects."""


class ISubRoleRepository(Protocol):
    """Protocol for sub-role repository."""

    async def create_sub_role(self, parent: Role, name: str) -> SubRole:
        """Create and flush a sub-role under parent."""

    async def get_entity_by_company_and_id(
        self, company_id: str, sub_role_id: str
    ) -> SubRole | None:
        """Return sub-role with users loaded, or None."""

    async def delete_by_company_and_id(self, company_id: str, sub_role_id: str) -> bool:
        """Delete sub-role; False when absent."""


class IUserRepository(Protocol):
    """Protocol for user repository."""

    async def get_by_id_active(
        self, user_id: str, *, active_only: bool = True
    ) -> User | None:
        """Return user by id and activity state."""

    async def get_by_company_and_id(self, company_id: str, user_id: str) -> User | None:
        """Return user in company with memberships loaded."""

    async def get_by_email(self, email: str) -> User | None:
        """Return user by email (case-insensitive)."""

    async def get_by_invite_token_hash(
        self,
        token_hash: str,
        now: datetime | None = None,
        *,
        for_update: bool = False,
    ) -> User | None:
        """Return the user holding an unexpired invite; for_update locks the row."""

    async def create_creator(
        self,
        company: Company,
        email: str,
        password: str,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> User:
        """Create a company creator and its company."""

    async def create_invited_user(
        self,
        company_id: str,
        email: str,
        invite_token_hash: str,
        invite_expires_at: datetime,
    ) -> User:
        """Create an inactive invited user."""

    async def verify_credential(self, user: User | None, password: str) -> bool:
        """Return True if password matches."""

    async def set_password(self, user: User, password: str) -> None:
        """Hash and assign a password."""

    async def persist(self, *objs: object) -> None:
        """Stage and flush objects."""
