"""Role and sub-role repositories. Every lookup is scoped by company."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from roster.infrastructure.persistence.models.membership import user_role
from roster.infrastructure.persistence.models.role import Role, SubRole
from roster.infrastructure.persistence.models.user import User
from roster.infrastructure.persistence.repositories.base import BaseRepository


class RoleRepository(BaseRepository[Role]):
    """Company-scoped role access. Getters eager-load the collections callers mutate."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def create_role(self, company_id: str, name: str, is_leader: bool) -> Role:
        """Create a role with empty member and sub-role collections."""
        role = Role(
            company_id=company_id,
            name=name,
            is_leader=is_leader,
            users=set(),
            child_roles=[],
        )
        return await self.create(role)

    async def get_by_company(self, company_id: str) -> tuple[list[Role], int]:
        """Return (roles, total) for the company, each with child_roles loaded."""
        result = await self.db.execute(
            select(Role)
            .where(Role.company_id == company_id)
            .options(selectinload(Role.child_roles))
            .order_by(Role.created_at)
        )
        roles = list(result.scalars().all())
        total = await self.db.scalar(
            select(func.count()).select_from(Role).where(Role.company_id == company_id)
        )
        return roles, int(total or 0)

    async def get_entity_by_company_and_id(
        self, company_id: str, role_id: str
    ) -> Role | None:
        """Return role with users and child_roles (and their users) loaded, or None."""
        result = await self.db.execute(
            select(Role)
            .where(Role.id == role_id, Role.company_id == company_id)
            .options(
                selectinload(Role.users),
                selectinload(Role.child_roles).selectinload(SubRole.users),
            )
        )
        return result.scalar_one_or_none()

    async def get_by_sub_role_and_user(self, sub_role: SubRole, user: User) -> Role | None:
        """Return the sub-role's parent role only if the user holds it."""
        result = await self.db.execute(
            select(Role)
            .join(user_role, user_role.c.role_id == Role.id)
            .where(
                Role.id == sub_role.parent_role_id,
                user_role.c.user_id == user.id,
            )
        )
        return result.scalar_one_or_none()

    async def delete_by_company_and_id(self, company_id: str, role_id: str) -> bool:
        """Delete the role if it exists in the company. Returns False when absent."""
        result = await self.db.execute(
            select(Role).where(Role.id == role_id, Role.company_id == company_id)
        )
        role = result.scalar_one_or_none()
        if role is None:
            return False
        await self.delete(role)
        return True


class SubRoleRepository(BaseRepository[SubRole]):
    """Sub-roles, scoped through their parent role's company."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, SubRole)

    async def create_sub_role(self, parent: Role, name: str) -> SubRole:
        sub_role = SubRole(name=name, parent_role=parent, users=set())
        return await self.create(sub_role)

    async def get_entity_by_company_and_id(
        self, company_id: str, sub_role_id: str
    ) -> SubRole | None:
        """Return the sub-role whose parent role belongs to company, with users loaded."""
        result = await self.db.execute(
            select(SubRole)
            .join(Role, SubRole.parent_role_id == Role.id)
            .where(SubRole.id == sub_role_id, Role.company_id == company_id)
            .options(selectinload(SubRole.users), selectinload(SubRole.parent_role))
        )
        return result.scalar_one_or_none()

    async def delete_by_company_and_id(self, company_id: str, sub_role_id: str) -> bool:
        """Delete the sub-role if its parent role belongs to company. False when absent."""
        result = await self.db.execute(
            select(SubRole)
            .join(Role, SubRole.parent_role_id == Role.id)
            .where(SubRole.id == sub_role_id, Role.company_id == company_id)
        )
        sub_role = result.scalar_one_or_none()
        if sub_role is None:
            return False
        await self.delete(sub_role)
        return True
