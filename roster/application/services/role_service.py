"""Role hierarchy service: roles, sub-roles and user memberships.

Every command checks the guard first, completes all lookups and validation,
then mutates the loaded entities and flushes once. The request-scoped
transaction commits or rolls back the whole command.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from roster.application.services.authorization_service import AuthorizationService
from roster.domain.enums import Permission
from roster.domain.exceptions import (
    NoParentRoleException,
    RoleNotFoundException,
    SubRoleNotFoundException,
    UserNotFoundException,
)
from roster.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from roster.application.interfaces.repositories import (
        IRoleRepository,
        ISubRoleRepository,
        IUserRepository,
    )
    from roster.infrastructure.persistence.models.role import Role, SubRole
    from roster.infrastructure.persistence.models.user import User

logger = get_logger(__name__)


def attach_role(role: Role, user: User) -> None:
    """Link user and role; both collections are updated (back_populates)."""
    user.roles.add(role)


def attach_sub_role(sub_role: SubRole, user: User) -> None:
    user.sub_roles.add(sub_role)


def detach_sub_role(sub_role: SubRole, user: User) -> None:
    """Unlink user and sub-role. No-op if the user does not hold it."""
    user.sub_roles.discard(sub_role)


def detach_role(role: Role, user: User) -> list[SubRole]:
    """Unlink user and role, first removing the role's sub-roles the user holds.

    Returns the sub-roles that were removed with the role.
    """
    cascaded = [sub for sub in role.child_roles if sub in user.sub_roles]
    for sub_role in cascaded:
        detach_sub_role(sub_role, user)
    user.roles.discard(role)
    return cascaded


class RoleService:
    """Create, update, delete and assign roles and sub-roles within a company."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        sub_role_repo: ISubRoleRepository,
        user_repo: IUserRepository,
        authorization: AuthorizationService | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._sub_role_repo = sub_role_repo
        self._user_repo = user_repo
        self._authz = authorization or AuthorizationService()

    async def _role(self, company_id: str, role_id: str) -> Role:
        role = await self._role_repo.get_entity_by_company_and_id(company_id, role_id)
        if role is None:
            raise RoleNotFoundException(role_id)
        return role

    async def _sub_role(self, company_id: str, sub_role_id: str) -> SubRole:
        sub_role = await self._sub_role_repo.get_entity_by_company_and_id(
            company_id, sub_role_id
        )
        if sub_role is None:
            raise SubRoleNotFoundException(sub_role_id)
        return sub_role

    async def _user(self, company_id: str, user_id: str) -> User:
        user = await self._user_repo.get_by_company_and_id(company_id, user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        return user

    async def create_role(self, actor: User, name: str, is_leader: bool = False) -> Role:
        company_id = self._authz.require(actor, Permission.MANAGE_ROLES)
        role = await self._role_repo.create_role(company_id, name, is_leader)
        logger.info("Role created: company_id=%s role_id=%s", company_id, role.id)
        return role

    async def update_role(
        self, actor: User, role_id: str, name: str, is_leader: bool
    ) -> Role:
        """Rename role and set its leader flag. Raises RoleNotFoundException."""
        company_id = self._authz.require(actor, Permission.MANAGE_ROLES)
        role = await self._role(company_id, role_id)
        role.name = name
        role.is_leader = is_leader
        await self._role_repo.persist(role)
        logger.info("Role updated: company_id=%s role_id=%s", company_id, role_id)
        return role

    async def list_roles(self, actor: User) -> tuple[list[Role], int]:
        company_id = self._authz.require(actor, Permission.READ_ROLES)
        return await self._role_repo.get_by_company(company_id)

    async def get_role(self, actor: User, role_id: str) -> Role:
        company_id = self._authz.require(actor, Permission.READ_ROLES)
        return await self._role(company_id, role_id)

    async def get_sub_role(self, actor: User, sub_role_id: str) -> SubRole:
        company_id = self._authz.require(actor, Permission.READ_ROLES)
        return await self._sub_role(company_id, sub_role_id)

    async def create_sub_role(
        self, actor: User, parent_role_id: str, name: str
    ) -> SubRole:
        """Create a sub-role under a role of the actor's company."""
        company_id = self._authz.require(actor, Permission.MANAGE_ROLES)
        parent = await self._role(company_id, parent_role_id)
        sub_role = await self._sub_role_repo.create_sub_role(parent, name)
        logger.info(
            "Sub-role created: company_id=%s role_id=%s sub_role_id=%s",
            company_id,
            parent.id,
            sub_role.id,
        )
        return sub_role

    async def update_sub_role(self, actor: User, sub_role_id: str, name: str) -> SubRole:
        company_id = self._authz.require(actor, Permission.MANAGE_ROLES)
        sub_role = await self._sub_role(company_id, sub_role_id)
        sub_role.name = name
        await self._role_repo.persist(sub_role)
        logger.info(
            "Sub-role updated: company_id=%s sub_role_id=%s", company_id, sub_role_id
        )
        return sub_role

    async def delete_role(self, actor: User, role_id: str) -> None:
        """Delete role with its sub-roles and memberships. Absent role is a no-op."""
        company_id = self._authz.require(actor, Permission.MANAGE_ROLES)
        deleted = await self._role_repo.delete_by_company_and_id(company_id, role_id)
        if deleted:
            logger.info("Role deleted: company_id=%s role_id=%s", company_id, role_id)

    async def delete_sub_role(self, actor: User, sub_role_id: str) -> None:
        company_id = self._authz.require(actor, Permission.MANAGE_ROLES)
        deleted = await self._sub_role_repo.delete_by_company_and_id(
            company_id, sub_role_id
        )
        if deleted:
            logger.info(
                "Sub-role deleted: company_id=%s sub_role_id=%s",
                company_id,
                sub_role_id,
            )

    async def assign_role(self, actor: User, user_id: str, role_id: str) -> User:
        """Give user the role. Re-assigning is a no-op."""
        company_id = self._authz.require(actor, Permission.ASSIGN_ROLES)
        user = await self._user(company_id, user_id)
        role = await self._role(company_id, role_id)
        attach_role(role, user)
        await self._role_repo.persist(user, role)
        logger.info(
            "Role assigned: company_id=%s role_id=%s user_id=%s",
            company_id,
            role_id,
            user_id,
        )
        return user

    async def assign_sub_role(self, actor: User, user_id: str, sub_role_id: str) -> User:
        """Give user the sub-role.

        Raises:
            NoParentRoleException: If the user does not hold the parent role.
        """
        company_id = self._authz.require(actor, Permission.ASSIGN_ROLES)
        user = await self._user(company_id, user_id)
        sub_role = await self._sub_role(company_id, sub_role_id)
        parent = await self._role_repo.get_by_sub_role_and_user(sub_role, user)
        if parent is None:
            raise NoParentRoleException(sub_role_id, user_id)
        attach_sub_role(sub_role, user)
        await self._role_repo.persist(user, sub_role)
        logger.info(
            "Sub-role assigned: company_id=%s sub_role_id=%s user_id=%s",
            company_id,
            sub_role_id,
            user_id,
        )
        return user

    async def remove_role(self, actor: User, user_id: str, role_id: str) -> User:
        """Take the role and its sub-roles away from user in one flush."""
        company_id = self._authz.require(actor, Permission.ASSIGN_ROLES)
        user = await self._user(company_id, user_id)
        role = await self._role(company_id, role_id)
        cascaded = detach_role(role, user)
        await self._role_repo.persist(user, role, *cascaded)
        logger.info(
            "Role removed: company_id=%s role_id=%s user_id=%s sub_roles_removed=%d",
            company_id,
            role_id,
            user_id,
            len(cascaded),
        )
        return user

    async def remove_sub_role(self, actor: User, user_id: str, sub_role_id: str) -> User:
        company_id = self._authz.require(actor, Permission.ASSIGN_ROLES)
        user = await self._user(company_id, user_id)
        sub_role = await self._sub_role(company_id, sub_role_id)
        detach_sub_role(sub_role, user)
        await self._role_repo.persist(user, sub_role)
        logger.info(
            "Sub-role removed: company_id=%s sub_role_id=%s user_id=%s",
            company_id,
            sub_role_id,
            user_id,
        )
        return user
