"""User repository with password helpers and invite-token lookups."""

from __future__ import annotations

import asyncio
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from roster.domain.exceptions import UserAlreadyExistsException
from roster.infrastructure.persistence.models.company import Company
from roster.infrastructure.persistence.models.role import SubRole
from roster.infrastructure.persistence.models.user import User
from roster.infrastructure.persistence.repositories.base import BaseRepository
from roster.infrastructure.security.password import get_password_hash, verify_password
from roster.shared.utils.datetime import utc_now
from roster.shared.utils.generators import generate_unusable_password

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            get_password_hash, "not-a-real-password"
        )
    return _dummy_hash_cache


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):
    """User lookups (global and company-scoped), creation and authentication."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_id_active(
        self, user_id: str, *, active_only: bool = True
    ) -> User | None:
        """Return user with company and roles loaded.

        active_only selects on is_active == active_only (so False finds only
        pending invitees).
        """
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id, User.is_active.is_(active_only))
            .options(selectinload(User.company), selectinload(User.roles))
        )
        return result.scalar_one_or_none()

    async def get_by_company_and_id(self, company_id: str, user_id: str) -> User | None:
        """Return user in company with roles, sub-roles and sub-role members loaded."""
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id, User.company_id == company_id)
            .options(
                selectinload(User.company),
                selectinload(User.roles),
                selectinload(User.sub_roles).selectinload(SubRole.users),
            )
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == _normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def get_by_invite_token_hash(
        self,
        token_hash: str,
        now: datetime | None = None,
        *,
        for_update: bool = False,
    ) -> User | None:
        """Return the user holding an unexpired invite with this token hash.

        for_update locks the row until the transaction ends. A concurrent
        locker waits, then re-checks the token and finds nothing once the
        first transaction has consumed it.
        """
        now = now or utc_now()
        stmt = (
            select(User)
            .where(
                User.invite_token_hash == token_hash,
                User.invite_expires_at > now,
            )
            .options(selectinload(User.company), selectinload(User.roles))
        )
        if for_update:
            stmt = stmt.with_for_update(of=User)
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

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
        """Create an active company creator together with its company in one flush.

        Raises UserAlreadyExistsException on a unique email violation.
        """
        hashed = await asyncio.to_thread(get_password_hash, password)
        user = User(
            email=_normalize_email(email),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            hashed_password=hashed,
            is_creator=True,
            is_active=True,
            company=company,
            own_company=company,
            roles=set(),
            sub_roles=set(),
        )
        try:
            async with self.db.begin_nested():
                self.db.add(user)
                await self.db.flush()
        except IntegrityError:
            raise UserAlreadyExistsException(email) from None
        return user

    async def create_invited_user(
        self,
        company_id: str,
        email: str,
        invite_token_hash: str,
        invite_expires_at: datetime,
    ) -> User:
        """Create an inactive placeholder user with an unusable credential.

        Runs in its own savepoint so a duplicate email only fails this
        recipient and leaves the rest of the transaction usable.
        """
        normalized = _normalize_email(email)
        user = User(
            email=normalized,
            first_name=normalized,
            last_name=normalized,
            hashed_password=generate_unusable_password(),
            is_creator=False,
            is_active=False,
            company_id=company_id,
            invite_token_hash=invite_token_hash,
            invite_expires_at=invite_expires_at,
            roles=set(),
            sub_roles=set(),
        )
        try:
            async with self.db.begin_nested():
                self.db.add(user)
                await self.db.flush()
        except IntegrityError:
            raise UserAlreadyExistsException(email) from None
        return user

    async def verify_credential(self, user: User | None, password: str) -> bool:
        """Return True if password matches the user's hash.

        With user None a dummy bcrypt comparison still runs, so unknown emails
        take as long as wrong passwords.
        """
        if user is None:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return False
        return await asyncio.to_thread(verify_password, password, user.hashed_password)

    async def set_password(self, user: User, password: str) -> None:
        """Hash password off the event loop and assign it (persisted on next flush)."""
        user.hashed_password = await asyncio.to_thread(get_password_hash, password)
