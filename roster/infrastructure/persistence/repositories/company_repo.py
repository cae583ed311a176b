"""Company repository."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from roster.infrastructure.persistence.models.company import Company
from roster.infrastructure.persistence.repositories.base import BaseRepository


class CompanyRepository(BaseRepository[Company]):
    """Create and look up companies."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Company)

    def build_company(self, name: str, *, is_multi_company: bool = False) -> Company:
        """Return a new, not yet persisted Company (saved together with its creator)."""
        return Company(name=name, is_multi_company=is_multi_company)
