"""SQLAlchemy mixins for common model patterns.

Provides: CuidMixin, CompanyMixin, TimestampMixin and the combined
CompanyScopedModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from roster.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CompanyMixin:
    """Mixin for company-owned models. company_id FK with CASCADE delete."""

    @declared_attr
    def company_id(cls) -> Mapped[str]:
        return mapped_column(
            String,
            ForeignKey("company.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at (server defaults, timezone-aware)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), nullable=False
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
            nullable=False,
        )


class CompanyScopedModel(CuidMixin, CompanyMixin, TimestampMixin):
    """Combined mixin: CUID + company_id + created_at/updated_at."""

    __abstract__ = True
