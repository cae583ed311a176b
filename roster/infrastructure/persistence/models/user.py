"""User ORM model. Belongs to a working company; creators also own one."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, String, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.infrastructure.persistence.database import Base
from roster.infrastructure.persistence.models.company import Company
from roster.infrastructure.persistence.models.membership import user_role, user_sub_role
from roster.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

if TYPE_CHECKING:
    from roster.infrastructure.persistence.models.role import Role, SubRole


class User(CuidMixin, TimestampMixin, Base):
    """User. Table: app_user. Email is unique across companies.

    invite_token_hash holds the SHA-256 of a pending single-use invite token
    and is cleared once the invite is accepted.
    """

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False, index=True)
    first_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    city: Mapped[str | None] = mapped_column(String(128), nullable=True)
    language: Mapped[str | None] = mapped_column(String(16), nullable=True)
    birthday: Mapped[date | None] = mapped_column(Date, nullable=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)

    is_creator: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false"), default=False
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true"), default=True
    )

    company_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    own_company_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("company.id", ondelete="SET NULL"),
        nullable=True,
        unique=True,
    )

    invite_token_hash: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True, index=True
    )
    invite_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    company: Mapped[Company | None] = relationship(foreign_keys="User.company_id")
    own_company: Mapped[Company | None] = relationship(
        foreign_keys="User.own_company_id"
    )
    roles: Mapped[set[Role]] = relationship(
        secondary=user_role,
        back_populates="users",
        passive_deletes=True,
    )
    sub_roles: Mapped[set[SubRole]] = relationship(
        secondary=user_sub_role,
        back_populates="users",
        passive_deletes=True,
    )
