"""Role and SubRole ORM models. One level of nesting: role -> sub-role."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from roster.infrastructure.persistence.database import Base
from roster.infrastructure.persistence.models.membership import user_role, user_sub_role
from roster.infrastructure.persistence.models.mixins import (
    CompanyScopedModel,
    CuidMixin,
    TimestampMixin,
)

if TYPE_CHECKING:
    from roster.infrastructure.persistence.models.user import User


class Role(CompanyScopedModel, Base):
    """Company-owned role. Table: role.

    Deleting a role removes its sub-roles and every membership edge through
    database cascades (passive_deletes), so unloaded collections are never
    fetched just to be deleted.
    """

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_leader: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    users: Mapped[set[User]] = relationship(
        secondary=user_role,
        back_populates="roles",
        passive_deletes=True,
    )
    child_roles: Mapped[list[SubRole]] = relationship(
        back_populates="parent_role",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SubRole.name",
    )


class SubRole(CuidMixin, TimestampMixin, Base):
    """Sub-role nested under exactly one parent role. Table: sub_role."""

    __tablename__ = "sub_role"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_role_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("role.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    parent_role: Mapped[Role] = relationship(back_populates="child_roles")
    users: Mapped[set[User]] = relationship(
        secondary=user_sub_role,
        back_populates="sub_roles",
        passive_deletes=True,
    )
