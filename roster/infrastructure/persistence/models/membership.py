"""Membership join tables: user <-> role and user <-> sub-role.

Plain association tables keyed by (user_id, role_id) / (user_id, sub_role_id).
Both foreign keys cascade on delete so removing a user, role or sub-role also
removes its membership edges at the store level.
"""

from sqlalchemy import Column, ForeignKey, String, Table

from roster.infrastructure.persistence.database import Base

user_role = Table(
    "user_role",
    Base.metadata,
    Column(
        "user_id",
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "role_id",
        String,
        ForeignKey("role.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)

user_sub_role = Table(
    "user_sub_role",
    Base.metadata,
    Column(
        "user_id",
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "sub_role_id",
        String,
        ForeignKey("sub_role.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    ),
)
