"""Persistence models: ORM entities, join tables and mixins."""

from roster.infrastructure.persistence.models.company import Company
from roster.infrastructure.persistence.models.membership import user_role, user_sub_role
from roster.infrastructure.persistence.models.mixins import (
    CompanyMixin,
    CompanyScopedModel,
    CuidMixin,
    TimestampMixin,
)
from roster.infrastructure.persistence.models.role import Role, SubRole
from roster.infrastructure.persistence.models.user import User

__all__ = [
    "Company",
    "Role",
    "SubRole",
    "User",
    "user_role",
    "user_sub_role",
    "CompanyMixin",
    "CompanyScopedModel",
    "CuidMixin",
    "TimestampMixin",
]
