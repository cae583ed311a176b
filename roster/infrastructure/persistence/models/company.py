"""Company ORM model. Tenant boundary; root of the role hierarchy."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from roster.infrastructure.persistence.database import Base
from roster.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class Company(CuidMixin, TimestampMixin, Base):
    """Company (tenant). Table: company."""

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    is_multi_company: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
