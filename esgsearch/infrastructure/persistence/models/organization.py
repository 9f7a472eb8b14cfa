"""Organization and user ORM models (tenant and comment authors)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from esgsearch.infrastructure.persistence.database import Base
from esgsearch.infrastructure.persistence.models.mixins import (
    CuidMixin,
    OrganizationScopedModel,
    TimestampMixin,
)


class Organization(CuidMixin, TimestampMixin, Base):
    """Tenant. Every searchable record belongs to exactly one organization."""

    __tablename__ = "organizations"

    name: Mapped[str] = mapped_column(String, nullable=False)


class User(OrganizationScopedModel, Base):
    """Organization member; authors comments."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str | None] = mapped_column(String, nullable=True)
