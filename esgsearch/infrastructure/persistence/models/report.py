"""ESG report and data entry ORM models."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esgsearch.infrastructure.persistence.database import Base
from esgsearch.infrastructure.persistence.models.mixins import OrganizationScopedModel


class EsgReport(OrganizationScopedModel, Base):
    """ESG report. Table: esg_reports. Searched by title and description."""

    __tablename__ = "esg_reports"

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    reporting_period: Mapped[str | None] = mapped_column(String, nullable=True)
    framework: Mapped[str] = mapped_column(String, nullable=False)
    status: Mapped[str] = mapped_column(String, nullable=False, default="draft")
    created_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    __table_args__ = (
        Index("ix_esg_reports_org_created", "organization_id", "created_at"),
    )


class DataEntry(OrganizationScopedModel, Base):
    """Measured metric value within a report. Searched by metric_name and notes."""

    __tablename__ = "data_entries"

    report_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("esg_reports.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    metric_category: Mapped[str | None] = mapped_column(String, nullable=True)
    metric_name: Mapped[str] = mapped_column(String, nullable=False)
    value: Mapped[float | None] = mapped_column(Float, nullable=True)
    unit: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    report: Mapped[EsgReport] = relationship(lazy="raise")
