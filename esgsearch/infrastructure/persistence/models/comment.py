"""Report comment ORM model.

Comments have no organization_id of their own; they are tenant-scoped
through the report they belong to.
"""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from esgsearch.infrastructure.persistence.database import Base
from esgsearch.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
)
from esgsearch.infrastructure.persistence.models.organization import User
from esgsearch.infrastructure.persistence.models.report import EsgReport


class Comment(CuidMixin, TimestampMixin, Base):
    """Discussion comment on a report. Searched by content."""

    __tablename__ = "comments"

    report_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("esg_reports.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    parent_comment_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True
    )
    author_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    report: Mapped[EsgReport] = relationship(lazy="raise")
    author: Mapped[User | None] = relationship(lazy="raise")
