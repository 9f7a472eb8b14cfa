"""Document ORM model. Uploaded evidence files and their descriptions."""

from sqlalchemy import BigInteger, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from esgsearch.infrastructure.persistence.database import Base
from esgsearch.infrastructure.persistence.models.mixins import OrganizationScopedModel


class Document(OrganizationScopedModel, Base):
    """Document. Table: documents. Searched by name and description."""

    __tablename__ = "documents"

    report_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("esg_reports.id", ondelete="SET NULL"), nullable=True
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str | None] = mapped_column(String, nullable=True)
    size: Mapped[int | None] = mapped_column(BigInteger, nullable=True)
    uploaded_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
