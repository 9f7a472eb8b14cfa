"""ORM models of the ESG reporting record store (read by the search adapters)."""

from esgsearch.infrastructure.persistence.models.comment import Comment
from esgsearch.infrastructure.persistence.models.document import Document
from esgsearch.infrastructure.persistence.models.organization import Organization, User
from esgsearch.infrastructure.persistence.models.report import DataEntry, EsgReport

__all__ = [
    "Comment",
    "DataEntry",
    "Document",
    "EsgReport",
    "Organization",
    "User",
]
