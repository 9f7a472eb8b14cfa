"""Domain enumerations for the search service.

Enums represent fixed sets of domain values (searchable record kinds and
the type filter accepted by a search).
"""

from enum import Enum


class SearchKind(str, Enum):
    """Kind of record a search result was projected from.

    Declaration order is the fixed kind order used as the last sort
    tie-break: report < data_entry < document < comment.
    """

    REPORT = "report"
    DATA_ENTRY = "data_entry"
    DOCUMENT = "document"
    COMMENT = "comment"

    @property
    def sort_order(self) -> int:
        """Position of this kind in the fixed enumeration order."""
        return _KIND_ORDER[self]

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid kind values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [kind.value for kind in cls]


_KIND_ORDER: dict[SearchKind, int] = {kind: i for i, kind in enumerate(SearchKind)}


class RecordTable(str, Enum):
    """Collections of the ESG reporting record store that can be text-filtered."""

    ESG_REPORTS = "esg_reports"
    DATA_ENTRIES = "data_entries"
    DOCUMENTS = "documents"
    COMMENTS = "comments"


class SearchTypeFilter(str, Enum):
    """Entity-type filter for a search: every kind, or exactly one."""

    ALL = "all"
    REPORT = "report"
    DATA_ENTRY = "data_entry"
    DOCUMENT = "document"
    COMMENT = "comment"

    def kinds(self) -> tuple[SearchKind, ...]:
        """Kinds selected by this filter, in fixed enumeration order."""
        if self is SearchTypeFilter.ALL:
            return tuple(SearchKind)
        return (SearchKind(self.value),)

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid filter values as strings."""
        return [f.value for f in cls]
