"""Relevance scoring for search candidates.

Case-insensitive substring matching only: an exact field match outranks a
prefix match, which outranks a substring match, and a match in an earlier
field outranks the same match in a later one. Scores are not normalized and
are only comparable within one search.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from esgsearch.domain.enums import SearchKind

if TYPE_CHECKING:
    from esgsearch.application.dtos.search import RawCandidate

EXACT_MATCH_POINTS = 100
PREFIX_MATCH_POINTS = 50
SUBSTRING_MATCH_POINTS = 25

# Scorable fields per kind, highest weight first. None is a placeholder that
# never scores (comment titles are synthesized, not searchable text).
FIELD_ORDER: dict[SearchKind, tuple[str | None, ...]] = {
    SearchKind.REPORT: ("title", "description"),
    SearchKind.DATA_ENTRY: ("metric_name", "notes"),
    SearchKind.DOCUMENT: ("name", "description"),
    SearchKind.COMMENT: (None, "content"),
}


def positional_fields(
    values: Sequence[str | None],
) -> list[tuple[str | None, int]]:
    """Pair each value with its positional weight (field_count - index)."""
    count = len(values)
    return [(value, count - index) for index, value in enumerate(values)]


def _match_points(field: str, term: str) -> int:
    if field == term:
        return EXACT_MATCH_POINTS
    if field.startswith(term):
        return PREFIX_MATCH_POINTS
    if term in field:
        return SUBSTRING_MATCH_POINTS
    return 0


def score(term: str, fields: Sequence[tuple[str | None, int]]) -> int:
    """Score term against ordered (value, weight) fields.

    Args:
        term: Non-empty search term (callers trim and guard).
        fields: (value, weight) pairs; None, empty and whitespace-only values score 0.

    Returns:
        Sum of match points times weight across fields.

    Raises:
        ValueError: If term is empty or whitespace-only.
    """
    if not term or not term.strip():
        raise ValueError("Cannot score an empty search term")
    lowered_term = term.lower()
    total = 0
    for value, weight in fields:
        if not value or not value.strip():
            continue
        total += _match_points(value.lower(), lowered_term) * weight
    return total


def candidate_field_values(candidate: RawCandidate) -> list[str | None]:
    """Scorable values of candidate in its kind's field order."""
    return [
        candidate.text_fields.get(name) if name is not None else None
        for name in FIELD_ORDER[candidate.kind]
    ]


def score_candidate(term: str, candidate: RawCandidate) -> int:
    """Score candidate using the field ordering of its kind."""
    return score(term, positional_fields(candidate_field_values(candidate)))
