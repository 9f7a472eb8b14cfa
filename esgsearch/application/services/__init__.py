"""Application services: relevance scoring."""

from esgsearch.application.services.relevance_scorer import (
    FIELD_ORDER,
    positional_fields,
    score,
    score_candidate,
)

__all__ = [
    "FIELD_ORDER",
    "positional_fields",
    "score",
    "score_candidate",
]
