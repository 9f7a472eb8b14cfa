"""Shared utilities."""

from esgsearch.shared.utils.datetime import ensure_utc
from esgsearch.shared.utils.generators import generate_cuid

__all__ = ["ensure_utc", "generate_cuid"]
