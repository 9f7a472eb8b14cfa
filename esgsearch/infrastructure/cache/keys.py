"""Cache key builders. Single place for key format (DRY).

Key components must not contain CACHE_KEY_SEP to avoid ambiguous or
colliding keys.
"""

from esgsearch.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_RECENT_SEARCH


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def recent_search_key(scope: str) -> str:
    """Cache key for the recent search list of a tenant/user scope."""
    _validate_key_component(scope, "scope")
    return f"{CACHE_PREFIX_RECENT_SEARCH}{CACHE_KEY_SEP}{scope}"
