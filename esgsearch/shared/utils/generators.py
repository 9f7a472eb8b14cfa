"""Record ID generator (CUID2), used as the default primary key of ORM models."""

from cuid2 import cuid_wrapper

_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant record identifier."""
    value = _cuid()
    if not isinstance(value, str):
        raise TypeError(f"Expected str from cuid2, got {type(value).__name__}")
    return value
