"""Tenant and user ID format validation for the API.

Used by get_caller_scope; both IDs end up in recent search cache keys, so
neither may contain the key separator.
"""

import re

# CUID/UUID-style: alphanumeric, hyphen, underscore.
TENANT_ID_MAX_LENGTH = 64
_TENANT_ID_RE = re.compile(
    r"^[a-zA-Z0-9_-]{1," + str(TENANT_ID_MAX_LENGTH) + r"}$"
)


def is_valid_tenant_id_format(value: str) -> bool:
    """Return True if value is a safe tenant (organization) identifier."""
    if not value or len(value) > TENANT_ID_MAX_LENGTH:
        return False
    return bool(_TENANT_ID_RE.fullmatch(value))


def is_valid_user_id_format(value: str) -> bool:
    """Return True if value is a safe user identifier (same rules as tenant IDs)."""
    return is_valid_tenant_id_format(value)
