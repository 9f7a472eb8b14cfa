"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports. Searches fan out to four collections per
call, so the search endpoint is limited per client address.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from esgsearch.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def search_rate_limit() -> str:
    """Limit string for the search endpoint (resolved per request from settings)."""
    return get_settings().search_rate_limit


limit_search = limiter.limit(search_rate_limit)
