"""Core constants: cache key prefixes and search policy defaults.

Single source of truth for cache key structure and the search defaults
shared by settings, services and API schemas (DRY).
"""

# Cache key prefixes
CACHE_PREFIX_RECENT_SEARCH = "recent_search"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Search defaults
SEARCH_RESULT_LIMIT_PER_KIND = 10
SEARCH_ADAPTER_TIMEOUT_SECONDS = 5.0
RECENT_SEARCH_CAPACITY = 5
SEARCH_TERM_MAX_LENGTH = 500

# Results above this score are flagged as highly relevant
HIGH_RELEVANCE_THRESHOLD = 50

# Separates tenant and user in a recent-search scope
SCOPE_SEP = "/"

# Span exporters accepted by TELEMETRY_EXPORTER
TELEMETRY_EXPORTERS = ("console", "otlp", "none")
