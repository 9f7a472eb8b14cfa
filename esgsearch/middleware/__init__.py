"""HTTP middleware: request timeout and request ID.

Applied in main app; order matters (last added = outermost).
"""

from esgsearch.middleware.request_id import RequestIDMiddleware
from esgsearch.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
