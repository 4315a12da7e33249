"""HTTP middleware: request timeout and request ID.

Applied in main app; order matters (first added = outermost).
"""

from orgfinder.middleware.request_id import (
    RequestIdLogFilter,
    RequestIDMiddleware,
    request_id_var,
)
from orgfinder.middleware.timeout import TimeoutMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestIdLogFilter",
    "TimeoutMiddleware",
    "request_id_var",
]
