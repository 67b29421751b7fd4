"""Custom middleware components."""

from compliment_engine.core.middleware.request_id import RequestIDMiddleware
from compliment_engine.core.middleware.timing import TimingMiddleware

__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
]
