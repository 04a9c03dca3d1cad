"""HTTP middleware for the model API."""
from __future__ import annotations

from asus_model_api.middlewares.rate_limit import (
    FixedWindowRateLimiter,
    InMemoryCounterStore,
    RateLimitMiddleware,
)
from asus_model_api.middlewares.security_headers import SecurityHeadersMiddleware

__all__ = [
    "FixedWindowRateLimiter",
    "InMemoryCounterStore",
    "RateLimitMiddleware",
    "SecurityHeadersMiddleware",
]
