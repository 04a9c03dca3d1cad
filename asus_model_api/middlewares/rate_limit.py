from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Protocol, Tuple

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger("asus-model-api.rate-limit")

Clock = Callable[[], float]
GLOBAL_KEY = "global"


class CounterStore(Protocol):
    def increment(self, key: str, window_start: float) -> int:
        """Count one hit for ``key`` in the window starting at ``window_start``."""
        ...


class InMemoryCounterStore:
    """Per-process counters; only the current window is kept for each key.

    Keys whose window has ended are dropped the first time a newer window is counted.
    """

    def __init__(self) -> None:
        self._counters: Dict[str, Tuple[float, int]] = {}
        self._latest_window: float | None = None
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._counters)

    def _prune(self, window_start: float) -> None:
        stale = [key for key, (start, _) in self._counters.items() if start < window_start]
        for key in stale:
            del self._counters[key]

    def increment(self, key: str, window_start: float) -> int:
        with self._lock:
            if self._latest_window is None or window_start > self._latest_window:
                self._prune(window_start)
                self._latest_window = window_start
            start, count = self._counters.get(key, (window_start, 0))
            if start != window_start:
                count = 0
            count += 1
            self._counters[key] = (window_start, count)
            return count


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    reset_after: float


class FixedWindowRateLimiter:
    def __init__(
        self,
        *,
        max_requests: int = 60,
        window_seconds: float = 60.0,
        clock: Clock = time.monotonic,
        store: CounterStore | None = None,
    ) -> None:
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self.store = store if store is not None else InMemoryCounterStore()

    def hit(self, key: str = GLOBAL_KEY) -> RateLimitDecision:
        now = self.clock()
        window_start = math.floor(now / self.window_seconds) * self.window_seconds
        count = self.store.increment(key, window_start)
        return RateLimitDecision(
            allowed=count <= self.max_requests,
            limit=self.max_requests,
            remaining=max(self.max_requests - count, 0),
            reset_after=max(window_start + self.window_seconds - now, 0.0),
        )


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def global_key(_: Request) -> str:
    return GLOBAL_KEY


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject requests beyond the limiter's budget with 429 and standard RateLimit headers."""

    MESSAGE = "Too many requests, please try again later."

    def __init__(
        self,
        app,
        *,
        limiter: FixedWindowRateLimiter,
        key_func: Callable[[Request], str] = global_key,
    ) -> None:  # type: ignore[override]
        super().__init__(app)
        self.limiter = limiter
        self.key_func = key_func

    @staticmethod
    def _headers(decision: RateLimitDecision) -> dict[str, str]:
        return {
            "RateLimit-Limit": str(decision.limit),
            "RateLimit-Remaining": str(decision.remaining),
            "RateLimit-Reset": str(math.ceil(decision.reset_after)),
        }

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        if request.method == "OPTIONS":
            return await call_next(request)

        key = self.key_func(request)
        decision = self.limiter.hit(key)
        headers = self._headers(decision)

        if not decision.allowed:
            logger.warning(
                "[rate-limit] key=%s path=%s limit=%s reset_s=%s",
                key,
                request.url.path,
                decision.limit,
                headers["RateLimit-Reset"],
            )
            headers["Retry-After"] = headers["RateLimit-Reset"]
            return JSONResponse(status_code=429, content={"error": self.MESSAGE}, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response


__all__ = [
    "CounterStore",
    "FixedWindowRateLimiter",
    "InMemoryCounterStore",
    "RateLimitDecision",
    "RateLimitMiddleware",
    "client_key",
    "global_key",
]
