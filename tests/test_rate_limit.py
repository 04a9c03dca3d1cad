from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from asus_model_api.config import RateLimitConfig, Settings
from asus_model_api.main import create_app
from asus_model_api.middlewares.rate_limit import FixedWindowRateLimiter, InMemoryCounterStore


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


class FixedWindowRateLimiterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock(120.0)
        self.limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=self.clock)

    def test_rejects_requests_beyond_budget(self) -> None:
        decisions = [self.limiter.hit() for _ in range(4)]

        self.assertEqual([d.allowed for d in decisions], [True, True, True, False])
        self.assertEqual([d.remaining for d in decisions], [2, 1, 0, 0])
        self.assertTrue(all(d.limit == 3 for d in decisions))

    def test_window_rollover_admits_again(self) -> None:
        for _ in range(3):
            self.limiter.hit()
        self.clock.now = 179.0
        self.assertFalse(self.limiter.hit().allowed)

        self.clock.now = 180.0
        decision = self.limiter.hit()

        self.assertTrue(decision.allowed)
        self.assertEqual(decision.remaining, 2)

    def test_reset_after_counts_down_to_window_end(self) -> None:
        self.clock.now = 130.0

        self.assertAlmostEqual(self.limiter.hit().reset_after, 50.0)

    def test_keys_are_counted_separately(self) -> None:
        for _ in range(3):
            self.limiter.hit("10.0.0.1")

        self.assertFalse(self.limiter.hit("10.0.0.1").allowed)
        self.assertTrue(self.limiter.hit("10.0.0.2").allowed)

    def test_shared_store_is_used_by_every_limiter_instance(self) -> None:
        store = InMemoryCounterStore()
        first = FixedWindowRateLimiter(max_requests=2, window_seconds=60, clock=self.clock, store=store)
        second = FixedWindowRateLimiter(max_requests=2, window_seconds=60, clock=self.clock, store=store)

        first.hit()
        second.hit()

        self.assertFalse(first.hit().allowed)

    def test_store_drops_expired_keys_when_window_rolls_over(self) -> None:
        store = InMemoryCounterStore()
        limiter = FixedWindowRateLimiter(max_requests=3, window_seconds=60, clock=self.clock, store=store)
        for n in range(1000):
            limiter.hit(f"10.0.{n // 256}.{n % 256}")
        self.assertEqual(len(store), 1000)

        self.clock.now += 120
        decision = limiter.hit("10.9.9.9")

        self.assertTrue(decision.allowed)
        self.assertEqual(len(store), 1)

    def test_rejects_invalid_configuration(self) -> None:
        with self.assertRaises(ValueError):
            FixedWindowRateLimiter(max_requests=0)
        with self.assertRaises(ValueError):
            FixedWindowRateLimiter(window_seconds=0)


def test_middleware_returns_429_with_rate_limit_headers() -> None:
    app = create_app(Settings(rate_limit=RateLimitConfig(enabled=True, max_requests=2, window_seconds=3600)))
    client = TestClient(app)

    first = client.get("/api/health")
    client.get("/api/health")
    blocked = client.get("/api/health")

    assert first.status_code == 200
    assert first.headers["RateLimit-Limit"] == "2"
    assert first.headers["RateLimit-Remaining"] == "1"
    assert blocked.status_code == 429
    assert blocked.json() == {"error": "Too many requests, please try again later."}
    assert int(blocked.headers["Retry-After"]) >= 0
    assert blocked.headers["RateLimit-Remaining"] == "0"


def test_disabled_limiter_adds_no_headers() -> None:
    app = create_app(Settings(rate_limit=RateLimitConfig(enabled=False, max_requests=1)))
    client = TestClient(app)

    responses = [client.get("/api/health") for _ in range(3)]

    assert all(r.status_code == 200 for r in responses)
    assert "RateLimit-Limit" not in responses[0].headers


def test_per_client_middleware_keys_budget_by_client_host() -> None:
    app = create_app(
        Settings(rate_limit=RateLimitConfig(enabled=True, max_requests=1, window_seconds=3600, per_client=True))
    )
    first_client = TestClient(app, client=("10.0.0.1", 50000))
    second_client = TestClient(app, client=("10.0.0.2", 50000))

    assert first_client.get("/api/health").status_code == 200
    assert first_client.get("/api/health").status_code == 429
    assert second_client.get("/api/health").status_code == 200
