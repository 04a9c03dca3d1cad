from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List
from urllib.parse import urlparse

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; ASUS-Model-Viewer/1.0)"
DEFAULT_ACCEPT_LANGUAGE = "en-US,en;q=0.9,he;q=0.8"


def _as_bool(value: str | None, default: bool) -> bool:
    """Interpret common truthy / falsy strings while providing a default."""

    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _as_int(value: str | None, default: int, *, minimum: int = 0) -> int:
    if value is None or not value.strip():
        return default
    try:
        return max(int(value), minimum)
    except (TypeError, ValueError):
        return default


def _as_float(value: str | None, default: float) -> float:
    if value is None or not value.strip():
        return default
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


def _normalise_origin(value: str) -> str | None:
    """
    Normalise a single origin:
    - "*" passes through
    - bare hosts (e.g. localhost:5173) get an http:// scheme
    - paths are dropped, keeping scheme://host[:port]
    - unusable values return None
    """
    v = value.strip()
    if not v:
        return None
    if v == "*":
        return "*"
    if "://" not in v:
        # browsers always send a scheme in Origin
        v = "http://" + v
    p = urlparse(v)
    if not (p.scheme and p.netloc):
        return None
    return f"{p.scheme}://{p.netloc}"


def _parse_allowed_origins(raw: str | None) -> List[str]:
    """Normalise comma-separated origins into values accepted by CORSMiddleware."""

    if not raw:
        return ["*"]

    cleaned: List[str] = []
    for token in raw.split(","):
        origin = _normalise_origin(token)
        if origin == "*":
            return ["*"]
        if origin and origin not in cleaned:
            cleaned.append(origin)

    return cleaned or ["*"]


@dataclass
class FetchConfig:
    timeout_seconds: float = 15.0
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = DEFAULT_ACCEPT_LANGUAGE

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept-Language": self.accept_language}


@dataclass
class RateLimitConfig:
    enabled: bool = True
    max_requests: int = 60
    window_seconds: float = 60.0
    per_client: bool = False

    @classmethod
    def from_env(cls) -> "RateLimitConfig":
        return cls(
            enabled=_as_bool(os.getenv("RATE_LIMIT_ENABLED"), True),
            max_requests=_as_int(os.getenv("RATE_LIMIT_MAX"), 60, minimum=1),
            window_seconds=_as_float(os.getenv("RATE_LIMIT_WINDOW_SECONDS"), 60.0),
            per_client=_as_bool(os.getenv("RATE_LIMIT_PER_CLIENT"), False),
        )


@dataclass
class Settings:
    environment: str = "development"
    allowed_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    fetch: FetchConfig = field(default_factory=FetchConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    host: str = "0.0.0.0"
    port: int = 8080


@lru_cache()
def get_settings() -> Settings:
    def _get(name: str, default: str | None = None) -> str | None:
        v = os.getenv(name)
        return v if v is not None else default

    fetch = FetchConfig(
        timeout_seconds=_as_float(_get("FETCH_TIMEOUT_SECONDS"), 15.0),
        user_agent=_get("FETCH_USER_AGENT") or DEFAULT_USER_AGENT,
        accept_language=_get("FETCH_ACCEPT_LANGUAGE") or DEFAULT_ACCEPT_LANGUAGE,
    )

    return Settings(
        environment=_get("ENVIRONMENT", "development") or "development",
        allowed_origins=_parse_allowed_origins(_get("ALLOWED_ORIGINS", "*")),
        log_level=(_get("LOG_LEVEL", "INFO") or "INFO").upper(),
        fetch=fetch,
        rate_limit=RateLimitConfig.from_env(),
        host=_get("HOST", "0.0.0.0") or "0.0.0.0",
        port=_as_int(_get("PORT"), 8080, minimum=1),
    )
