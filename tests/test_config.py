import pytest

from asus_model_api.config import (
    DEFAULT_ACCEPT_LANGUAGE,
    DEFAULT_USER_AGENT,
    _as_bool,
    _as_float,
    _parse_allowed_origins,
    get_settings,
)


@pytest.fixture()
def fresh_settings():
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


def test_parse_allowed_origins_with_paths() -> None:
    raw = "https://example.com/app, https://demo.com/sub"
    assert _parse_allowed_origins(raw) == [
        "https://example.com",
        "https://demo.com",
    ]


def test_parse_allowed_origins_with_wildcard() -> None:
    assert _parse_allowed_origins("https://example.com,*") == ["*"]


def test_parse_allowed_origins_deduplicates_and_handles_empty() -> None:
    raw = " https://example.com/ , https://example.com ,"
    assert _parse_allowed_origins(raw) == ["https://example.com"]


def test_parse_allowed_origins_adds_scheme_to_bare_hosts() -> None:
    raw = "localhost:5173, shop.example.com/path"
    assert _parse_allowed_origins(raw) == [
        "http://localhost:5173",
        "http://shop.example.com",
    ]


def test_parse_allowed_origins_defaults_to_wildcard() -> None:
    assert _parse_allowed_origins("") == ["*"]


def test_bool_and_float_helpers_fall_back_on_garbage() -> None:
    assert _as_bool(None, True) is True
    assert _as_bool(" Yes ", False) is True
    assert _as_bool("off", True) is False
    assert _as_float("abc", 15.0) == 15.0
    assert _as_float("-3", 15.0) == 15.0
    assert _as_float("2.5", 15.0) == 2.5


def test_settings_defaults(monkeypatch, fresh_settings) -> None:
    for name in (
        "ALLOWED_ORIGINS",
        "FETCH_TIMEOUT_SECONDS",
        "FETCH_USER_AGENT",
        "FETCH_ACCEPT_LANGUAGE",
        "RATE_LIMIT_ENABLED",
        "RATE_LIMIT_MAX",
        "RATE_LIMIT_WINDOW_SECONDS",
        "RATE_LIMIT_PER_CLIENT",
        "PORT",
    ):
        monkeypatch.delenv(name, raising=False)

    settings = fresh_settings()

    assert settings.allowed_origins == ["*"]
    assert settings.fetch.timeout_seconds == 15.0
    assert settings.fetch.headers == {
        "User-Agent": DEFAULT_USER_AGENT,
        "Accept-Language": DEFAULT_ACCEPT_LANGUAGE,
    }
    assert settings.rate_limit.enabled is True
    assert settings.rate_limit.max_requests == 60
    assert settings.rate_limit.window_seconds == 60.0
    assert settings.rate_limit.per_client is False
    assert settings.port == 8080


def test_settings_read_from_environment(monkeypatch, fresh_settings) -> None:
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://shop.example.co.il/catalog")
    monkeypatch.setenv("FETCH_TIMEOUT_SECONDS", "5")
    monkeypatch.setenv("RATE_LIMIT_MAX", "10")
    monkeypatch.setenv("RATE_LIMIT_WINDOW_SECONDS", "not-a-number")
    monkeypatch.setenv("RATE_LIMIT_PER_CLIENT", "true")
    monkeypatch.setenv("PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = fresh_settings()

    assert settings.allowed_origins == ["https://shop.example.co.il"]
    assert settings.fetch.timeout_seconds == 5.0
    assert settings.rate_limit.max_requests == 10
    assert settings.rate_limit.window_seconds == 60.0
    assert settings.rate_limit.per_client is True
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"
