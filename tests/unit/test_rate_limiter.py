"""
Unit tests for api/rate_limiter.py.
"""
from unittest.mock import MagicMock

import pytest

from api.rate_limiter import (
    RateLimitConfig,
    create_limiter,
    get_user_identifier,
    parse_limit,
    rate_limit_exceeded_handler,
)


class TestRateLimitConfig:

    def test_known_categories(self):
        config = RateLimitConfig()
        for key in ("resume", "export", "auth_login", "skills"):
            assert "/" in config.get_limit(key)

    def test_unknown_category_uses_default(self):
        config = RateLimitConfig()
        assert config.get_limit("nope") == config.get_limit("default")

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("RATE_LIMIT_EXPORT", "2/minute")
        config = RateLimitConfig()
        assert config.get_limit("export") == "2/minute"
        assert config.get_all_limits()["export"] == "2/minute"


class TestParseLimit:

    @pytest.mark.parametrize("value, expected", [
        ("10/minute", (10, 60)),
        ("5/second", (5, 1)),
        ("100/hour", (100, 3600)),
        ("1000/day", (1000, 86400)),
    ])
    def test_parse(self, value, expected):
        assert parse_limit(value) == expected

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_limit("ten per minute")


class TestIdentifier:

    def test_authenticated_user(self):
        request = MagicMock()
        request.state.user.id = 42
        assert get_user_identifier(request) == "user:42"

    def test_disabled_limiter(self):
        assert create_limiter(enabled=False).enabled is False


class TestExceededHandler:

    def test_json_429(self):
        exc = MagicMock()
        exc.detail = "5 per 1 hour"
        resp = rate_limit_exceeded_handler(MagicMock(), exc)
        assert resp.status_code == 429
        assert resp.headers["Retry-After"] == "3600"
