#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Rate Limiting Module

slowapi limiter keyed by authenticated user or client IP, with per-category
limits taken from settings.

Usage:
    from api.rate_limiter import limiter, rate_limit_config

    @router.post("/api/auth/login")
    @limiter.limit(rate_limit_config.get_limit("auth_login"))
    async def login(request: Request, ...):
        ...
"""

import os
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from config.settings import settings


@dataclass
class RateLimitConfig:
    """
    Centralized rate limit configuration.

    Limits are "count/period" strings ("10/minute", "100/hour").
    RATE_LIMIT_<CATEGORY> environment variables override single categories.
    """

    defaults: Dict[str, str] = field(default_factory=lambda: {
        "health": "120/minute",

        # Resume CRUD and preview
        "resume": settings.rate_limit,

        # PDF rendering and uploads (CPU and storage heavy)
        "export": settings.export_rate_limit,

        # Auth endpoints
        "auth_login": settings.auth_rate_limit,
        "auth_register": settings.auth_rate_limit,
        "auth_refresh": "30/minute",
        "auth_password": settings.auth_rate_limit,

        "skills": settings.rate_limit,

        # Fallback
        "default": settings.rate_limit,
    })

    env_overrides: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Load overrides from environment variables."""
        for key in self.defaults.keys():
            env_key = f"RATE_LIMIT_{key.upper()}"
            if env_value := os.getenv(env_key):
                self.env_overrides[key] = env_value

    def get_limit(self, endpoint: str) -> str:
        """Rate limit string for an endpoint category."""
        if endpoint in self.env_overrides:
            return self.env_overrides[endpoint]
        if endpoint in self.defaults:
            return self.defaults[endpoint]
        return self.defaults["default"]

    def get_all_limits(self) -> Dict[str, str]:
        result = self.defaults.copy()
        result.update(self.env_overrides)
        return result


# Create global config instance
rate_limit_config = RateLimitConfig()


def get_user_identifier(request: Request) -> str:
    """
    Unique identifier for rate limiting: the authenticated user when the
    request carries one, else the client IP.
    """
    user = getattr(request.state, "user", None)
    if user is not None and getattr(user, "id", None) is not None:
        return f"user:{user.id}"
    return get_remote_address(request)


def create_limiter(
    key_func: Optional[Callable] = None,
    storage_uri: Optional[str] = None,
    enabled: Optional[bool] = None,
) -> Limiter:
    """Create a configured rate limiter instance (in-memory unless storage_uri)."""
    limiter_kwargs = {
        "key_func": key_func or get_user_identifier,
        "default_limits": [rate_limit_config.get_limit("default")],
        "enabled": settings.rate_limit_enabled if enabled is None else enabled,
    }
    if storage_uri:
        limiter_kwargs["storage_uri"] = storage_uri
    return Limiter(**limiter_kwargs)


# Create default limiter instance
limiter = create_limiter()


def parse_limit(limit_str: str) -> tuple:
    """
    Parse a rate limit string into (count, period_seconds).

    Raises:
        ValueError: for strings not shaped like "10/minute"
    """
    parts = limit_str.split("/")
    if len(parts) != 2:
        raise ValueError(f"Invalid limit format: {limit_str}")

    count = int(parts[0])
    period_seconds = {
        "second": 1,
        "minute": 60,
        "hour": 3600,
        "day": 86400,
    }.get(parts[1].strip().lower(), 60)

    return count, period_seconds


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """JSON 429 with a Retry-After header."""
    limit_value = str(exc.detail) if hasattr(exc, "detail") else "Rate limit exceeded"

    retry_after = 60
    if "second" in limit_value:
        retry_after = 1
    elif "hour" in limit_value:
        retry_after = 3600
    elif "day" in limit_value:
        retry_after = 86400

    return JSONResponse(
        status_code=429,
        content={
            "error": "rate_limit_exceeded",
            "message": "Too many requests. Please slow down.",
            "detail": limit_value,
            "retry_after_seconds": retry_after,
            "timestamp": time.time(),
        },
        headers={
            "Retry-After": str(retry_after),
            "X-RateLimit-Limit": limit_value,
        }
    )
