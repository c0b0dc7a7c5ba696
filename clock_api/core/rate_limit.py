"""Rate limiting dependency for FastAPI routes.

This module wires the limiter adapter into the HTTP layer.

The limiter (and the counter store behind it) is built once by the app
factory and kept on ``app.state``; routes only depend on
``enforce_rate_limit``. Requests are keyed by the client IP resolved from
proxy headers.
"""

from __future__ import annotations

import hashlib
import logging

from fastapi import HTTPException, Request, Response, status

from clock_api.adapters.rate_limit.base import RateLimitResult
from clock_api.adapters.rate_limit.limiter import FixedWindowRateLimiter
from clock_api.core.client_ip import get_client_ip
from clock_api.core.config import settings

logger = logging.getLogger(__name__)


def get_rate_limiter(request: Request) -> FixedWindowRateLimiter:
    """Return the process-wide limiter created at startup."""

    return request.app.state.rate_limiter


def _hash_limiter_key(key: str) -> str:
    """Hash the client key for logging without exposing addresses."""
    return hashlib.sha256(key.encode()).hexdigest()[:16]


def rate_limit_headers(result: RateLimitResult | None) -> dict[str, str]:
    """Build the X-RateLimit-* headers describing ``result``."""

    if result is None or not settings.app.rate_limit_include_headers:
        return {}
    return {
        "X-RateLimit-Limit": str(result.limit),
        "X-RateLimit-Remaining": str(result.remaining),
        "X-RateLimit-Reset": str(result.reset),
    }


async def enforce_rate_limit(request: Request, response: Response) -> None:
    """FastAPI dependency enforcing the per-client rate limit.

    Counts the request against the caller's budget. The decision is stored
    on ``request.state.rate_limit`` so handlers returning their own
    ``Response`` can copy the quota headers.

    Args:
        request: FastAPI request.
        response: Response whose headers FastAPI merges into the reply.

    Raises:
        HTTPException: 429 Too Many Requests when the budget is exhausted.
    """

    if not settings.app.rate_limit_enabled:
        return

    limiter = get_rate_limiter(request)
    client_ip = get_client_ip(request.headers)
    key_hash = _hash_limiter_key(client_ip)
    window_s = settings.app.rate_limit_window_seconds

    result = await limiter.check(
        client_ip,
        limit=settings.app.rate_limit_requests,
        window_seconds=window_s,
    )
    request.state.rate_limit = result
    headers = rate_limit_headers(result)

    if result.success:
        logger.info(
            "rate_limit.allowed",
            extra={
                "key_hash": key_hash,
                "limit": result.limit,
                "remaining": result.remaining,
                "window_s": window_s,
            },
        )
        response.headers.update(headers)
        return

    retry_after = result.retry_after_seconds(limiter.now_ms())
    logger.warning(
        "rate_limit.exceeded",
        extra={
            "key_hash": key_hash,
            "limit": result.limit,
            "remaining": result.remaining,
            "window_s": window_s,
            "retry_after_s": retry_after,
        },
    )

    if headers:
        headers["Retry-After"] = str(retry_after)

    raise HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail="Rate limit exceeded. Try again later.",
        headers=headers or None,
    )
