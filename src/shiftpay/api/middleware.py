"""HTTP middleware: security headers and fixed-window rate limiting."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from shiftpay.core.exceptions import CacheError

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}

RATE_LIMITED_PREFIX = "/api/"


async def security_headers(request: Request, call_next: CallNext) -> Response:
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


async def rate_limit(request: Request, call_next: CallNext) -> Response:
    """Count /api/ requests per client IP in fixed windows; 429 past the limit.

    Counter backend failures let the request through.
    """
    config = request.app.state.settings.rate_limit
    if not config.enabled or not request.url.path.startswith(RATE_LIMITED_PREFIX):
        return await call_next(request)

    client = request.client.host if request.client else "unknown"
    window = int(time.time() // config.window_seconds)
    key = f"ratelimit:{client}:{window}"

    try:
        count = await asyncio.to_thread(request.app.state.counters.incr, key, config.window_seconds)
    except CacheError as exc:
        logger.warning("Rate limit check skipped: %s", exc)
        return await call_next(request)

    if count > config.max_requests:
        return JSONResponse(
            status_code=429,
            content={
                "success": False,
                "error": "Too many requests from this IP, please try again later.",
            },
        )
    return await call_next(request)
