from __future__ import annotations

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from skillsphere.core.config import settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later"
RATE_LIMIT_SCOPE = "app"

limiter = Limiter(
    key_func=get_remote_address,
    strategy="fixed-window",
    enabled=settings.rate_limit_enabled,
)


def rate_limit():
    # Every decorated route draws from the same window per client address.
    if settings.rate_limit_enabled:
        return limiter.shared_limit(settings.rate_limit, scope=RATE_LIMIT_SCOPE)

    def decorator(func):
        return func

    return decorator


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    logger.info("rate_limit_exceeded client=%s path=%s limit=%s", get_remote_address(request), request.url.path, exc.detail)
    return JSONResponse(status_code=429, content={"error": RATE_LIMIT_MESSAGE})
