"""
Rate limiting for QuizApp
"""

import logging

from fastapi import FastAPI, Request
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from quizapp.core.config import settings
from quizapp.core.exceptions import create_error_response

logger = logging.getLogger(__name__)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """Answer throttled requests with the usual error envelope"""
    logger.warning("Rate limit exceeded", extra={"path": request.url.path})
    return create_error_response(
        status_code=429, message="Too many requests. Please try again later."
    )


def add_rate_limiting(app: FastAPI) -> Limiter:
    """Apply the default per-client limit to every route"""
    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[f"{settings.RATE_LIMIT_REQUESTS}/{settings.RATE_LIMIT_PERIOD} seconds"],
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)
    return limiter
