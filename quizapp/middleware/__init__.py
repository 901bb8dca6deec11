"""Middleware modules for the QuizApp backend"""

from .rate_limit import add_rate_limiting
from .request_logging import RequestLoggingMiddleware

__all__ = [
    "add_rate_limiting",
    "RequestLoggingMiddleware",
]
