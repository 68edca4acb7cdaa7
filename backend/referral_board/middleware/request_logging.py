"""
Request Logging Middleware

Logs one line per request (method and path) and whether an auth token was
supplied. Token values and request bodies are never logged.
"""

import logging
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from referral_board.auth import TOKEN_HEADER

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        has_token = TOKEN_HEADER in request.headers or "authorization" in request.headers
        logger.info(f"{request.method} {request.url.path}{' (auth token present)' if has_token else ''}")
        return await call_next(request)
