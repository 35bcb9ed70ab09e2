from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
import logging
import time
from typing import Callable

logger = logging.getLogger(__name__)

class RequestLogMiddleware(BaseHTTPMiddleware):
    """One log line per request: method, path, status, duration."""

    async def dispatch(self, request: Request, call_next: Callable):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} -> {status_code} ({elapsed_ms:.1f} ms)")
