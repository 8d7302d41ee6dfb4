"""
Custom middleware for rate limiting and request logging
"""

import logging
import time
from collections import defaultdict, deque
from typing import Iterable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

DEFAULT_EXEMPT_PATHS = ("/", "/api/v1/health", "/docs", "/openapi.json")


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Sliding-window, per-client rate limit kept in memory"""

    def __init__(
        self,
        app,
        calls: int = 30,
        period: int = 60,
        exempt_paths: Optional[Iterable[str]] = None,
    ):
        super().__init__(app)
        self.calls = calls
        self.period = period
        self.exempt_paths = set(exempt_paths or DEFAULT_EXEMPT_PATHS)
        self.clients = defaultdict(deque)

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = request.client.host if request.client is not None else "unknown"
        now = time.time()
        self._evict_idle(now)
        window = self.clients[client_ip]

        while window and window[0] <= now - self.period:
            window.popleft()

        if len(window) >= self.calls:
            logger.warning("Rate limit exceeded for IP: %s", client_ip)
            return JSONResponse(
                status_code=429,
                content={
                    "detail": {
                        "error": "Rate limit exceeded",
                        "details": f"Maximum {self.calls} requests per {self.period} seconds",
                    }
                },
            )

        window.append(now)
        return await call_next(request)

    def _evict_idle(self, now: float) -> None:
        """Forget clients whose newest request is outside the window."""
        cutoff = now - self.period
        idle = [ip for ip, window in self.clients.items() if not window or window[-1] <= cutoff]
        for ip in idle:
            del self.clients[ip]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        client_host = request.client.host if request.client is not None else "unknown"
        logger.info(
            "Request: %s %s from %s", request.method, request.url.path, client_host
        )

        response = await call_next(request)

        logger.info(
            "Response: %s %s -> %d in %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            time.time() - start_time,
        )
        return response
