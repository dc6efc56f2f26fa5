"""
Logging middleware for request/response logging.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

logger = structlog.get_logger()


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log HTTP requests and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Log request and response information."""
        start_time = time.time()

        client_ip = self._get_client_ip(request)
        request_id = getattr(request.state, "request_id", "unknown")

        logger.info(
            "Request started",
            method=request.method,
            path=request.url.path,
            client_ip=client_ip,
            request_id=request_id
        )

        response = await call_next(request)

        process_time = time.time() - start_time

        logger.info(
            "Request completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time=f"{process_time:.4f}s",
            client_ip=client_ip,
            request_id=request_id
        )

        response.headers["x-process-time"] = f"{process_time:.4f}"

        return response

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address from request."""
        # X-Forwarded-For can contain multiple IPs, take the first one
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
