"""
Error handling middleware for the application.
"""

import time
import traceback
import uuid
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

from project_analytics.utils.exceptions import AppException

logger = structlog.get_logger()


def error_response(request: Request, status_code: int, code: str, message: str, details=None) -> JSONResponse:
    """Build the standard error envelope."""
    request_id = getattr(request.state, "request_id", "unknown")
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message,
                "details": details or []
            },
            "meta": {
                "timestamp": time.time(),
                "request_id": request_id,
                "path": str(request.url.path)
            }
        },
        headers={"x-request-id": request_id}
    )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application exceptions raised by routes and services."""
    logger.warning(
        "Application exception occurred",
        request_id=getattr(request.state, "request_id", "unknown"),
        error_code=exc.code,
        error_message=exc.message,
        status_code=exc.status_code,
        path=request.url.path,
        method=request.method
    )
    return error_response(request, exc.status_code, exc.code, exc.message, exc.details)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Assigns request IDs and turns unexpected exceptions into error envelopes."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and handle any exceptions."""
        request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
        request.state.request_id = request_id

        try:
            response = await call_next(request)
        except AppException as exc:
            return await app_exception_handler(request, exc)
        except Exception as exc:
            logger.error(
                "Unexpected exception occurred",
                request_id=request_id,
                error_type=type(exc).__name__,
                error_message=str(exc),
                traceback=traceback.format_exc(),
                path=request.url.path,
                method=request.method
            )
            return error_response(
                request,
                500,
                "INTERNAL_SERVER_ERROR",
                "An unexpected error occurred"
            )

        response.headers["x-request-id"] = request_id
        return response
