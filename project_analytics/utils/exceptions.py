"""
Custom exceptions for the application.
All analytics and request validation exceptions are defined here.
"""

from typing import List, Optional


class AppException(Exception):
    """Base exception for all application exceptions."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        status_code: int = 500,
        details: Optional[List[str]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or []
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str = "Validation error",
        details: Optional[List[str]] = None
    ):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=422,
            details=details
        )


class AnalyticsError(AppException):
    """Base class for failures of an analytics computation."""

    def __init__(
        self,
        message: str = "Analytics computation failed",
        code: str = "ANALYTICS_ERROR",
        details: Optional[List[str]] = None
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=422,
            details=details
        )


class InsufficientDataError(AnalyticsError):
    """Raised when a forecast is requested with too little history."""

    def __init__(
        self,
        message: str = "Insufficient historical data for forecasting",
        required: Optional[int] = None,
        received: Optional[int] = None
    ):
        details = []
        if required is not None:
            details.append(f"Required data points: {required}")
        if received is not None:
            details.append(f"Received data points: {received}")

        self.required = required
        self.received = received
        super().__init__(
            message=message,
            code="INSUFFICIENT_DATA",
            details=details
        )


class DegenerateInputError(AnalyticsError):
    """Raised when a statistic is undefined for its input (empty, or constant regressor)."""

    def __init__(
        self,
        message: str = "Degenerate input for statistical computation",
        details: Optional[List[str]] = None
    ):
        super().__init__(
            message=message,
            code="DEGENERATE_INPUT",
            details=details
        )
