"""
Floor OEE - Custom Exception Classes

This module defines custom exception classes for the Floor OEE service.
Record-level exceptions (ParseError, InvalidIntervalError) are raised by the
interval parser and caught per record so that one bad input never aborts a
run. The remaining exceptions surface through the API with proper HTTP status
codes and structured error information.
"""

from typing import Any, Dict, Optional
from fastapi import status


class FloorOEEException(Exception):
    """Base exception class for Floor OEE."""

    def __init__(
        self,
        message: str,
        error_code: str = "FLOOR_OEE_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ParseError(FloorOEEException):
    """Exception raised when a raw record or timestamp cannot be parsed."""

    def __init__(self, message: str = "Record could not be parsed", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="PARSE_ERROR",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details
        )


class InvalidIntervalError(FloorOEEException):
    """Exception raised when an interval does not end after it starts."""

    def __init__(self, message: str = "Interval end must be after start", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="INVALID_INTERVAL",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details
        )


class DataSourceError(FloorOEEException):
    """Exception raised when an input data file cannot be read."""

    def __init__(self, source: str, message: str = "Data source could not be loaded", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"{source}: {message}",
            error_code="DATA_SOURCE_ERROR",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details={"source": source, **(details or {})}
        )


class EngineNotReadyError(FloorOEEException):
    """Exception raised when metrics are requested before the engine is built."""

    def __init__(self, message: str = "Metrics engine is not ready", details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code="ENGINE_NOT_READY",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=details
        )


# Utility functions for exception handling
def handle_validation_exception(e: Exception) -> ParseError:
    """Convert pydantic/value errors raised while reading a record to ParseError."""
    return ParseError("Input validation failed", {"original_error": str(e)})
