"""
Error taxonomy for the pattern service

Only two errors cross the service boundary:
- NotFoundError: unknown or inactive industry code (404)
- ValidationError: malformed request at the HTTP boundary (400)

Everything else (unknown sectors, empty catalogs, empty canvas store)
degrades to an empty-but-valid result.
"""
from typing import Any, Dict
import logging

logger = logging.getLogger(__name__)


class PatternServiceError(Exception):
    """Base exception for pattern service errors."""
    def __init__(self, code: str, message: str, status_code: int = 400):
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(PatternServiceError):
    """Raised when a referenced catalog entity does not exist or is inactive."""
    def __init__(self, entity: str, key: str = ""):
        message = f"{entity.capitalize()} not found"
        if key:
            message = f"{message}: {key}"
        super().__init__(
            code="NOT_FOUND",
            message=message,
            status_code=404,
        )
        self.entity = entity
        self.key = key


class ValidationError(PatternServiceError):
    """Raised by the HTTP boundary when required input is missing."""
    def __init__(self, field: str, message: str):
        super().__init__(
            code="VALIDATION_ERROR",
            message=message,
            status_code=400,
        )
        self.field = field


def map_error_to_response(error: Exception) -> Dict[str, Any]:
    """
    Map an exception to the JSON error envelope.

    Returns:
        Dict with 'error', 'code', 'message', 'status_code'
    """
    if isinstance(error, PatternServiceError):
        body = {
            "error": True,
            "code": error.code,
            "message": error.message,
            "status_code": error.status_code,
        }
        if isinstance(error, ValidationError):
            body["details"] = {"field": error.field}
        return body

    logger.error(f"Unmapped error: {type(error).__name__}: {error}")
    return {
        "error": True,
        "code": "INTERNAL_ERROR",
        "message": "An internal error occurred",
        "status_code": 500,
    }
