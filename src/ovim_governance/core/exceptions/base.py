"""Base exceptions for ovim-governance.

All exceptions inherit from GovernanceError and carry an error code and
structured details for API responses and operator diagnostics.
"""

from typing import Any, Dict, Optional


class GovernanceError(Exception):
    """Base exception for all governance errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": self.__class__.__name__,
        }


def get_http_status_code(exception: Exception) -> int:
    """Get HTTP status code for exception.

    Args:
        exception: The exception instance

    Returns:
        HTTP status code
    """
    from .http_mapping import get_http_status_code as _mapped_status_code
    return _mapped_status_code(exception)


def create_error_response(exception: GovernanceError) -> Dict[str, Any]:
    """Create standardized error response from exception."""
    return {"error": exception.to_dict()}
