"""
Application exception handlers.

Translate governance exceptions into the standard error envelope with the
status code from the exception mapping.
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..core.exceptions import GovernanceError, get_http_status_code
from .models.base import APIResponse

logger = logging.getLogger(__name__)


def _format_error(message: str, errors: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    return APIResponse.error_response(message=message, errors=errors).model_dump()


def register_exception_handlers(app: FastAPI, is_production: bool = True) -> None:
    """Register exception handlers for the application.

    Args:
        app: FastAPI application instance
        is_production: Hide unexpected error details when True
    """

    @app.exception_handler(GovernanceError)
    async def governance_exception_handler(request: Request, exc: GovernanceError):
        status_code = get_http_status_code(exc)
        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__} on {request.url.path}: {exc.message}")
        return JSONResponse(
            status_code=status_code,
            content=_format_error(exc.message, [exc.to_dict()]),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        message = "An unexpected error occurred" if is_production else str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_format_error(message),
        )
