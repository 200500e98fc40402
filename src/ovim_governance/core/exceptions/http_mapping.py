"""HTTP status code mapping for exceptions.

Decode errors map to a client error: the payload is at fault, not the engine.
"""

from typing import Dict, Type

from .base import GovernanceError
from .domain import (
    NotFoundError,
    AlreadyExistsError,
    InvalidInputError,
    PolicyDeniedError,
    DecodeError,
)
from .infrastructure import (
    ConfigurationError,
    DatabaseError,
    CacheError,
    NamespaceLookupError,
)


HTTP_STATUS_MAP: Dict[Type[Exception], int] = {
    # 400 Bad Request
    InvalidInputError: 400,
    DecodeError: 400,

    # 403 Forbidden
    PolicyDeniedError: 403,

    # 404 Not Found
    NotFoundError: 404,

    # 409 Conflict
    AlreadyExistsError: 409,

    # 500 Internal Server Error
    ConfigurationError: 500,
    DatabaseError: 500,
    CacheError: 500,

    # 503 Service Unavailable
    NamespaceLookupError: 503,

    # Default for GovernanceError
    GovernanceError: 500,
}


def get_http_status_code(exception: Exception) -> int:
    """Resolve the status code by walking the exception's MRO."""
    for exception_type in type(exception).__mro__:
        if exception_type in HTTP_STATUS_MAP:
            return HTTP_STATUS_MAP[exception_type]
    return 500
