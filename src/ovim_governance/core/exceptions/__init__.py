"""Exception hierarchy for ovim-governance."""

from .base import (
    GovernanceError,
    get_http_status_code,
    create_error_response,
)
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

__all__ = [
    "GovernanceError",
    "get_http_status_code",
    "create_error_response",
    "NotFoundError",
    "AlreadyExistsError",
    "InvalidInputError",
    "PolicyDeniedError",
    "DecodeError",
    "ConfigurationError",
    "DatabaseError",
    "CacheError",
    "NamespaceLookupError",
]
