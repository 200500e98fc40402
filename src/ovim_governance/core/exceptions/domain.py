"""Domain exceptions for resource governance.

NotFound, AlreadyExists and InvalidInput come from the storage collaborators
and the ledger; PolicyDenied and Decode come from the decision functions.
"""

from typing import Any, Dict, Optional

from .base import GovernanceError
from ..value_objects.denial_reason import DenialReason


class NotFoundError(GovernanceError):
    """Raised when a referenced zone, ledger row, VDC or namespace is absent."""

    def __init__(self, entity_type: str, entity_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"{entity_type} '{entity_id}' not found",
            error_code="NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": entity_id, **(details or {})},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class AlreadyExistsError(GovernanceError):
    """Raised on a uniqueness violation during create."""

    def __init__(self, entity_type: str, entity_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=f"{entity_type} '{entity_id}' already exists",
            error_code="ALREADY_EXISTS",
            details={"entity_type": entity_type, "entity_id": entity_id, **(details or {})},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvalidInputError(GovernanceError):
    """Raised when a required identifier or argument is missing or malformed."""

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        enhanced_details = details or {}
        if field:
            enhanced_details["field"] = field
        super().__init__(message=message, error_code="INVALID_INPUT", details=enhanced_details)
        self.field = field


class PolicyDeniedError(GovernanceError):
    """Raised when a caller wants a denial as an exception instead of a decision."""

    def __init__(self, reason: DenialReason, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=f"POLICY_DENIED_{reason.name}",
            details={"reason": reason.value, **(details or {})},
        )
        self.reason = reason


class DecodeError(GovernanceError):
    """Raised when an admission payload cannot be decoded.

    This is a protocol fault on the caller's side, never a policy outcome.
    """

    def __init__(self, message: str, kind: Optional[str] = None):
        super().__init__(
            message=message,
            error_code="DECODE_ERROR",
            details={"kind": kind} if kind else {},
        )
        self.kind = kind
