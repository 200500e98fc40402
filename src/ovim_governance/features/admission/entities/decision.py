"""Admission decision value."""

from dataclasses import dataclass
from typing import Optional

from ....core.value_objects import DenialReason

STATUS_ALLOWED = 200
STATUS_BAD_REQUEST = 400
STATUS_FORBIDDEN = 403


@dataclass(frozen=True)
class AdmissionDecision:
    """Allowed or denied, the operator-facing message, and the status code.

    A decode failure is ``allowed=False`` with status 400 and no reason:
    the payload was at fault, not the policy.
    """

    allowed: bool
    message: str = ""
    status_code: int = STATUS_ALLOWED
    reason: Optional[DenialReason] = None

    @classmethod
    def allow(cls, message: str = "") -> "AdmissionDecision":
        return cls(allowed=True, message=message)

    @classmethod
    def deny(cls, reason: DenialReason, message: str) -> "AdmissionDecision":
        return cls(allowed=False, message=message, status_code=STATUS_FORBIDDEN, reason=reason)

    @classmethod
    def bad_request(cls, message: str) -> "AdmissionDecision":
        return cls(allowed=False, message=message, status_code=STATUS_BAD_REQUEST)

    @property
    def is_decode_error(self) -> bool:
        return self.status_code == STATUS_BAD_REQUEST
