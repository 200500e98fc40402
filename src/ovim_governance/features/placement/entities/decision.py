"""Placement decision value."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ....core.exceptions import PolicyDeniedError
from ....core.value_objects import DenialReason


@dataclass(frozen=True)
class PlacementDecision:
    """Outcome of an accommodation check.

    A recommendation valid at the instant it was computed; committing the
    VDC afterwards must happen inside the same per-zone scope.
    """

    allowed: bool
    reason: Optional[DenialReason] = None
    message: str = ""
    details: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def accept(cls) -> "PlacementDecision":
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenialReason, detail: str = "", **details: Any) -> "PlacementDecision":
        message = f"{reason.value}: {detail}" if detail else reason.value
        return cls(allowed=False, reason=reason, message=message, details=details)

    def raise_for_denial(self) -> None:
        if not self.allowed:
            raise PolicyDeniedError(self.reason, self.message, details=dict(self.details))
