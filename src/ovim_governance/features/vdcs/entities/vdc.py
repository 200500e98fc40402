"""Virtual data center entity.

A VDC is the unit of commitment against a zone. Its quota fields are the
VDC's own ceiling; every assigned VDC reserves them regardless of phase.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ....config.constants import VDCPhase
from ....core.value_objects import ResourceAmounts


@dataclass
class VirtualDataCenter:
    """VDC owned by one organization and optionally placed in one zone."""

    id: str
    name: str
    org_id: str
    zone_id: Optional[str] = None
    phase: str = VDCPhase.PENDING.value
    namespace: Optional[str] = None
    description: Optional[str] = None

    cpu_quota: int = 0
    memory_quota: int = 0
    storage_quota: int = 0

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def resources(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_quota, self.memory_quota, self.storage_quota)

    @property
    def is_placed(self) -> bool:
        """Unassigned VDCs are legacy/unplaced and excluded from zone usage."""
        return bool(self.zone_id)

    def is_in_phase(self, phase: str) -> bool:
        return self.phase == phase
