"""Organization-zone quota ledger entry."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ....core.value_objects import ResourceAmounts
from ...zones.entities import Zone


@dataclass
class OrganizationZoneQuota:
    """How much of one zone one organization may consume.

    ``is_allowed`` gates access independently of the numbers: a row with a
    nonzero quota can still be administratively denied. ``zone`` is filled
    by a read-time join and is never persisted.
    """

    organization_id: str
    zone_id: str
    cpu_quota: int = 0
    memory_quota: int = 0
    storage_quota: int = 0
    is_allowed: bool = True
    id: str = ""

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    zone: Optional[Zone] = field(default=None, compare=False, repr=False)

    @property
    def key(self):
        return (self.organization_id, self.zone_id)

    @property
    def quota(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_quota, self.memory_quota, self.storage_quota)
