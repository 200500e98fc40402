"""Derived utilization views.

Neither view is persisted. Both are computed from the zone, the ledger and
the VDC set at query time.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from ....core.value_objects import ResourceAmounts


@dataclass(frozen=True)
class ResourceUsage:
    """Summed commitments of a VDC subset plus the counts behind them."""

    cpu_used: int = 0
    memory_used: int = 0
    storage_used: int = 0
    vdc_count: int = 0
    active_vdc_count: int = 0

    @property
    def used(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_used, self.memory_used, self.storage_used)


@dataclass
class ZoneUtilization:
    """Point-in-time utilization of one zone."""

    id: str
    name: str
    status: str
    region: Optional[str]
    cloud_provider: Optional[str]

    cpu_capacity: int
    memory_capacity: int
    storage_capacity: int
    cpu_quota: int
    memory_quota: int
    storage_quota: int

    cpu_used: int
    memory_used: int
    storage_used: int
    vdc_count: int
    active_vdc_count: int

    last_sync: datetime
    updated_at: datetime

    @property
    def used(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_used, self.memory_used, self.storage_used)

    @property
    def quota(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_quota, self.memory_quota, self.storage_quota)

    @property
    def capacity(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_capacity, self.memory_capacity, self.storage_capacity)

    @property
    def available(self) -> ResourceAmounts:
        """Quota headroom left after usage, never negative."""
        return (self.quota - self.used).clamped()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "region": self.region,
            "cloud_provider": self.cloud_provider,
            "cpu_capacity": self.cpu_capacity,
            "memory_capacity": self.memory_capacity,
            "storage_capacity": self.storage_capacity,
            "cpu_quota": self.cpu_quota,
            "memory_quota": self.memory_quota,
            "storage_quota": self.storage_quota,
            "cpu_used": self.cpu_used,
            "memory_used": self.memory_used,
            "storage_used": self.storage_used,
            "vdc_count": self.vdc_count,
            "active_vdc_count": self.active_vdc_count,
            "last_sync": self.last_sync.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ZoneUtilization":
        values = dict(data)
        values["last_sync"] = datetime.fromisoformat(values["last_sync"])
        values["updated_at"] = datetime.fromisoformat(values["updated_at"])
        return cls(**values)


@dataclass
class OrganizationZoneAccess:
    """How much of a zone one organization may use and has used."""

    organization_id: str
    zone_id: str
    zone_name: str
    zone_status: str

    cpu_quota: int
    memory_quota: int
    storage_quota: int
    is_allowed: bool

    cpu_used: int = 0
    memory_used: int = 0
    storage_used: int = 0
    vdc_count: int = 0

    @property
    def quota(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_quota, self.memory_quota, self.storage_quota)

    @property
    def used(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_used, self.memory_used, self.storage_used)

    @property
    def remaining(self) -> ResourceAmounts:
        """Ledger headroom clamped at zero; the raw values stay in quota/used."""
        return (self.quota - self.used).clamped()
