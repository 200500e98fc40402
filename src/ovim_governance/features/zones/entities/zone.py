"""Zone domain entity.

A zone is one capacity domain (a cluster or cluster partition) with a raw
capacity and an administratively allocatable quota.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple
from datetime import datetime, timezone

from ....config.constants import ZoneStatus
from ....core.value_objects import ResourceAmounts


@dataclass
class Zone:
    """Zone domain entity.

    Quota fields may exceed capacity in storage; nothing here rejects that.
    Every availability computation treats negative headroom as no room
    rather than letting it wrap into apparent space.
    """

    id: str
    name: str
    cluster_name: str = ""
    api_url: str = ""
    status: str = ZoneStatus.AVAILABLE.value
    region: Optional[str] = None
    cloud_provider: Optional[str] = None
    node_count: int = 0

    # Physical cluster capacity
    cpu_capacity: int = 0
    memory_capacity: int = 0
    storage_capacity: int = 0

    # Allocatable quota (capacity minus platform overhead)
    cpu_quota: int = 0
    memory_quota: int = 0
    storage_quota: int = 0

    labels: Dict[str, str] = field(default_factory=dict)
    annotations: Dict[str, str] = field(default_factory=dict)

    # Sync tracking and audit fields
    last_sync: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def capacity(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_capacity, self.memory_capacity, self.storage_capacity)

    @property
    def quota(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_quota, self.memory_quota, self.storage_quota)

    def available_capacity(self) -> ResourceAmounts:
        """Capacity minus quota per resource.

        Plain signed subtraction: the result is negative when the quota is
        configured above the raw capacity.
        """
        return self.capacity - self.quota

    def is_healthy(self) -> bool:
        """Check if the zone can take new placements."""
        return self.status == ZoneStatus.AVAILABLE.value

    def utilization_percentage(self, used: ResourceAmounts) -> Tuple[float, float, float]:
        """Used amounts as a percentage of quota.

        A resource with a zero quota reports 0.0 rather than dividing by zero.
        """
        def percent(amount: int, quota: int) -> float:
            if quota == 0:
                return 0.0
            return amount / quota * 100

        return (
            percent(used.cpu, self.cpu_quota),
            percent(used.memory, self.memory_quota),
            percent(used.storage, self.storage_quota),
        )

    def can_accommodate(
        self,
        cpu_request: int,
        memory_request: int,
        storage_request: int,
        current_usage: ResourceAmounts,
    ) -> bool:
        """Check whether the request fits under the zone quota.

        True iff the zone is healthy and, for every resource,
        ``used + request <= quota``. Side-effect free: the caller commits the
        VDC afterwards and must serialize check and commit per zone.
        """
        if not self.is_healthy():
            return False

        requested = ResourceAmounts(cpu_request, memory_request, storage_request)
        return (current_usage + requested).fits_within(self.quota)

    def mark_synced(self, when: Optional[datetime] = None) -> None:
        """Record a sync heartbeat."""
        now = when or datetime.now(timezone.utc)
        self.last_sync = now
        self.updated_at = now
