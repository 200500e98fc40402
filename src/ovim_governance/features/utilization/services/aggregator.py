"""Usage aggregation over VDC collections.

Every function here is a pure fold over the VDCs it is given: no I/O, no
shared state, identical output for identical input. Callers fetch the VDC
set from the store and invoke the aggregator once per zone of interest.
"""

from typing import Iterable

from ....config.constants import VDCPhase
from ...vdcs.entities import VirtualDataCenter
from ...zones.entities import Zone
from ..entities.utilization import ResourceUsage, ZoneUtilization


class UtilizationAggregator:
    """Sums committed VDC resources per zone or per (organization, zone)."""

    def __init__(self, active_phase: str = VDCPhase.ACTIVE.value):
        self.active_phase = active_phase

    def aggregate_usage(self, zone_id: str, vdcs: Iterable[VirtualDataCenter]) -> ResourceUsage:
        """Usage of every VDC assigned to ``zone_id``, whatever its phase.

        Pending VDCs still reserve their resources. Only the active count
        looks at the phase. Unassigned VDCs never match a zone.
        """
        if not zone_id:
            return ResourceUsage()

        cpu = memory = storage = count = active = 0
        for vdc in vdcs:
            if vdc.zone_id != zone_id:
                continue
            cpu += vdc.cpu_quota
            memory += vdc.memory_quota
            storage += vdc.storage_quota
            count += 1
            if vdc.phase == self.active_phase:
                active += 1

        return ResourceUsage(
            cpu_used=cpu,
            memory_used=memory,
            storage_used=storage,
            vdc_count=count,
            active_vdc_count=active,
        )

    def aggregate_for_org(self, org_id: str, zone_id: str,
                          vdcs: Iterable[VirtualDataCenter]) -> ResourceUsage:
        """Same fold restricted to VDCs owned by ``org_id``."""
        return self.aggregate_usage(zone_id, (v for v in vdcs if v.org_id == org_id))

    def aggregate(self, zone: Zone, vdcs: Iterable[VirtualDataCenter]) -> ZoneUtilization:
        usage = self.aggregate_usage(zone.id, vdcs)
        return ZoneUtilization(
            id=zone.id,
            name=zone.name,
            status=zone.status,
            region=zone.region,
            cloud_provider=zone.cloud_provider,
            cpu_capacity=zone.cpu_capacity,
            memory_capacity=zone.memory_capacity,
            storage_capacity=zone.storage_capacity,
            cpu_quota=zone.cpu_quota,
            memory_quota=zone.memory_quota,
            storage_quota=zone.storage_quota,
            cpu_used=usage.cpu_used,
            memory_used=usage.memory_used,
            storage_used=usage.storage_used,
            vdc_count=usage.vdc_count,
            active_vdc_count=usage.active_vdc_count,
            last_sync=zone.last_sync,
            updated_at=zone.updated_at,
        )
