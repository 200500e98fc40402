"""Zone synchronization apply step.

The federation transport that discovers zones on remote clusters lives
outside this package. This service takes the zones it discovered and
reconciles the zone store against them: creating, refreshing, marking
unavailable and finally deleting sync-managed zones.
"""

import logging
import time
from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Protocol

from ....config.constants import (
    ZoneStatus,
    ZONE_SYNC_MANAGED_LABEL,
    ZONE_SYNC_MANAGED_VALUE,
    ZONE_SYNC_CAPACITY_CHANGE_THRESHOLD,
    ZONE_SYNC_STALE_HOURS,
    ZONE_SYNC_DELETE_GRACE_HOURS,
)
from ....core.exceptions import GovernanceError
from ..entities.protocols import ZoneRepository
from ..entities.zone import Zone

logger = logging.getLogger(__name__)


class ZoneVDCCounter(Protocol):
    """The slice of the VDC store the sync needs to guard deletion."""

    async def list_by_zone(self, zone_id: str) -> list:
        ...


@dataclass
class SyncResult:
    """Outcome of one sync pass."""

    zones_created: int = 0
    zones_updated: int = 0
    zones_deleted: int = 0
    success: bool = True
    error_message: Optional[str] = None
    duration_ms: int = 0


def is_sync_managed(zone: Zone) -> bool:
    return zone.labels.get(ZONE_SYNC_MANAGED_LABEL) == ZONE_SYNC_MANAGED_VALUE


def capacity_changed(current: Zone, discovered: Zone,
                     threshold: float = ZONE_SYNC_CAPACITY_CHANGE_THRESHOLD) -> bool:
    """True when any resource's capacity moved by more than ``threshold``."""
    for old, new in zip(current.capacity, discovered.capacity):
        if old == 0:
            if new != 0:
                return True
            continue
        if abs(new - old) / old > threshold:
            return True
    return False


class ZoneSyncService:
    """Applies discovered zone state to the zone store."""

    def __init__(
        self,
        zone_repository: ZoneRepository,
        vdc_repository: ZoneVDCCounter,
        auto_create: bool = True,
        stale_after: timedelta = timedelta(hours=ZONE_SYNC_STALE_HOURS),
        delete_grace: timedelta = timedelta(hours=ZONE_SYNC_DELETE_GRACE_HOURS),
    ):
        self._zones = zone_repository
        self._vdcs = vdc_repository
        self._auto_create = auto_create
        self._stale_after = stale_after
        self._delete_grace = delete_grace

    async def apply(self, discovered: Iterable[Zone], now: Optional[datetime] = None) -> SyncResult:
        """Reconcile the zone store with one round of discovered zones.

        Errors on individual zones are collected; the pass keeps going and
        reports ``success=False`` with the joined messages.
        """
        started = time.monotonic()
        now = now or datetime.now(timezone.utc)
        result = SyncResult()
        errors: List[str] = []

        existing = {zone.id: zone for zone in await self._zones.list()}
        seen = set()

        for zone in discovered:
            seen.add(zone.id)
            labels = {**zone.labels, ZONE_SYNC_MANAGED_LABEL: ZONE_SYNC_MANAGED_VALUE}
            zone = replace(zone, labels=labels)
            try:
                current = existing.get(zone.id)
                if current is None:
                    if await self._create(zone):
                        result.zones_created += 1
                elif not is_sync_managed(current):
                    logger.debug(f"Zone {zone.id} is not sync-managed, skipping")
                elif self.needs_update(current, zone, now):
                    await self._refresh(current, zone, now)
                    result.zones_updated += 1
            except GovernanceError as e:
                logger.error(f"Failed to sync zone {zone.id}: {e.message}")
                errors.append(f"{zone.id}: {e.message}")

        for zone_id, current in existing.items():
            if zone_id in seen or not is_sync_managed(current):
                continue
            try:
                outcome = await self._retire(current, now)
                if outcome == "updated":
                    result.zones_updated += 1
                elif outcome == "deleted":
                    result.zones_deleted += 1
            except GovernanceError as e:
                logger.error(f"Failed to retire zone {zone_id}: {e.message}")
                errors.append(f"{zone_id}: {e.message}")

        if errors:
            result.success = False
            result.error_message = "; ".join(errors)
        result.duration_ms = int((time.monotonic() - started) * 1000)

        logger.info(
            f"Zone sync finished: created={result.zones_created} "
            f"updated={result.zones_updated} deleted={result.zones_deleted} "
            f"success={result.success}"
        )
        return result

    def needs_update(self, current: Zone, discovered: Zone, now: datetime) -> bool:
        if current.status != discovered.status:
            return True
        if current.api_url != discovered.api_url:
            return True
        if capacity_changed(current, discovered):
            return True
        return now - current.last_sync > self._stale_after

    async def _create(self, zone: Zone) -> bool:
        if not self._auto_create:
            logger.info(f"Discovered unknown zone {zone.id}, auto-create disabled")
            return False
        await self._zones.create(zone)
        logger.info(f"Created zone {zone.id} from sync")
        return True

    async def _refresh(self, current: Zone, discovered: Zone, now: datetime) -> None:
        refreshed = replace(
            discovered,
            created_at=current.created_at,
            annotations={**current.annotations, **discovered.annotations},
            last_sync=now,
        )
        await self._zones.update(refreshed)
        logger.debug(f"Refreshed zone {current.id} (status={refreshed.status})")

    async def _retire(self, current: Zone, now: datetime) -> Optional[str]:
        """Mark an undiscovered zone unavailable, then delete it after the grace period."""
        if current.status != ZoneStatus.UNAVAILABLE.value:
            await self._zones.update(replace(current, status=ZoneStatus.UNAVAILABLE.value))
            logger.warning(f"Zone {current.id} no longer discovered, marked unavailable")
            return "updated"

        if now - current.updated_at <= self._delete_grace:
            return None

        if await self._vdcs.list_by_zone(current.id):
            logger.warning(f"Zone {current.id} unavailable but still has VDCs, keeping it")
            return None

        await self._zones.delete(current.id)
        logger.info(f"Deleted zone {current.id} after {self._delete_grace} unavailable")
        return "deleted"
