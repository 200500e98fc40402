"""In-memory zone repository.

Guards its maps with an asyncio lock and hands out copies, so callers never
mutate stored state without going through update().
"""

import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Dict, List

from ....core.exceptions import AlreadyExistsError, InvalidInputError, NotFoundError
from ..entities.zone import Zone

logger = logging.getLogger(__name__)


class InMemoryZoneRepository:
    """Zone store backed by process memory."""

    def __init__(self):
        self._zones: Dict[str, Zone] = {}
        self._lock = asyncio.Lock()

    async def create(self, zone: Zone) -> Zone:
        if zone is None or not zone.id:
            raise InvalidInputError("Zone and zone ID are required", field="zone_id")

        async with self._lock:
            if zone.id in self._zones:
                raise AlreadyExistsError("Zone", zone.id)
            if self._name_taken(zone.name, exclude_id=zone.id):
                raise AlreadyExistsError("Zone", f"name:{zone.name}")

            now = datetime.now(timezone.utc)
            zone.created_at = now
            zone.updated_at = now
            zone.last_sync = now
            self._zones[zone.id] = copy.deepcopy(zone)

        logger.info(f"Created zone {zone.id} ({zone.name})")
        return copy.deepcopy(zone)

    async def get(self, zone_id: str) -> Zone:
        async with self._lock:
            zone = self._zones.get(zone_id)
            if zone is None:
                raise NotFoundError("Zone", zone_id)
            return copy.deepcopy(zone)

    async def list(self) -> List[Zone]:
        async with self._lock:
            zones = [copy.deepcopy(zone) for zone in self._zones.values()]
        return sorted(zones, key=lambda z: z.name)

    async def update(self, zone: Zone) -> Zone:
        if zone is None or not zone.id:
            raise InvalidInputError("Zone and zone ID are required", field="zone_id")

        async with self._lock:
            existing = self._zones.get(zone.id)
            if existing is None:
                raise NotFoundError("Zone", zone.id)
            if self._name_taken(zone.name, exclude_id=zone.id):
                raise AlreadyExistsError("Zone", f"name:{zone.name}")

            zone.created_at = existing.created_at
            zone.updated_at = datetime.now(timezone.utc)
            self._zones[zone.id] = copy.deepcopy(zone)

        logger.debug(f"Updated zone {zone.id}")
        return copy.deepcopy(zone)

    async def delete(self, zone_id: str) -> None:
        async with self._lock:
            if zone_id not in self._zones:
                raise NotFoundError("Zone", zone_id)
            del self._zones[zone_id]
        logger.info(f"Deleted zone {zone_id}")

    def _name_taken(self, name: str, exclude_id: str) -> bool:
        return any(
            other.name == name and other.id != exclude_id
            for other in self._zones.values()
        )
