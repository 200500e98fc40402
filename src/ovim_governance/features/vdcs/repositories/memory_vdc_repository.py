"""In-memory VDC repository."""

import asyncio
import copy
import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

from ....core.exceptions import AlreadyExistsError, InvalidInputError, NotFoundError
from ..entities.vdc import VirtualDataCenter

logger = logging.getLogger(__name__)


class InMemoryVDCRepository:
    """VDC store backed by process memory.

    Creates, updates and deletes take the same lock as listings, so a delete
    and its disappearance from zone usage happen together.
    """

    def __init__(self):
        self._vdcs: Dict[str, VirtualDataCenter] = {}
        self._lock = asyncio.Lock()

    async def create(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        self._require_addressable(vdc)

        async with self._lock:
            if vdc.id in self._vdcs:
                raise AlreadyExistsError("VDC", vdc.id)
            now = datetime.now(timezone.utc)
            vdc.created_at = now
            vdc.updated_at = now
            self._vdcs[vdc.id] = copy.deepcopy(vdc)

        logger.info(f"Created VDC {vdc.id} for org {vdc.org_id} in zone {vdc.zone_id}")
        return copy.deepcopy(vdc)

    async def get(self, vdc_id: str) -> VirtualDataCenter:
        async with self._lock:
            vdc = self._vdcs.get(vdc_id)
            if vdc is None:
                raise NotFoundError("VDC", vdc_id)
            return copy.deepcopy(vdc)

    async def update(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        self._require_addressable(vdc)

        async with self._lock:
            existing = self._vdcs.get(vdc.id)
            if existing is None:
                raise NotFoundError("VDC", vdc.id)
            vdc.created_at = existing.created_at
            vdc.updated_at = datetime.now(timezone.utc)
            self._vdcs[vdc.id] = copy.deepcopy(vdc)

        return copy.deepcopy(vdc)

    async def delete(self, vdc_id: str) -> None:
        async with self._lock:
            if self._vdcs.pop(vdc_id, None) is None:
                raise NotFoundError("VDC", vdc_id)
        logger.info(f"Deleted VDC {vdc_id}")

    async def list(self, org_id: Optional[str] = None) -> List[VirtualDataCenter]:
        return await self._select(lambda v: not org_id or v.org_id == org_id)

    async def list_by_zone(self, zone_id: str) -> List[VirtualDataCenter]:
        if not zone_id:
            return []
        return await self._select(lambda v: v.zone_id == zone_id)

    async def list_by_org_and_zone(self, org_id: str, zone_id: str) -> List[VirtualDataCenter]:
        if not zone_id:
            return []
        return await self._select(lambda v: v.org_id == org_id and v.zone_id == zone_id)

    async def _select(self, predicate) -> List[VirtualDataCenter]:
        async with self._lock:
            matched = [copy.deepcopy(v) for v in self._vdcs.values() if predicate(v)]
        return sorted(matched, key=lambda v: v.name)

    @staticmethod
    def _require_addressable(vdc: Optional[VirtualDataCenter]) -> None:
        if vdc is None or not vdc.id:
            raise InvalidInputError("VDC and VDC ID are required", field="vdc_id")
        if not vdc.org_id:
            raise InvalidInputError("VDC organization ID is required", field="org_id")
