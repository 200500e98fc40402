"""Serialized check-and-commit for VDC placement.

``PlacementService.accommodate`` is a pure predicate. Between its answer and
the VDC write another request for the same zone could take the same
headroom, so every commit here runs inside a per-zone lock together with
its check. The locks live in this process only; multiple processes sharing
one database need a storage-level guard on top.
"""

import asyncio
import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Awaitable, Callable, Dict, Optional

from ....core.exceptions import InvalidInputError
from ...vdcs.entities import VDCRepository, VirtualDataCenter
from .placement_service import PlacementService

logger = logging.getLogger(__name__)

ZoneChangeHook = Callable[[str], Awaitable[None]]


class PlacementCoordinator:
    """Runs accommodation and the VDC store write under one zone scope."""

    def __init__(
        self,
        placement_service: PlacementService,
        vdc_repository: VDCRepository,
        on_zone_change: Optional[ZoneChangeHook] = None,
    ):
        self._placement = placement_service
        self._vdcs = vdc_repository
        self._on_zone_change = on_zone_change
        self._locks: Dict[str, asyncio.Lock] = {}

    def _lock_for(self, zone_id: str) -> asyncio.Lock:
        return self._locks.setdefault(zone_id, asyncio.Lock())

    @asynccontextmanager
    async def zone_scope(self, *zone_ids: str):
        """Hold the locks of every given zone, acquired in sorted order."""
        async with AsyncExitStack() as stack:
            for zone_id in sorted({z for z in zone_ids if z}):
                await stack.enter_async_context(self._lock_for(zone_id))
            yield

    @asynccontextmanager
    async def vdc_scope(self, vdc_id: str, *zone_ids: str):
        """Hold the locks of the VDC's current zone and ``zone_ids``.

        The VDC is re-read once the locks are held; if it moved in the
        meantime the locks are dropped and taken again for its new zone.
        Yields the VDC as stored under the held locks.
        """
        while True:
            seen = await self._vdcs.get(vdc_id)
            async with self.zone_scope(seen.zone_id, *zone_ids):
                current = await self._vdcs.get(vdc_id)
                if current.zone_id == seen.zone_id:
                    yield current
                    return

    async def reserve(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        """Create ``vdc`` if it fits, else raise PolicyDeniedError."""
        if vdc is None or not vdc.zone_id:
            raise InvalidInputError("VDC must name a zone to be placed", field="zone_id")

        async with self.zone_scope(vdc.zone_id):
            decision = await self._placement.accommodate(vdc.org_id, vdc.zone_id, vdc.resources)
            decision.raise_for_denial()
            created = await self._vdcs.create(vdc)

        logger.info(f"Reserved {vdc.resources.to_dict()} for VDC {vdc.id} in zone {vdc.zone_id}")
        await self._notify(vdc.zone_id)
        return created

    async def resize(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        """Apply new quotas (and possibly a new zone) to an existing VDC.

        The VDC's current commitment is excluded from usage while checking,
        so shrinking or keeping the same size never fails on its own usage.
        """
        if vdc is None or not vdc.zone_id:
            raise InvalidInputError("VDC must name a zone to be placed", field="zone_id")

        async with self.vdc_scope(vdc.id, vdc.zone_id) as current:
            decision = await self._placement.accommodate(
                vdc.org_id, vdc.zone_id, vdc.resources, exclude_vdc_id=vdc.id
            )
            decision.raise_for_denial()
            updated = await self._vdcs.update(vdc)

        if current.zone_id and current.zone_id != vdc.zone_id:
            await self._notify(current.zone_id)
        await self._notify(vdc.zone_id)
        return updated

    async def release(self, vdc_id: str) -> None:
        """Delete a VDC; its usage disappears with the delete."""
        async with self.vdc_scope(vdc_id) as current:
            await self._vdcs.delete(vdc_id)
        if current.zone_id:
            await self._notify(current.zone_id)

    async def _notify(self, zone_id: str) -> None:
        if self._on_zone_change:
            await self._on_zone_change(zone_id)
