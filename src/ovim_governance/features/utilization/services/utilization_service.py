"""Reporting service for zone utilization and organization access."""

import logging
from typing import List, Optional, Protocol

from ...vdcs.entities import VDCRepository
from ...zones.entities import ZoneRepository
from ..entities.utilization import OrganizationZoneAccess, ZoneUtilization
from ..repositories.utilization_cache import UtilizationCache
from .aggregator import UtilizationAggregator

logger = logging.getLogger(__name__)


class OrganizationAccessSource(Protocol):
    async def get_access(self, organization_id: str = "") -> List[OrganizationZoneAccess]:
        ...


class UtilizationService:
    """Read-only utilization views for reporting and API layers.

    Views are recomputed from the stores on every call. The optional cache
    is consulted only when a caller asks for it with ``use_cache=True``.
    """

    def __init__(
        self,
        zone_repository: ZoneRepository,
        vdc_repository: VDCRepository,
        access_source: OrganizationAccessSource,
        aggregator: Optional[UtilizationAggregator] = None,
        cache: Optional[UtilizationCache] = None,
    ):
        self._zones = zone_repository
        self._vdcs = vdc_repository
        self._access_source = access_source
        self._aggregator = aggregator or UtilizationAggregator()
        self._cache = cache

    async def get_zone_utilizations(self, use_cache: bool = False) -> List[ZoneUtilization]:
        """Utilization of every zone, ordered by zone name."""
        if use_cache and self._cache:
            cached = await self._cache.get_all()
            if cached is not None:
                return cached

        utilizations = []
        for zone in await self._zones.list():
            vdcs = await self._vdcs.list_by_zone(zone.id)
            utilizations.append(self._aggregator.aggregate(zone, vdcs))

        if use_cache and self._cache:
            await self._cache.set_all(utilizations)
        return utilizations

    async def get_zone_utilization(self, zone_id: str, use_cache: bool = False) -> ZoneUtilization:
        """Utilization of one zone; a zone with no VDCs yields a zero-usage view.

        Raises:
            NotFoundError: zone does not exist
        """
        if use_cache and self._cache:
            cached = await self._cache.get_zone(zone_id)
            if cached is not None:
                return cached

        zone = await self._zones.get(zone_id)
        utilization = self._aggregator.aggregate(zone, await self._vdcs.list_by_zone(zone_id))

        if use_cache and self._cache:
            await self._cache.set_zone(utilization)
        return utilization

    async def get_organization_zone_access(self, organization_id: str) -> List[OrganizationZoneAccess]:
        return await self._access_source.get_access(organization_id)

    async def invalidate(self, zone_id: Optional[str] = None) -> None:
        if self._cache:
            await self._cache.invalidate(zone_id)
