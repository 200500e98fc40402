"""Placement admission: may this organization commit this much in this zone?

Two independent ceilings apply. The organization's ledger quota binds first;
the zone's own quota, summed over every organization, is the outer ceiling.
Neither check alone is sufficient.
"""

import logging
from typing import Iterable, List, Optional

from ....core.exceptions import InvalidInputError, NotFoundError
from ....core.value_objects import DenialReason, ResourceAmounts
from ...quotas.entities import QuotaLedgerRepository
from ...utilization.services.aggregator import UtilizationAggregator
from ...vdcs.entities import VDCRepository, VirtualDataCenter
from ...zones.entities import ZoneRepository
from ..entities.decision import PlacementDecision

logger = logging.getLogger(__name__)


def _without(vdcs: Iterable[VirtualDataCenter], vdc_id: Optional[str]) -> List[VirtualDataCenter]:
    return [v for v in vdcs if not vdc_id or v.id != vdc_id]


def _describe_excess(names, used: ResourceAmounts, ceiling: ResourceAmounts) -> str:
    used_map, ceiling_map = used.to_dict(), ceiling.to_dict()
    return ", ".join(f"{name} {used_map[name]} > {ceiling_map[name]}" for name in names)


class PlacementService:
    """Side-effect free accommodation checks."""

    def __init__(
        self,
        zone_repository: ZoneRepository,
        ledger_repository: QuotaLedgerRepository,
        vdc_repository: VDCRepository,
        aggregator: Optional[UtilizationAggregator] = None,
    ):
        self._zones = zone_repository
        self._ledger = ledger_repository
        self._vdcs = vdc_repository
        self._aggregator = aggregator or UtilizationAggregator()

    async def accommodate(
        self,
        org_id: str,
        zone_id: str,
        request: ResourceAmounts,
        exclude_vdc_id: Optional[str] = None,
    ) -> PlacementDecision:
        """Decide whether ``request`` fits for ``org_id`` in ``zone_id``.

        ``exclude_vdc_id`` names a VDC being resized; its current commitment
        is left out of both usage sums so it is not counted twice.

        Raises:
            InvalidInputError: empty identifiers or a negative request
        """
        if not org_id:
            raise InvalidInputError("Organization ID is required", field="org_id")
        if not zone_id:
            raise InvalidInputError("Zone ID is required", field="zone_id")
        if request is None or request.has_negative():
            raise InvalidInputError("Resource request must be non-negative", field="request")

        decision = await self._evaluate(org_id, zone_id, request, exclude_vdc_id)
        if decision.allowed:
            logger.debug(f"Placement accepted: org={org_id} zone={zone_id} request={request.to_dict()}")
        else:
            logger.info(
                f"Placement denied: org={org_id} zone={zone_id} "
                f"reason={decision.reason.name} ({decision.message})"
            )
        return decision

    async def _evaluate(self, org_id, zone_id, request, exclude_vdc_id) -> PlacementDecision:
        try:
            zone = await self._zones.get(zone_id)
        except NotFoundError:
            return PlacementDecision.deny(
                DenialReason.ZONE_UNAVAILABLE, f"zone {zone_id} not found", zone_id=zone_id
            )
        if not zone.is_healthy():
            return PlacementDecision.deny(
                DenialReason.ZONE_UNAVAILABLE,
                f"zone {zone_id} is {zone.status}",
                zone_id=zone_id,
                status=zone.status,
            )

        try:
            grant = await self._ledger.get(org_id, zone_id)
        except NotFoundError:
            return PlacementDecision.deny(
                DenialReason.ORGANIZATION_NOT_PERMITTED,
                f"no quota for organization {org_id} in zone {zone_id}",
            )
        if not grant.is_allowed:
            return PlacementDecision.deny(
                DenialReason.ORGANIZATION_NOT_PERMITTED,
                f"organization {org_id} is not allowed in zone {zone_id}",
            )

        org_vdcs = _without(await self._vdcs.list_by_org_and_zone(org_id, zone_id), exclude_vdc_id)
        org_usage = self._aggregator.aggregate_for_org(org_id, zone_id, org_vdcs).used
        org_total = org_usage + request
        exceeded = grant.quota.exceeded_by(org_total)
        if exceeded:
            return PlacementDecision.deny(
                DenialReason.ORGANIZATION_QUOTA_EXCEEDED,
                _describe_excess(exceeded, org_total, grant.quota),
                resources=list(exceeded),
            )

        zone_vdcs = _without(await self._vdcs.list_by_zone(zone_id), exclude_vdc_id)
        zone_usage = self._aggregator.aggregate_usage(zone_id, zone_vdcs).used
        if not zone.can_accommodate(request.cpu, request.memory, request.storage, zone_usage):
            zone_total = zone_usage + request
            exceeded = zone.quota.exceeded_by(zone_total)
            return PlacementDecision.deny(
                DenialReason.ZONE_CAPACITY_EXCEEDED,
                _describe_excess(exceeded, zone_total, zone.quota),
                resources=list(exceeded),
            )

        return PlacementDecision.accept()
