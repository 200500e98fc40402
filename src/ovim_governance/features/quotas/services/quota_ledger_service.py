"""Organization-zone quota ledger service.

Wraps the ledger store with the read-time zone join, the access view and
the administrative grant operation.
"""

import logging
from dataclasses import replace
from typing import List, Optional

from ....core.exceptions import NotFoundError
from ....core.value_objects import ResourceAmounts
from ...utilization.entities import OrganizationZoneAccess
from ...utilization.services.aggregator import UtilizationAggregator
from ...vdcs.entities import VDCRepository
from ...zones.entities import Zone, ZoneRepository
from ..entities.protocols import QuotaLedgerRepository
from ..entities.quota import OrganizationZoneQuota
from ..utils.validation import validate_quota_reference, validate_ledger_key, validate_grant

logger = logging.getLogger(__name__)


class QuotaLedgerService:
    """Authoritative per-(organization, zone) quota grants."""

    def __init__(
        self,
        ledger_repository: QuotaLedgerRepository,
        zone_repository: ZoneRepository,
        vdc_repository: VDCRepository,
        aggregator: Optional[UtilizationAggregator] = None,
    ):
        self._ledger = ledger_repository
        self._zones = zone_repository
        self._vdcs = vdc_repository
        self._aggregator = aggregator or UtilizationAggregator()

    async def create(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        validate_quota_reference(quota)
        created = await self._ledger.create(quota)
        logger.info(
            f"Granted org {created.organization_id} access to zone {created.zone_id} "
            f"(allowed={created.is_allowed})"
        )
        return await self._with_zone(created)

    async def get(self, organization_id: str, zone_id: str) -> OrganizationZoneQuota:
        """Ledger row with its zone joined at read time."""
        validate_ledger_key(organization_id, zone_id)
        quota = await self._ledger.get(organization_id, zone_id)
        return await self._with_zone(quota)

    async def list(self, organization_id: str = "") -> List[OrganizationZoneQuota]:
        """Rows of one organization, or all rows when ``organization_id`` is empty."""
        rows = await self._ledger.list(organization_id or None)
        return [await self._with_zone(row) for row in rows]

    async def update(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        validate_quota_reference(quota)
        updated = await self._ledger.update(quota)
        logger.info(
            f"Updated quota for org {updated.organization_id} in zone {updated.zone_id}"
        )
        return await self._with_zone(updated)

    async def delete(self, organization_id: str, zone_id: str) -> None:
        validate_ledger_key(organization_id, zone_id)
        await self._ledger.delete(organization_id, zone_id)
        logger.info(f"Revoked org {organization_id} access to zone {zone_id}")

    async def set_quota(
        self,
        organization_id: str,
        zone_id: str,
        grant: ResourceAmounts,
        is_allowed: bool = True,
    ) -> OrganizationZoneQuota:
        """Create or replace a grant after checking it against the zone's quota.

        Raises:
            NotFoundError: zone does not exist
            InvalidInputError: negative grant, or a resource above the zone quota
        """
        validate_ledger_key(organization_id, zone_id)
        zone = await self._zones.get(zone_id)
        validate_grant(zone, grant)

        desired = OrganizationZoneQuota(
            organization_id=organization_id,
            zone_id=zone_id,
            cpu_quota=grant.cpu,
            memory_quota=grant.memory,
            storage_quota=grant.storage,
            is_allowed=is_allowed,
        )
        try:
            await self._ledger.get(organization_id, zone_id)
        except NotFoundError:
            saved = await self._ledger.create(desired)
        else:
            saved = await self._ledger.update(desired)

        return replace(saved, zone=zone)

    async def get_access(self, organization_id: str = "") -> List[OrganizationZoneAccess]:
        """Ledger rows joined with the organization's live usage per zone.

        Rows whose zone no longer resolves are left out: that is a cleanup
        race between zone deletion and ledger revocation, not a caller fault.
        """
        access: List[OrganizationZoneAccess] = []
        for row in await self._ledger.list(organization_id or None):
            zone = await self._resolve_zone(row.zone_id)
            if zone is None:
                logger.debug(
                    f"Skipping quota row {row.organization_id}/{row.zone_id}: zone missing"
                )
                continue

            vdcs = await self._vdcs.list_by_org_and_zone(row.organization_id, row.zone_id)
            usage = self._aggregator.aggregate_for_org(row.organization_id, row.zone_id, vdcs)
            access.append(OrganizationZoneAccess(
                organization_id=row.organization_id,
                zone_id=zone.id,
                zone_name=zone.name,
                zone_status=zone.status,
                cpu_quota=row.cpu_quota,
                memory_quota=row.memory_quota,
                storage_quota=row.storage_quota,
                is_allowed=row.is_allowed,
                cpu_used=usage.cpu_used,
                memory_used=usage.memory_used,
                storage_used=usage.storage_used,
                vdc_count=usage.vdc_count,
            ))
        return access

    async def _with_zone(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        return replace(quota, zone=await self._resolve_zone(quota.zone_id))

    async def _resolve_zone(self, zone_id: str) -> Optional[Zone]:
        try:
            return await self._zones.get(zone_id)
        except NotFoundError:
            return None
