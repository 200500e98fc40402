"""In-memory ledger repository."""

import asyncio
import copy
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from ....core.exceptions import AlreadyExistsError, NotFoundError
from ..entities.quota import OrganizationZoneQuota
from ..utils.validation import validate_quota_reference, ledger_key_label

logger = logging.getLogger(__name__)


class InMemoryQuotaLedgerRepository:
    """Ledger store keyed by (organization_id, zone_id)."""

    def __init__(self):
        self._rows: Dict[Tuple[str, str], OrganizationZoneQuota] = {}
        self._lock = asyncio.Lock()

    async def create(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        validate_quota_reference(quota)

        async with self._lock:
            if quota.key in self._rows:
                raise AlreadyExistsError(
                    "OrganizationZoneQuota", ledger_key_label(*quota.key)
                )
            now = datetime.now(timezone.utc)
            quota.id = quota.id or str(uuid.uuid4())
            quota.created_at = now
            quota.updated_at = now
            self._rows[quota.key] = self._detached(quota)

        return self._detached(quota)

    async def get(self, organization_id: str, zone_id: str) -> OrganizationZoneQuota:
        async with self._lock:
            row = self._rows.get((organization_id, zone_id))
            if row is None:
                raise NotFoundError(
                    "OrganizationZoneQuota", ledger_key_label(organization_id, zone_id)
                )
            return copy.deepcopy(row)

    async def list(self, organization_id: Optional[str] = None) -> List[OrganizationZoneQuota]:
        async with self._lock:
            rows = [
                copy.deepcopy(row)
                for row in self._rows.values()
                if not organization_id or row.organization_id == organization_id
            ]
        return sorted(rows, key=lambda r: r.key)

    async def update(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        validate_quota_reference(quota)

        async with self._lock:
            existing = self._rows.get(quota.key)
            if existing is None:
                raise NotFoundError(
                    "OrganizationZoneQuota", ledger_key_label(*quota.key)
                )
            quota.id = existing.id
            quota.created_at = existing.created_at
            quota.updated_at = datetime.now(timezone.utc)
            self._rows[quota.key] = self._detached(quota)

        return self._detached(quota)

    async def delete(self, organization_id: str, zone_id: str) -> None:
        async with self._lock:
            if self._rows.pop((organization_id, zone_id), None) is None:
                raise NotFoundError(
                    "OrganizationZoneQuota", ledger_key_label(organization_id, zone_id)
                )
        logger.info(f"Deleted quota for org {organization_id} in zone {zone_id}")

    @staticmethod
    def _detached(quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        # The zone reference is a read-time join and is never stored
        stored = copy.copy(quota)
        stored.zone = None
        return copy.deepcopy(stored)
