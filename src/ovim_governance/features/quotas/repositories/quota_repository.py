"""PostgreSQL ledger repository.

Uniqueness of the (organization_id, zone_id) pair comes from the table's
UNIQUE constraint.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import asyncpg

from ....core.exceptions import AlreadyExistsError, DatabaseError, NotFoundError
from ....database import DatabaseManager, validate_schema_name
from ..entities.quota import OrganizationZoneQuota
from ..utils.queries import (
    QUOTA_INSERT,
    QUOTA_UPDATE,
    QUOTA_GET,
    QUOTA_LIST_ALL,
    QUOTA_LIST_BY_ORG,
    QUOTA_DELETE,
)
from ..utils.validation import validate_quota_reference, ledger_key_label

logger = logging.getLogger(__name__)


class QuotaLedgerDatabaseRepository:
    """Database repository for organization zone quotas."""

    def __init__(self, database: DatabaseManager, schema: str = "public"):
        self._db = database
        self._schema = validate_schema_name(schema)

    async def create(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        validate_quota_reference(quota)
        now = datetime.now(timezone.utc)
        try:
            row = await self._db.fetchrow(
                QUOTA_INSERT.format(schema=self._schema),
                quota.id or str(uuid.uuid4()),
                quota.organization_id, quota.zone_id,
                quota.cpu_quota, quota.memory_quota, quota.storage_quota,
                quota.is_allowed, now, now,
            )
        except asyncpg.UniqueViolationError as e:
            raise AlreadyExistsError(
                "OrganizationZoneQuota",
                ledger_key_label(*quota.key),
                details={"constraint": e.constraint_name},
            )
        except asyncpg.ForeignKeyViolationError:
            raise NotFoundError("Zone", quota.zone_id)
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to create quota {ledger_key_label(*quota.key)}: {e}")
            raise DatabaseError(f"Failed to create quota: {e}")

        return self._map_row_to_quota(row)

    async def get(self, organization_id: str, zone_id: str) -> OrganizationZoneQuota:
        row = await self._fetchrow(QUOTA_GET, organization_id, zone_id)
        if row is None:
            raise NotFoundError("OrganizationZoneQuota", ledger_key_label(organization_id, zone_id))
        return self._map_row_to_quota(row)

    async def list(self, organization_id: Optional[str] = None) -> List[OrganizationZoneQuota]:
        try:
            if organization_id:
                rows = await self._db.fetch(
                    QUOTA_LIST_BY_ORG.format(schema=self._schema), organization_id
                )
            else:
                rows = await self._db.fetch(QUOTA_LIST_ALL.format(schema=self._schema))
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to list quotas: {e}")
            raise DatabaseError(f"Failed to list quotas: {e}")
        return [self._map_row_to_quota(row) for row in rows]

    async def update(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        validate_quota_reference(quota)
        row = await self._fetchrow(
            QUOTA_UPDATE,
            quota.organization_id, quota.zone_id,
            quota.cpu_quota, quota.memory_quota, quota.storage_quota,
            quota.is_allowed, datetime.now(timezone.utc),
        )
        if row is None:
            raise NotFoundError("OrganizationZoneQuota", ledger_key_label(*quota.key))
        return self._map_row_to_quota(row)

    async def delete(self, organization_id: str, zone_id: str) -> None:
        row = await self._fetchrow(QUOTA_DELETE, organization_id, zone_id)
        if row is None:
            raise NotFoundError("OrganizationZoneQuota", ledger_key_label(organization_id, zone_id))
        logger.info(f"Deleted quota for org {organization_id} in zone {zone_id}")

    async def _fetchrow(self, query: str, *args):
        try:
            return await self._db.fetchrow(query.format(schema=self._schema), *args)
        except asyncpg.PostgresError as e:
            logger.error(f"Quota query failed: {e}")
            raise DatabaseError(f"Quota query failed: {e}")

    def _map_row_to_quota(self, row: Mapping[str, Any]) -> OrganizationZoneQuota:
        """Map database row to OrganizationZoneQuota entity."""
        return OrganizationZoneQuota(
            id=str(row["id"]),
            organization_id=str(row["organization_id"]),
            zone_id=str(row["zone_id"]),
            cpu_quota=row.get("cpu_quota") or 0,
            memory_quota=row.get("memory_quota") or 0,
            storage_quota=row.get("storage_quota") or 0,
            is_allowed=bool(row.get("is_allowed", True)),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
