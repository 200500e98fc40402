"""PostgreSQL VDC repository."""

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional

import asyncpg

from ....core.exceptions import AlreadyExistsError, DatabaseError, InvalidInputError, NotFoundError
from ....database import DatabaseManager, validate_schema_name
from ..entities.vdc import VirtualDataCenter
from ..utils.queries import (
    VDC_INSERT,
    VDC_UPDATE,
    VDC_GET_BY_ID,
    VDC_DELETE,
    VDC_LIST_ALL,
    VDC_LIST_BY_ORG,
    VDC_LIST_BY_ZONE,
    VDC_LIST_BY_ORG_AND_ZONE,
)

logger = logging.getLogger(__name__)


class VDCDatabaseRepository:
    """Database repository for virtual data centers."""

    def __init__(self, database: DatabaseManager, schema: str = "public"):
        self._db = database
        self._schema = validate_schema_name(schema)

    async def create(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        self._require_addressable(vdc)
        now = datetime.now(timezone.utc)
        try:
            row = await self._db.fetchrow(
                VDC_INSERT.format(schema=self._schema),
                vdc.id, vdc.name, vdc.org_id, vdc.zone_id, vdc.phase,
                vdc.namespace, vdc.description,
                vdc.cpu_quota, vdc.memory_quota, vdc.storage_quota,
                now, now,
            )
        except asyncpg.UniqueViolationError as e:
            raise AlreadyExistsError("VDC", vdc.id, details={"constraint": e.constraint_name})
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to create VDC {vdc.id}: {e}")
            raise DatabaseError(f"Failed to create VDC: {e}")
        return self._map_row_to_vdc(row)

    async def get(self, vdc_id: str) -> VirtualDataCenter:
        row = await self._fetchrow(VDC_GET_BY_ID, vdc_id)
        if row is None:
            raise NotFoundError("VDC", vdc_id)
        return self._map_row_to_vdc(row)

    async def update(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        self._require_addressable(vdc)
        row = await self._fetchrow(
            VDC_UPDATE,
            vdc.id, vdc.name, vdc.org_id, vdc.zone_id, vdc.phase,
            vdc.namespace, vdc.description,
            vdc.cpu_quota, vdc.memory_quota, vdc.storage_quota,
            datetime.now(timezone.utc),
        )
        if row is None:
            raise NotFoundError("VDC", vdc.id)
        return self._map_row_to_vdc(row)

    async def delete(self, vdc_id: str) -> None:
        row = await self._fetchrow(VDC_DELETE, vdc_id)
        if row is None:
            raise NotFoundError("VDC", vdc_id)
        logger.info(f"Deleted VDC {vdc_id}")

    async def list(self, org_id: Optional[str] = None) -> List[VirtualDataCenter]:
        if org_id:
            return await self._fetch(VDC_LIST_BY_ORG, org_id)
        return await self._fetch(VDC_LIST_ALL)

    async def list_by_zone(self, zone_id: str) -> List[VirtualDataCenter]:
        if not zone_id:
            return []
        return await self._fetch(VDC_LIST_BY_ZONE, zone_id)

    async def list_by_org_and_zone(self, org_id: str, zone_id: str) -> List[VirtualDataCenter]:
        if not zone_id:
            return []
        return await self._fetch(VDC_LIST_BY_ORG_AND_ZONE, org_id, zone_id)

    async def _fetchrow(self, query: str, *args):
        try:
            return await self._db.fetchrow(query.format(schema=self._schema), *args)
        except asyncpg.PostgresError as e:
            logger.error(f"VDC query failed: {e}")
            raise DatabaseError(f"VDC query failed: {e}")

    async def _fetch(self, query: str, *args) -> List[VirtualDataCenter]:
        try:
            rows = await self._db.fetch(query.format(schema=self._schema), *args)
        except asyncpg.PostgresError as e:
            logger.error(f"VDC query failed: {e}")
            raise DatabaseError(f"VDC query failed: {e}")
        return [self._map_row_to_vdc(row) for row in rows]

    @staticmethod
    def _require_addressable(vdc: Optional[VirtualDataCenter]) -> None:
        if vdc is None or not vdc.id:
            raise InvalidInputError("VDC and VDC ID are required", field="vdc_id")
        if not vdc.org_id:
            raise InvalidInputError("VDC organization ID is required", field="org_id")

    def _map_row_to_vdc(self, row: Mapping[str, Any]) -> VirtualDataCenter:
        zone_id = row.get("zone_id")
        return VirtualDataCenter(
            id=str(row["id"]),
            name=row["name"],
            org_id=str(row["org_id"]),
            zone_id=str(zone_id) if zone_id else None,
            phase=row["phase"],
            namespace=row.get("namespace"),
            description=row.get("description"),
            cpu_quota=row.get("cpu_quota") or 0,
            memory_quota=row.get("memory_quota") or 0,
            storage_quota=row.get("storage_quota") or 0,
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
