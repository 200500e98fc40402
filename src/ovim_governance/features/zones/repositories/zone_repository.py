"""PostgreSQL zone repository.

Relies on the primary key and the UNIQUE(name) constraint for uniqueness
and maps violations to AlreadyExistsError.
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping

import asyncpg

from ....core.exceptions import AlreadyExistsError, DatabaseError, InvalidInputError, NotFoundError
from ....database import DatabaseManager, decode_json_column, encode_json_column, validate_schema_name
from ..entities.zone import Zone
from ..utils.queries import ZONE_INSERT, ZONE_UPDATE, ZONE_GET_BY_ID, ZONE_LIST_ALL, ZONE_DELETE

logger = logging.getLogger(__name__)


class ZoneDatabaseRepository:
    """Database repository for zones."""

    def __init__(self, database: DatabaseManager, schema: str = "public"):
        """Initialize with a database manager.

        Args:
            database: Pool wrapper used for all queries
            schema: Database schema name
        """
        self._db = database
        self._schema = validate_schema_name(schema)

    async def create(self, zone: Zone) -> Zone:
        if zone is None or not zone.id:
            raise InvalidInputError("Zone and zone ID are required", field="zone_id")

        now = datetime.now(timezone.utc)
        query = ZONE_INSERT.format(schema=self._schema)
        try:
            row = await self._db.fetchrow(
                query,
                zone.id, zone.name, zone.cluster_name, zone.api_url, zone.status,
                zone.region, zone.cloud_provider, zone.node_count,
                zone.cpu_capacity, zone.memory_capacity, zone.storage_capacity,
                zone.cpu_quota, zone.memory_quota, zone.storage_quota,
                encode_json_column(zone.labels), encode_json_column(zone.annotations),
                now, now, now,
            )
        except asyncpg.UniqueViolationError as e:
            raise AlreadyExistsError("Zone", zone.id, details={"constraint": e.constraint_name})
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to create zone {zone.id}: {e}")
            raise DatabaseError(f"Failed to create zone: {e}")

        logger.info(f"Created zone {zone.id} ({zone.name})")
        return self._map_row_to_zone(row)

    async def get(self, zone_id: str) -> Zone:
        try:
            row = await self._db.fetchrow(ZONE_GET_BY_ID.format(schema=self._schema), zone_id)
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to get zone {zone_id}: {e}")
            raise DatabaseError(f"Failed to get zone: {e}")

        if row is None:
            raise NotFoundError("Zone", zone_id)
        return self._map_row_to_zone(row)

    async def list(self) -> List[Zone]:
        try:
            rows = await self._db.fetch(ZONE_LIST_ALL.format(schema=self._schema))
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to list zones: {e}")
            raise DatabaseError(f"Failed to list zones: {e}")
        return [self._map_row_to_zone(row) for row in rows]

    async def update(self, zone: Zone) -> Zone:
        if zone is None or not zone.id:
            raise InvalidInputError("Zone and zone ID are required", field="zone_id")

        query = ZONE_UPDATE.format(schema=self._schema)
        try:
            row = await self._db.fetchrow(
                query,
                zone.id, zone.name, zone.cluster_name, zone.api_url, zone.status,
                zone.region, zone.cloud_provider, zone.node_count,
                zone.cpu_capacity, zone.memory_capacity, zone.storage_capacity,
                zone.cpu_quota, zone.memory_quota, zone.storage_quota,
                encode_json_column(zone.labels), encode_json_column(zone.annotations),
                zone.last_sync, datetime.now(timezone.utc),
            )
        except asyncpg.UniqueViolationError as e:
            raise AlreadyExistsError("Zone", f"name:{zone.name}", details={"constraint": e.constraint_name})
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to update zone {zone.id}: {e}")
            raise DatabaseError(f"Failed to update zone: {e}")

        if row is None:
            raise NotFoundError("Zone", zone.id)
        return self._map_row_to_zone(row)

    async def delete(self, zone_id: str) -> None:
        try:
            row = await self._db.fetchrow(ZONE_DELETE.format(schema=self._schema), zone_id)
        except asyncpg.PostgresError as e:
            logger.error(f"Failed to delete zone {zone_id}: {e}")
            raise DatabaseError(f"Failed to delete zone: {e}")

        if row is None:
            raise NotFoundError("Zone", zone_id)
        logger.info(f"Deleted zone {zone_id}")

    def _map_row_to_zone(self, row: Mapping[str, Any]) -> Zone:
        """Map database row to Zone entity."""
        return Zone(
            id=str(row["id"]),
            name=row["name"],
            cluster_name=row.get("cluster_name") or "",
            api_url=row.get("api_url") or "",
            status=row["status"],
            region=row.get("region"),
            cloud_provider=row.get("cloud_provider"),
            node_count=row.get("node_count") or 0,
            cpu_capacity=row.get("cpu_capacity") or 0,
            memory_capacity=row.get("memory_capacity") or 0,
            storage_capacity=row.get("storage_capacity") or 0,
            cpu_quota=row.get("cpu_quota") or 0,
            memory_quota=row.get("memory_quota") or 0,
            storage_quota=row.get("storage_quota") or 0,
            labels=decode_json_column(row.get("labels")),
            annotations=decode_json_column(row.get("annotations")),
            last_sync=row["last_sync"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
