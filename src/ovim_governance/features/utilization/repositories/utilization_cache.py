"""Redis cache for dashboard utilization views.

The TTL is the explicit staleness bound for reporting. Placement decisions
never read from this cache.
"""

import json
import logging
from typing import List, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ....config.constants import UTILIZATION_CACHE_PREFIX
from ..entities.utilization import ZoneUtilization

logger = logging.getLogger(__name__)


class UtilizationCache:
    """Caches zone utilization snapshots in Redis with a TTL."""

    def __init__(self, client: redis.Redis, ttl_seconds: int = 30,
                 key_prefix: str = UTILIZATION_CACHE_PREFIX):
        """Initialize with a redis client.

        Args:
            client: redis.asyncio client
            ttl_seconds: Staleness bound for cached snapshots
            key_prefix: Key namespace
        """
        self._client = client
        self._ttl = ttl_seconds
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int = 30) -> "UtilizationCache":
        return cls(redis.from_url(url, decode_responses=True), ttl_seconds=ttl_seconds)

    def _make_key(self, suffix: str) -> str:
        return f"{self._key_prefix}:{suffix}"

    async def get_all(self) -> Optional[List[ZoneUtilization]]:
        """Cached snapshot of every zone, or None on a miss."""
        try:
            cached = await self._client.get(self._make_key("all"))
        except RedisError as e:
            logger.warning(f"Failed to read utilization cache: {e}")
            return None

        if not cached:
            return None
        return [ZoneUtilization.from_dict(item) for item in json.loads(cached)]

    async def set_all(self, utilizations: List[ZoneUtilization]) -> bool:
        payload = json.dumps([u.to_dict() for u in utilizations])
        try:
            await self._client.set(self._make_key("all"), payload, ex=self._ttl)
        except RedisError as e:
            logger.warning(f"Failed to write utilization cache: {e}")
            return False
        logger.debug(f"Cached utilization for {len(utilizations)} zones (ttl={self._ttl}s)")
        return True

    async def get_zone(self, zone_id: str) -> Optional[ZoneUtilization]:
        try:
            cached = await self._client.get(self._make_key(f"zone:{zone_id}"))
        except RedisError as e:
            logger.warning(f"Failed to read utilization cache for zone {zone_id}: {e}")
            return None

        if not cached:
            return None
        return ZoneUtilization.from_dict(json.loads(cached))

    async def set_zone(self, utilization: ZoneUtilization) -> bool:
        try:
            await self._client.set(
                self._make_key(f"zone:{utilization.id}"),
                json.dumps(utilization.to_dict()),
                ex=self._ttl,
            )
        except RedisError as e:
            logger.warning(f"Failed to write utilization cache for zone {utilization.id}: {e}")
            return False
        return True

    async def invalidate(self, zone_id: Optional[str] = None) -> None:
        """Drop the all-zones snapshot and, when given, one zone's snapshot."""
        keys = [self._make_key("all")]
        if zone_id:
            keys.append(self._make_key(f"zone:{zone_id}"))
        try:
            await self._client.delete(*keys)
        except RedisError as e:
            logger.warning(f"Failed to invalidate utilization cache: {e}")

    async def close(self) -> None:
        await self._client.aclose()
