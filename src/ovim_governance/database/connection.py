"""
Database connection management using asyncpg.
"""
import os
from typing import Optional, List
from contextlib import asynccontextmanager
import asyncpg
from asyncpg import Pool, Record
import logging

from ..core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages the connection pool used by the PostgreSQL repositories."""

    def __init__(self, database_url: Optional[str] = None, **pool_config):
        """Initialize DatabaseManager.

        Args:
            database_url: Database URL (defaults to OVIM_DATABASE_URL env var)
            **pool_config: Additional pool configuration options
        """
        self.pool: Optional[Pool] = None
        self.dsn = database_url or os.getenv("OVIM_DATABASE_URL", "")
        if "+asyncpg" in self.dsn:
            self.dsn = self.dsn.replace("+asyncpg", "")

        self.pool_config = {
            "min_size": 2,
            "max_size": 10,
            "max_inactive_connection_lifetime": 300,
            "command_timeout": 10,
            **pool_config
        }

    async def create_pool(self) -> Pool:
        """Create and return a connection pool."""
        if not self.dsn:
            raise ConfigurationError("Database URL is not configured")

        if self.pool is None:
            logger.info(f"Creating database pool with size {self.pool_config['max_size']}")
            self.pool = await asyncpg.create_pool(
                self.dsn,
                server_settings={"application_name": os.getenv("OVIM_APP_NAME", "ovim-governance")},
                **self.pool_config
            )
            logger.info("Database pool created successfully")
        return self.pool

    async def close_pool(self):
        """Close the connection pool."""
        if self.pool:
            await self.pool.close()
            self.pool = None
            logger.info("Database pool closed")

    @asynccontextmanager
    async def acquire(self):
        """Acquire a connection from the pool."""
        if not self.pool:
            await self.create_pool()

        async with self.pool.acquire() as connection:
            yield connection

    @asynccontextmanager
    async def transaction(self):
        """Create a transaction context."""
        async with self.acquire() as connection:
            async with connection.transaction():
                yield connection

    async def fetch(self, query: str, *args, timeout: float = None) -> List[Record]:
        """Fetch multiple rows."""
        async with self.acquire() as connection:
            return await connection.fetch(query, *args, timeout=timeout)

    async def fetchrow(self, query: str, *args, timeout: float = None) -> Optional[Record]:
        """Fetch a single row."""
        async with self.acquire() as connection:
            return await connection.fetchrow(query, *args, timeout=timeout)

    async def health_check(self) -> bool:
        """Check database health."""
        try:
            async with self.acquire() as connection:
                result = await connection.fetchval("SELECT 1")
                return result == 1
        except (asyncpg.PostgresError, OSError, ConfigurationError) as e:
            logger.error(f"Database health check failed: {e}")
            return False
