"""Protocol interfaces for zone storage.

Uniqueness on the zone ID and on the zone name is a storage contract:
implementations raise AlreadyExistsError, never ignore a duplicate.
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable, List

from .zone import Zone


@runtime_checkable
class ZoneRepository(Protocol):
    """Protocol for zone persistence operations."""

    @abstractmethod
    async def create(self, zone: Zone) -> Zone:
        """Persist a new zone, stamping created/updated/last-sync times."""
        ...

    @abstractmethod
    async def get(self, zone_id: str) -> Zone:
        """Get zone by ID or raise NotFoundError."""
        ...

    @abstractmethod
    async def list(self) -> List[Zone]:
        """List all zones ordered by name."""
        ...

    @abstractmethod
    async def update(self, zone: Zone) -> Zone:
        """Replace a zone's fields, preserving created_at."""
        ...

    @abstractmethod
    async def delete(self, zone_id: str) -> None:
        """Delete a zone or raise NotFoundError."""
        ...
