"""Zone storage implementations."""

from .memory_zone_repository import InMemoryZoneRepository
from .zone_repository import ZoneDatabaseRepository

__all__ = [
    "InMemoryZoneRepository",
    "ZoneDatabaseRepository",
]
