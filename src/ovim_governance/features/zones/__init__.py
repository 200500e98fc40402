"""Zones feature: capacity domains and their synchronization."""

from .entities import Zone, ZoneRepository
from .repositories import InMemoryZoneRepository, ZoneDatabaseRepository
from .services import ZoneSyncService, SyncResult

__all__ = [
    "Zone",
    "ZoneRepository",
    "InMemoryZoneRepository",
    "ZoneDatabaseRepository",
    "ZoneSyncService",
    "SyncResult",
]
