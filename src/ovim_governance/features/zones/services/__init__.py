"""Zone services."""

from .zone_sync_service import ZoneSyncService, SyncResult

__all__ = [
    "ZoneSyncService",
    "SyncResult",
]
