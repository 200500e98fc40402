"""VDC storage implementations."""

from .memory_vdc_repository import InMemoryVDCRepository
from .vdc_repository import VDCDatabaseRepository

__all__ = [
    "InMemoryVDCRepository",
    "VDCDatabaseRepository",
]
