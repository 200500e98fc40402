"""VDCs feature: organization resource commitments placed into zones."""

from .entities import VirtualDataCenter, VDCRepository
from .repositories import InMemoryVDCRepository, VDCDatabaseRepository

__all__ = [
    "VirtualDataCenter",
    "VDCRepository",
    "InMemoryVDCRepository",
    "VDCDatabaseRepository",
]
