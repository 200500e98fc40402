"""Zone entities."""

from .zone import Zone
from .protocols import ZoneRepository

__all__ = ["Zone", "ZoneRepository"]
