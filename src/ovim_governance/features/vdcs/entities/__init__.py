"""VDC entities."""

from .vdc import VirtualDataCenter
from .protocols import VDCRepository

__all__ = ["VirtualDataCenter", "VDCRepository"]
