"""Placement services."""

from .placement_service import PlacementService
from .placement_coordinator import PlacementCoordinator

__all__ = ["PlacementService", "PlacementCoordinator"]
