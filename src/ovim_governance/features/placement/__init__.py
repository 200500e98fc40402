"""Placement feature: two-tier accommodation and serialized reservation."""

from .entities import PlacementDecision
from .services import PlacementService, PlacementCoordinator

__all__ = ["PlacementDecision", "PlacementService", "PlacementCoordinator"]
