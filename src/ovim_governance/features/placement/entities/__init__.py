"""Placement entities."""

from .decision import PlacementDecision

__all__ = ["PlacementDecision"]
