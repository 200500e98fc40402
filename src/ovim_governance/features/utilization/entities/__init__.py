"""Utilization views."""

from .utilization import ResourceUsage, ZoneUtilization, OrganizationZoneAccess

__all__ = ["ResourceUsage", "ZoneUtilization", "OrganizationZoneAccess"]
