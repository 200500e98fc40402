"""Utilization feature: usage aggregation and reporting views."""

from .entities import ResourceUsage, ZoneUtilization, OrganizationZoneAccess
from .repositories import UtilizationCache
from .services import UtilizationAggregator, UtilizationService

__all__ = [
    "ResourceUsage",
    "ZoneUtilization",
    "OrganizationZoneAccess",
    "UtilizationCache",
    "UtilizationAggregator",
    "UtilizationService",
]
