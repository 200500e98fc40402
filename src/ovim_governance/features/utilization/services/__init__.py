"""Utilization services."""

from .aggregator import UtilizationAggregator
from .utilization_service import UtilizationService

__all__ = ["UtilizationAggregator", "UtilizationService"]
