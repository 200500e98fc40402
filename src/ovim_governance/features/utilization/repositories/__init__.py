"""Utilization caching."""

from .utilization_cache import UtilizationCache

__all__ = ["UtilizationCache"]
