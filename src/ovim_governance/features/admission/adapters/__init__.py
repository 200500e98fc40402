"""Namespace lookup adapters."""

from .memory_namespace_lookup import InMemoryNamespaceLookup
from .kube_namespace_lookup import KubeNamespaceLookup

__all__ = ["InMemoryNamespaceLookup", "KubeNamespaceLookup"]
