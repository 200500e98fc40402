"""Admission feature: namespace topology and workload placement webhook."""

from .adapters import InMemoryNamespaceLookup, KubeNamespaceLookup
from .entities import AdmissionDecision, AdmissionReview, NamespaceLookup
from .services import AdmissionWebhook

__all__ = [
    "InMemoryNamespaceLookup",
    "KubeNamespaceLookup",
    "AdmissionDecision",
    "AdmissionReview",
    "NamespaceLookup",
    "AdmissionWebhook",
]
