"""Admission entities."""

from .decision import AdmissionDecision
from .protocols import NamespaceLookup
from .review import (
    AdmissionRequest,
    AdmissionResponse,
    AdmissionReview,
    AdmissionStatus,
    GroupVersionKind,
    KubeObject,
    ObjectMeta,
)

__all__ = [
    "AdmissionDecision",
    "NamespaceLookup",
    "AdmissionRequest",
    "AdmissionResponse",
    "AdmissionReview",
    "AdmissionStatus",
    "GroupVersionKind",
    "KubeObject",
    "ObjectMeta",
]
