"""Denial reasons shared by placement and admission decisions.

Each reason identifies exactly which rule refused the request so
callers and operators can tell them apart programmatically.
"""

from enum import Enum


class DenialReason(str, Enum):
    """Why a placement or admission request was refused."""

    # Placement
    ZONE_UNAVAILABLE = "zone unavailable"
    ORGANIZATION_NOT_PERMITTED = "organization not permitted in zone"
    ORGANIZATION_QUOTA_EXCEEDED = "organization quota exceeded"
    ZONE_CAPACITY_EXCEEDED = "zone capacity exceeded"

    # Admission
    UNMANAGED_NAMESPACE = "must be created by management plane"
    INVALID_NAMESPACE_TOPOLOGY = "invalid namespace topology"
    PARENT_NAMESPACE_NOT_FOUND = "parent organization namespace not found"
    MISSING_PLATFORM_LABEL = "required platform label missing"
    WORKLOAD_IN_ORG_NAMESPACE = "workloads not allowed in organization namespaces"
    INVALID_VDC_NAMESPACE = "invalid VDC namespace"

    @property
    def is_placement(self) -> bool:
        return self in _PLACEMENT_REASONS


_PLACEMENT_REASONS = frozenset({
    DenialReason.ZONE_UNAVAILABLE,
    DenialReason.ORGANIZATION_NOT_PERMITTED,
    DenialReason.ORGANIZATION_QUOTA_EXCEEDED,
    DenialReason.ZONE_CAPACITY_EXCEEDED,
})
