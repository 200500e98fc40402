"""Platform-wide constants for OVIM resource governance.

Label keys and name prefixes in this module are matched literally by
controllers and namespace consumers; changing any of them breaks the
namespace topology contract.
"""

from enum import Enum


# Namespace topology labels
LABEL_TYPE = "type"
LABEL_MANAGED_BY = "managed-by"
LABEL_ORG = "org"
LABEL_VDC = "vdc"

# Platform identity labels required on every managed namespace
LABEL_APP_NAME = "app.kubernetes.io/name"
LABEL_APP_MANAGED_BY = "app.kubernetes.io/managed-by"
REQUIRED_PLATFORM_LABELS = (LABEL_APP_NAME, LABEL_APP_MANAGED_BY)

MANAGED_BY_OVIM = "ovim"

ORG_NAMESPACE_PREFIX = "org-"
VDC_NAMESPACE_PREFIX = "vdc-"


class NamespaceType(str, Enum):
    """Values of the ``type`` label on managed namespaces."""
    ORG = "org"
    VDC = "vdc"


class ZoneStatus(str, Enum):
    """Zone health states. Only AVAILABLE is healthy."""
    AVAILABLE = "available"
    MAINTENANCE = "maintenance"
    UNAVAILABLE = "unavailable"


class VDCPhase(str, Enum):
    """Lifecycle phases of a virtual data center."""
    PENDING = "Pending"
    ACTIVE = "Active"
    TERMINATING = "Terminating"
    FAILED = "Failed"


class ResourceKind(str, Enum):
    """Orchestration API kinds the admission webhook has rules for."""
    NAMESPACE = "Namespace"
    POD = "Pod"
    DEPLOYMENT = "Deployment"
    STATEFUL_SET = "StatefulSet"
    DAEMON_SET = "DaemonSet"
    VIRTUAL_MACHINE = "VirtualMachine"


WORKLOAD_KINDS = frozenset({
    ResourceKind.POD.value,
    ResourceKind.DEPLOYMENT.value,
    ResourceKind.STATEFUL_SET.value,
    ResourceKind.DAEMON_SET.value,
})

# Zone synchronization
ZONE_SYNC_MANAGED_LABEL = "ovim.io/managed-by"
ZONE_SYNC_MANAGED_VALUE = "ovim-zone-sync"
ZONE_SYNC_CAPACITY_CHANGE_THRESHOLD = 0.1
ZONE_SYNC_STALE_HOURS = 24
ZONE_SYNC_DELETE_GRACE_HOURS = 72

# Cache key namespaces
UTILIZATION_CACHE_PREFIX = "ovim:utilization"
