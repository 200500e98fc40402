"""Namespace topology conventions.

Controllers create namespaces with these names and labels and the webhook
checks them. Both sides must agree literally.
"""

from typing import Dict, Mapping, Optional

from ....config.constants import (
    LABEL_TYPE,
    LABEL_MANAGED_BY,
    LABEL_ORG,
    LABEL_VDC,
    LABEL_APP_NAME,
    LABEL_APP_MANAGED_BY,
    REQUIRED_PLATFORM_LABELS,
    MANAGED_BY_OVIM,
    ORG_NAMESPACE_PREFIX,
    VDC_NAMESPACE_PREFIX,
    NamespaceType,
)


def org_namespace_name(org_id: str) -> str:
    return f"{ORG_NAMESPACE_PREFIX}{org_id.lower()}"


def vdc_namespace_name(org_id: str, vdc_name: str) -> str:
    """``vdc-{org}-{vdc}``: unique across organizations since VDC names are unique per org."""
    return f"{VDC_NAMESPACE_PREFIX}{org_id.lower()}-{vdc_name.lower()}"


def org_namespace_labels(org_id: str) -> Dict[str, str]:
    return {
        LABEL_APP_NAME: MANAGED_BY_OVIM,
        "app.kubernetes.io/component": "organization",
        LABEL_APP_MANAGED_BY: MANAGED_BY_OVIM,
        LABEL_TYPE: NamespaceType.ORG.value,
        LABEL_MANAGED_BY: MANAGED_BY_OVIM,
        LABEL_ORG: org_id,
    }


def vdc_namespace_labels(org_id: str, vdc_id: str) -> Dict[str, str]:
    return {
        LABEL_APP_NAME: MANAGED_BY_OVIM,
        "app.kubernetes.io/component": "vdc",
        LABEL_APP_MANAGED_BY: MANAGED_BY_OVIM,
        LABEL_TYPE: NamespaceType.VDC.value,
        LABEL_MANAGED_BY: MANAGED_BY_OVIM,
        LABEL_ORG: org_id,
        LABEL_VDC: vdc_id,
    }


def is_scoped_type(labels: Mapping[str, str]) -> bool:
    """True for namespaces claiming to be organization or VDC scoped."""
    return labels.get(LABEL_TYPE) in (NamespaceType.ORG.value, NamespaceType.VDC.value)


def is_managed(labels: Mapping[str, str]) -> bool:
    return labels.get(LABEL_MANAGED_BY) == MANAGED_BY_OVIM


def is_org_namespace_name(name: str) -> bool:
    return name.startswith(ORG_NAMESPACE_PREFIX) and not name.startswith(VDC_NAMESPACE_PREFIX)


def is_vdc_namespace_name(name: str) -> bool:
    return name.startswith(VDC_NAMESPACE_PREFIX)


def parent_org_namespace(labels: Mapping[str, str]) -> str:
    return f"{ORG_NAMESPACE_PREFIX}{labels.get(LABEL_ORG, '')}"


def missing_platform_label(labels: Mapping[str, str]) -> Optional[str]:
    """First required platform identity label that is absent or empty."""
    for label in REQUIRED_PLATFORM_LABELS:
        if not labels.get(label):
            return label
    return None


def org_namespace_violation(name: str, labels: Mapping[str, str]) -> Optional[str]:
    if not name.startswith(ORG_NAMESPACE_PREFIX):
        return f"organization namespace must have '{ORG_NAMESPACE_PREFIX}' prefix"
    if not labels.get(LABEL_ORG):
        return f"organization namespace missing '{LABEL_ORG}' label"
    return None


def vdc_namespace_violation(name: str, labels: Mapping[str, str]) -> Optional[str]:
    if not name.startswith(VDC_NAMESPACE_PREFIX):
        return f"VDC namespace must have '{VDC_NAMESPACE_PREFIX}' prefix"
    if not labels.get(LABEL_ORG) or not labels.get(LABEL_VDC):
        return f"VDC namespace missing '{LABEL_ORG}' or '{LABEL_VDC}' labels"
    return None


def existing_vdc_namespace_violation(name: str, labels: Mapping[str, str]) -> Optional[str]:
    """Checks a live VDC namespace before workloads are admitted into it."""
    if labels.get(LABEL_TYPE) != NamespaceType.VDC.value or not is_managed(labels):
        return f"namespace {name} is not a properly managed VDC namespace"
    if not labels.get(LABEL_ORG):
        return f"VDC namespace {name} missing organization reference"
    return None
