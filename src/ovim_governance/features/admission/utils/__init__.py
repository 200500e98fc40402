"""Admission utilities."""

from .topology import (
    org_namespace_name,
    vdc_namespace_name,
    org_namespace_labels,
    vdc_namespace_labels,
)

__all__ = [
    "org_namespace_name",
    "vdc_namespace_name",
    "org_namespace_labels",
    "vdc_namespace_labels",
]
