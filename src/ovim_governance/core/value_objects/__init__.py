"""Value objects for ovim-governance."""

from .denial_reason import DenialReason
from .resources import ResourceAmounts, RESOURCE_NAMES

__all__ = [
    "DenialReason",
    "ResourceAmounts",
    "RESOURCE_NAMES",
]
