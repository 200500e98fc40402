"""API request and response models."""

from .base import APIResponse
from .requests import SetQuotaRequest, AccommodateRequest
from .responses import (
    ResourceTriple,
    ZoneUtilizationResponse,
    OrganizationZoneAccessResponse,
    OrganizationZoneAccessListResponse,
    QuotaResponse,
    PlacementDecisionResponse,
)

__all__ = [
    "APIResponse",
    "SetQuotaRequest",
    "AccommodateRequest",
    "ResourceTriple",
    "ZoneUtilizationResponse",
    "OrganizationZoneAccessResponse",
    "OrganizationZoneAccessListResponse",
    "QuotaResponse",
    "PlacementDecisionResponse",
]
