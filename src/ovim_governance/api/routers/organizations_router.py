"""Organization zone access, quota ledger and placement dry-run endpoints."""

from fastapi import APIRouter, Depends, Path, Response, status

from ...features.placement import PlacementService
from ...features.quotas import QuotaLedgerService
from ...features.utilization import UtilizationService
from ..dependencies import get_ledger_service, get_placement_service, get_utilization_service
from ..models.requests import AccommodateRequest, SetQuotaRequest
from ..models.responses import (
    OrganizationZoneAccessListResponse,
    OrganizationZoneAccessResponse,
    PlacementDecisionResponse,
    QuotaResponse,
)

router = APIRouter(
    prefix="/organizations",
    tags=["Organizations"],
    responses={
        400: {"description": "Invalid input"},
        404: {"description": "Zone or quota not found"},
    },
)


@router.get(
    "/{org_id}/zones",
    response_model=OrganizationZoneAccessListResponse,
    summary="Zones an organization has quota in",
)
async def list_organization_zones(
    org_id: str = Path(..., description="Organization ID"),
    service: UtilizationService = Depends(get_utilization_service),
) -> OrganizationZoneAccessListResponse:
    access = await service.get_organization_zone_access(org_id)
    return OrganizationZoneAccessListResponse(
        organization_id=org_id,
        zones=[OrganizationZoneAccessResponse.from_entity(a) for a in access],
    )


@router.get("/{org_id}/zones/{zone_id}/quota", response_model=QuotaResponse, summary="Get quota")
async def get_quota(
    org_id: str = Path(..., description="Organization ID"),
    zone_id: str = Path(..., description="Zone ID"),
    service: QuotaLedgerService = Depends(get_ledger_service),
) -> QuotaResponse:
    return QuotaResponse.from_entity(await service.get(org_id, zone_id))


@router.put(
    "/{org_id}/zones/{zone_id}/quota",
    response_model=QuotaResponse,
    summary="Grant or replace quota",
    description="Each resource must stay within the zone's own quota.",
)
async def set_quota(
    request: SetQuotaRequest,
    org_id: str = Path(..., description="Organization ID"),
    zone_id: str = Path(..., description="Zone ID"),
    service: QuotaLedgerService = Depends(get_ledger_service),
) -> QuotaResponse:
    quota = await service.set_quota(
        org_id, zone_id, request.to_amounts(), is_allowed=request.is_allowed
    )
    return QuotaResponse.from_entity(quota)


@router.delete(
    "/{org_id}/zones/{zone_id}/quota",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Revoke zone access",
)
async def delete_quota(
    org_id: str = Path(..., description="Organization ID"),
    zone_id: str = Path(..., description="Zone ID"),
    service: QuotaLedgerService = Depends(get_ledger_service),
) -> Response:
    await service.delete(org_id, zone_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{org_id}/zones/{zone_id}/accommodate",
    response_model=PlacementDecisionResponse,
    summary="Dry-run VDC placement",
    description="Nothing is reserved; the answer is only valid at the instant it is computed.",
)
async def accommodate(
    request: AccommodateRequest,
    org_id: str = Path(..., description="Organization ID"),
    zone_id: str = Path(..., description="Zone ID"),
    service: PlacementService = Depends(get_placement_service),
) -> PlacementDecisionResponse:
    decision = await service.accommodate(
        org_id, zone_id, request.to_amounts(), exclude_vdc_id=request.exclude_vdc_id
    )
    return PlacementDecisionResponse.from_entity(decision)
