"""Zone utilization reporting endpoints."""

from typing import List

from fastapi import APIRouter, Depends, Path

from ...features.utilization import UtilizationService
from ..dependencies import get_utilization_service
from ..models.responses import ZoneUtilizationResponse

router = APIRouter(
    prefix="/zones",
    tags=["Zones"],
    responses={404: {"description": "Zone not found"}},
)


@router.get(
    "/utilization",
    response_model=List[ZoneUtilizationResponse],
    summary="Utilization of every zone",
    description="Served from the dashboard cache when one is configured; stale by at most the cache TTL.",
)
async def list_zone_utilization(
    service: UtilizationService = Depends(get_utilization_service),
) -> List[ZoneUtilizationResponse]:
    utilizations = await service.get_zone_utilizations(use_cache=True)
    return [ZoneUtilizationResponse.from_entity(u) for u in utilizations]


@router.get(
    "/{zone_id}/utilization",
    response_model=ZoneUtilizationResponse,
    summary="Utilization of one zone",
)
async def get_zone_utilization(
    zone_id: str = Path(..., description="Zone ID"),
    service: UtilizationService = Depends(get_utilization_service),
) -> ZoneUtilizationResponse:
    utilization = await service.get_zone_utilization(zone_id, use_cache=True)
    return ZoneUtilizationResponse.from_entity(utilization)
