"""Response models for the reporting, ledger and placement routes."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResourceTriple(BaseModel):
    cpu: int
    memory: int
    storage: int

    @classmethod
    def from_amounts(cls, amounts) -> "ResourceTriple":
        return cls(cpu=amounts.cpu, memory=amounts.memory, storage=amounts.storage)


class ZoneUtilizationResponse(BaseModel):
    """Zone capacity, quota and live usage."""

    id: str = Field(..., description="Zone ID")
    name: str = Field(..., description="Zone name")
    status: str = Field(..., description="available, maintenance or unavailable")
    region: Optional[str] = None
    cloud_provider: Optional[str] = None
    capacity: ResourceTriple
    quota: ResourceTriple
    used: ResourceTriple
    available: ResourceTriple = Field(..., description="Quota headroom, clamped at zero")
    utilization_percent: Dict[str, float]
    vdc_count: int
    active_vdc_count: int
    last_sync: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, utilization) -> "ZoneUtilizationResponse":
        quota = utilization.quota

        def percent(used: int, limit: int) -> float:
            return round(used / limit * 100, 2) if limit else 0.0

        return cls(
            id=utilization.id,
            name=utilization.name,
            status=utilization.status,
            region=utilization.region,
            cloud_provider=utilization.cloud_provider,
            capacity=ResourceTriple.from_amounts(utilization.capacity),
            quota=ResourceTriple.from_amounts(quota),
            used=ResourceTriple.from_amounts(utilization.used),
            available=ResourceTriple.from_amounts(utilization.available),
            utilization_percent={
                name: percent(used, limit)
                for (name, used), limit in zip(utilization.used.items(), quota)
            },
            vdc_count=utilization.vdc_count,
            active_vdc_count=utilization.active_vdc_count,
            last_sync=utilization.last_sync,
            updated_at=utilization.updated_at,
        )


class OrganizationZoneAccessResponse(BaseModel):
    """What one organization may still place in one zone."""

    organization_id: str
    zone_id: str
    zone_name: str
    zone_status: str
    is_allowed: bool
    quota: ResourceTriple
    used: ResourceTriple
    remaining: ResourceTriple
    vdc_count: int

    @classmethod
    def from_entity(cls, access) -> "OrganizationZoneAccessResponse":
        return cls(
            organization_id=access.organization_id,
            zone_id=access.zone_id,
            zone_name=access.zone_name,
            zone_status=access.zone_status,
            is_allowed=access.is_allowed,
            quota=ResourceTriple.from_amounts(access.quota),
            used=ResourceTriple.from_amounts(access.used),
            remaining=ResourceTriple.from_amounts(access.remaining),
            vdc_count=access.vdc_count,
        )


class OrganizationZoneAccessListResponse(BaseModel):
    organization_id: str
    zones: List[OrganizationZoneAccessResponse]


class QuotaResponse(BaseModel):
    """A ledger row with its zone joined in."""

    id: str
    organization_id: str
    zone_id: str
    zone_name: Optional[str] = Field(None, description="Missing when the zone no longer exists")
    cpu_quota: int
    memory_quota: int
    storage_quota: int
    is_allowed: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, quota) -> "QuotaResponse":
        return cls(
            id=quota.id,
            organization_id=quota.organization_id,
            zone_id=quota.zone_id,
            zone_name=quota.zone.name if quota.zone else None,
            cpu_quota=quota.cpu_quota,
            memory_quota=quota.memory_quota,
            storage_quota=quota.storage_quota,
            is_allowed=quota.is_allowed,
            created_at=quota.created_at,
            updated_at=quota.updated_at,
        )


class PlacementDecisionResponse(BaseModel):
    allowed: bool
    reason: Optional[str] = Field(None, description="Denial reason code")
    message: str = ""
    details: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, decision) -> "PlacementDecisionResponse":
        return cls(
            allowed=decision.allowed,
            reason=decision.reason.name if decision.reason else None,
            message=decision.message,
            details=dict(decision.details),
        )
