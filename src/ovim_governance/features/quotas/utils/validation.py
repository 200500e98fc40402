"""Ledger validation rules."""

from typing import Optional

from ....core.exceptions import InvalidInputError
from ....core.value_objects import ResourceAmounts
from ...zones.entities import Zone
from ..entities.quota import OrganizationZoneQuota


def ledger_key_label(organization_id: str, zone_id: str) -> str:
    return f"{organization_id}/{zone_id}"


def validate_quota_reference(quota: Optional[OrganizationZoneQuota]) -> None:
    """A ledger row must name both its organization and its zone."""
    if quota is None:
        raise InvalidInputError("Quota is required", field="quota")
    if not quota.organization_id:
        raise InvalidInputError("Organization ID is required", field="organization_id")
    if not quota.zone_id:
        raise InvalidInputError("Zone ID is required", field="zone_id")


def validate_ledger_key(organization_id: str, zone_id: str) -> None:
    if not organization_id:
        raise InvalidInputError("Organization ID is required", field="organization_id")
    if not zone_id:
        raise InvalidInputError("Zone ID is required", field="zone_id")


def validate_grant(zone: Zone, grant: ResourceAmounts) -> None:
    """Reject negative grants and grants above the zone's own quota."""
    for name, amount in grant.items():
        if amount < 0:
            raise InvalidInputError(f"{name} quota cannot be negative", field=f"{name}_quota")

    exceeded = zone.quota.exceeded_by(grant)
    if exceeded:
        name = exceeded[0]
        raise InvalidInputError(
            f"{name} quota exceeds zone quota",
            field=f"{name}_quota",
            details={"zone_id": zone.id, "exceeded": list(exceeded)},
        )
