"""Request models for the ledger and placement routes."""

from typing import Optional

from pydantic import BaseModel, Field

from ...core.value_objects import ResourceAmounts


class SetQuotaRequest(BaseModel):
    """Grant an organization part of a zone's quota."""

    cpu_quota: int = Field(..., ge=0, description="CPU cores")
    memory_quota: int = Field(..., ge=0, description="Memory in GB")
    storage_quota: int = Field(..., ge=0, description="Storage in GB")
    is_allowed: bool = Field(True, description="Whether the organization may place VDCs in the zone")

    def to_amounts(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu_quota, self.memory_quota, self.storage_quota)


class AccommodateRequest(BaseModel):
    """Dry-run placement of a new or resized VDC."""

    cpu: int = Field(..., ge=0, description="Requested CPU cores")
    memory: int = Field(..., ge=0, description="Requested memory in GB")
    storage: int = Field(..., ge=0, description="Requested storage in GB")
    exclude_vdc_id: Optional[str] = Field(
        None, description="VDC being resized; its current commitment is not counted"
    )

    def to_amounts(self) -> ResourceAmounts:
        return ResourceAmounts(self.cpu, self.memory, self.storage)
