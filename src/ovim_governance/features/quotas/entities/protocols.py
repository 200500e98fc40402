"""Protocol interfaces for ledger storage.

Rows are keyed by (organization_id, zone_id); a second row for the same pair
is an AlreadyExistsError, never a silent overwrite.
"""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from .quota import OrganizationZoneQuota


@runtime_checkable
class QuotaLedgerRepository(Protocol):
    """Protocol for ledger persistence operations."""

    @abstractmethod
    async def create(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        ...

    @abstractmethod
    async def get(self, organization_id: str, zone_id: str) -> OrganizationZoneQuota:
        ...

    @abstractmethod
    async def list(self, organization_id: Optional[str] = None) -> List[OrganizationZoneQuota]:
        """Rows of one organization, or every row when no ID is given."""
        ...

    @abstractmethod
    async def update(self, quota: OrganizationZoneQuota) -> OrganizationZoneQuota:
        ...

    @abstractmethod
    async def delete(self, organization_id: str, zone_id: str) -> None:
        ...
