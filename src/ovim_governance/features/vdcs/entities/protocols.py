"""Protocol interfaces for VDC storage."""

from abc import abstractmethod
from typing import List, Optional, Protocol, runtime_checkable

from .vdc import VirtualDataCenter


@runtime_checkable
class VDCRepository(Protocol):
    """Protocol for VDC persistence operations.

    Listings must reflect committed state at call time; a VDC without a zone
    never appears in a zone-scoped listing.
    """

    @abstractmethod
    async def create(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        ...

    @abstractmethod
    async def get(self, vdc_id: str) -> VirtualDataCenter:
        ...

    @abstractmethod
    async def update(self, vdc: VirtualDataCenter) -> VirtualDataCenter:
        ...

    @abstractmethod
    async def delete(self, vdc_id: str) -> None:
        ...

    @abstractmethod
    async def list(self, org_id: Optional[str] = None) -> List[VirtualDataCenter]:
        """All VDCs, or only those of ``org_id`` when given."""
        ...

    @abstractmethod
    async def list_by_zone(self, zone_id: str) -> List[VirtualDataCenter]:
        ...

    @abstractmethod
    async def list_by_org_and_zone(self, org_id: str, zone_id: str) -> List[VirtualDataCenter]:
        ...
