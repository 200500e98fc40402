"""Protocol for live namespace lookups."""

from abc import abstractmethod
from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class NamespaceLookup(Protocol):
    """Reads namespace objects from the orchestration API."""

    @abstractmethod
    async def get_namespace(self, name: str) -> Optional[Dict[str, str]]:
        """Labels of namespace ``name``, or None when it does not exist.

        Raises:
            NamespaceLookupError: the API could not answer
        """
        ...
