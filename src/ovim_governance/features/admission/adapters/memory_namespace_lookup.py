"""In-memory namespace lookup for tests and local runs."""

import asyncio
from typing import Dict, Mapping, Optional


class InMemoryNamespaceLookup:
    """Namespace labels held in a dict keyed by namespace name."""

    def __init__(self, namespaces: Optional[Mapping[str, Mapping[str, str]]] = None):
        self._namespaces: Dict[str, Dict[str, str]] = {
            name: dict(labels) for name, labels in (namespaces or {}).items()
        }
        self._lock = asyncio.Lock()
        self.lookups = 0

    async def get_namespace(self, name: str) -> Optional[Dict[str, str]]:
        async with self._lock:
            self.lookups += 1
            labels = self._namespaces.get(name)
            return dict(labels) if labels is not None else None

    async def put_namespace(self, name: str, labels: Mapping[str, str]) -> None:
        async with self._lock:
            self._namespaces[name] = dict(labels)

    async def remove_namespace(self, name: str) -> None:
        async with self._lock:
            self._namespaces.pop(name, None)
