"""Resource amount value object.

ONLY resource arithmetic - a CPU/memory/storage triple with signed,
per-resource operations. Amounts may be negative (e.g. misconfigured
headroom); callers that need a non-negative view use ``clamped()``.
"""

from dataclasses import dataclass
from typing import Iterator, Tuple


RESOURCE_NAMES: Tuple[str, str, str] = ("cpu", "memory", "storage")


@dataclass(frozen=True)
class ResourceAmounts:
    """CPU cores, memory GB and storage GB as plain integers."""

    cpu: int = 0
    memory: int = 0
    storage: int = 0

    def __add__(self, other: "ResourceAmounts") -> "ResourceAmounts":
        return ResourceAmounts(
            cpu=self.cpu + other.cpu,
            memory=self.memory + other.memory,
            storage=self.storage + other.storage,
        )

    def __sub__(self, other: "ResourceAmounts") -> "ResourceAmounts":
        return ResourceAmounts(
            cpu=self.cpu - other.cpu,
            memory=self.memory - other.memory,
            storage=self.storage - other.storage,
        )

    def __iter__(self) -> Iterator[int]:
        return iter((self.cpu, self.memory, self.storage))

    def items(self) -> Iterator[Tuple[str, int]]:
        return zip(RESOURCE_NAMES, self)

    def clamped(self) -> "ResourceAmounts":
        """Return a copy with negative amounts replaced by zero."""
        return ResourceAmounts(
            cpu=max(self.cpu, 0),
            memory=max(self.memory, 0),
            storage=max(self.storage, 0),
        )

    def has_negative(self) -> bool:
        return any(value < 0 for value in self)

    def exceeded_by(self, other: "ResourceAmounts") -> Tuple[str, ...]:
        """Names of resources where ``other`` is strictly greater than this ceiling."""
        return tuple(
            name
            for (name, ceiling), amount in zip(self.items(), other)
            if amount > ceiling
        )

    def fits_within(self, ceiling: "ResourceAmounts") -> bool:
        """True iff every resource is <= the matching ceiling."""
        return not ceiling.exceeded_by(self)

    def to_dict(self) -> dict:
        return {"cpu": self.cpu, "memory": self.memory, "storage": self.storage}
