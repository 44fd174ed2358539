"""Abstract Fenwick tree."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from fenwick_bit_tree.indexing import Internal, ascending, descending
from fenwick_bit_tree.values import Additive, ValueOps


class FenwickTree(ABC):
    """Interface shared by the fixed-capacity and growing trees.

    Values live in a list of ``capacity + 1`` slots; slot 0 is a sentinel
    that always holds the identity value.
    """

    kind: str = ""

    def __init__(self, capacity: int = 0, ops: ValueOps | None = None) -> None:
        if capacity < 0:
            raise ValueError(f"Capacity must be non-negative, got {capacity}")
        self.ops: ValueOps = ops if ops is not None else Additive()
        self._data: list[Any] = [self.ops.identity() for _ in range(capacity + 1)]

    @property
    def capacity(self) -> int:
        """Number of external indices the tree can currently address."""
        return len(self._data) - 1

    @abstractmethod
    def query(self, idx: int) -> Any:
        """Return the aggregate of all values at indices ``<= idx``."""

    @abstractmethod
    def update(self, idx: int, value: Any) -> None:
        """Merge *value* into the value stored at *idx*."""

    def range_query(self, start: int, end: int) -> Any:
        """Return the aggregate over the half-open range ``(start, end]``.

        Computed as ``query(end) - query(start)``, so the value at *start*
        itself is excluded.
        """
        start_sum = self.query(start)
        end_sum = self.query(end)
        return self.ops.inverse(end_sum, start_sum)

    # ── internals ─────────────────────────────────────────────────────────

    def _prefix(self, index: Internal) -> Any:
        """Sum the slots on the descending chain from *index*."""
        result = self.ops.identity()
        for node in descending(index):
            result = self.ops.merge(result, self._data[node.position])
        return result

    def _check_value(self, value: Any) -> None:
        """Merge *value* into a scratch identity so a rejected payload fails
        before the store is touched."""
        self.ops.merge(self.ops.identity(), value)

    def _propagate(self, index: Internal, value: Any) -> None:
        """Merge *value* into every slot whose range contains *index*."""
        for node in ascending(index, self.capacity):
            self._data[node.position] = self.ops.merge(self._data[node.position], value)

    def __len__(self) -> int:
        return self.capacity

    def __repr__(self) -> str:
        return f"{type(self).__name__}(capacity={self.capacity}, ops={self.ops!r})"
