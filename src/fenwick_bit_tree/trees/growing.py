"""Fenwick tree that grows on demand."""

from __future__ import annotations

from typing import Any

from fenwick_bit_tree.indexing import Internal, to_internal
from fenwick_bit_tree.trees import register
from fenwick_bit_tree.trees.base import FenwickTree
from fenwick_bit_tree.trees.resize import conserve_aggregates
from fenwick_bit_tree.values import ValueOps

GROWTH_POLICIES = ("exact", "power_of_two")


@register("growing")
class GrowingTree(FenwickTree):
    """Fenwick tree whose capacity extends to fit any updated index.

    Updates past the current capacity grow the store first; queries past it
    clamp to the highest stored index.  Neither ever raises
    :class:`~fenwick_bit_tree.errors.IndexOutOfBounds` for a non-negative
    index.

    With ``growth="power_of_two"`` the capacity is rounded up to the next
    power of two, trading memory for fewer resizes on steadily increasing
    keys (e.g. time slots).
    """

    def __init__(
        self,
        capacity: int = 0,
        ops: ValueOps | None = None,
        growth: str = "exact",
    ) -> None:
        if growth not in GROWTH_POLICIES:
            raise ValueError(
                f"Unknown growth policy '{growth}'. Available: {', '.join(GROWTH_POLICIES)}"
            )
        super().__init__(capacity, ops)
        self.growth = growth

    def query(self, idx: int) -> Any:
        index = to_internal(idx)
        if index.position > self.capacity:
            index = Internal(self.capacity)
        return self._prefix(index)

    def update(self, idx: int, value: Any) -> None:
        index = to_internal(idx)
        self._check_value(value)
        if index.position > self.capacity:
            self._resize(index)
        self._propagate(index, value)

    def _target_capacity(self, index: Internal) -> int:
        if self.growth == "power_of_two":
            return 1 << (index.position - 1).bit_length()
        return index.position

    def _resize(self, index: Internal) -> None:
        """Extend the store to cover *index* and seed the new slots."""
        old_size = len(self._data)
        new_size = self._target_capacity(index) + 1
        self._data.extend(self.ops.identity() for _ in range(new_size - old_size))

        # all seeds are read before any is written
        for node, seed in conserve_aggregates(old_size, new_size, self._prefix, self.ops):
            self._data[node.position] = self.ops.merge(self._data[node.position], seed)
