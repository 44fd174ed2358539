"""Fenwick tree with a capacity fixed at construction."""

from __future__ import annotations

from typing import Any

from fenwick_bit_tree.errors import IndexOutOfBounds
from fenwick_bit_tree.indexing import Index, Internal, to_internal
from fenwick_bit_tree.trees import register
from fenwick_bit_tree.trees.base import FenwickTree


@register("fixed")
class FixedSizeTree(FenwickTree):
    """Fenwick tree that rejects any index outside ``[0, capacity)``.

    Both :meth:`update` and :meth:`query` validate the index (and, for
    updates, the payload) before touching the store, so a failed call
    leaves the tree unchanged.
    """

    def query(self, idx: int) -> Any:
        return self._prefix(self._checked(idx))

    def update(self, idx: int, value: Any) -> None:
        index = self._checked(idx)
        self._check_value(value)
        self._propagate(index, value)

    def _checked(self, idx: Index) -> Internal:
        index = to_internal(idx)
        if index.position > self.capacity:
            raise IndexOutOfBounds(idx)
        return index
