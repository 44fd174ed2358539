"""Fenwick (binary indexed) trees with fixed and growing capacity."""

from __future__ import annotations

from fenwick_bit_tree.errors import FenwickTreeError, IndexOutOfBounds
from fenwick_bit_tree.trees import (
    FenwickTree,
    FixedSizeTree,
    GrowingTree,
    available_trees,
    create_tree,
    create_tree_from_config,
)
from fenwick_bit_tree.values import (
    Additive,
    ArrayAdditive,
    Mergeable,
    MergeableOps,
    ValueOps,
    make_value_ops,
)

__all__ = [
    "Additive",
    "ArrayAdditive",
    "FenwickTree",
    "FenwickTreeError",
    "FixedSizeTree",
    "GrowingTree",
    "IndexOutOfBounds",
    "Mergeable",
    "MergeableOps",
    "ValueOps",
    "available_trees",
    "create_tree",
    "create_tree_from_config",
    "make_value_ops",
]
