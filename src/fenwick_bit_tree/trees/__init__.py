"""Tree registry: tree kinds by name, and construction from config."""

from __future__ import annotations

from typing import Any, Callable

from fenwick_bit_tree.trees.base import FenwickTree
from fenwick_bit_tree.values import ValueOps, make_value_ops

TREE_TYPES: dict[str, type[FenwickTree]] = {}


def register(kind: str) -> Callable[[type[FenwickTree]], type[FenwickTree]]:
    """Class decorator recording a tree implementation under *kind*.

    The kind is also stored on the class as ``kind`` so benchmark results
    can be labelled from an instance.
    """

    def decorate(cls: type[FenwickTree]) -> type[FenwickTree]:
        existing = TREE_TYPES.setdefault(kind, cls)
        if existing is not cls:
            raise ValueError(f"Tree kind '{kind}' is already taken by {existing.__name__}")
        cls.kind = kind
        return cls

    return decorate


def available_trees() -> list[str]:
    return sorted(TREE_TYPES)


def create_tree(
    kind: str,
    capacity: int = 0,
    ops: ValueOps | None = None,
    **options: Any,
) -> FenwickTree:
    """Build a tree of the given kind; *options* go to that kind only
    (e.g. ``growth`` for growing trees)."""
    try:
        cls = TREE_TYPES[kind]
    except KeyError:
        raise ValueError(
            f"Unknown tree kind '{kind}', expected one of {available_trees()}"
        ) from None
    return cls(capacity, ops, **options)


def create_tree_from_config(config: dict[str, Any], capacity: int | None = None) -> FenwickTree:
    """Build a tree from the ``tree`` section of a config dict.

    *capacity*, when given, replaces the configured capacity.
    """
    tree_cfg = config["tree"]
    kind = tree_cfg["type"]
    options = {}
    if kind == "growing" and "growth" in tree_cfg:
        options["growth"] = tree_cfg["growth"]
    return create_tree(
        kind,
        capacity=tree_cfg.get("capacity", 0) if capacity is None else capacity,
        ops=make_value_ops(tree_cfg.get("value")),
        **options,
    )


# Importing the implementations registers them.
from fenwick_bit_tree.trees.fixed import FixedSizeTree  # noqa: E402
from fenwick_bit_tree.trees.growing import GrowingTree  # noqa: E402

__all__ = [
    "FenwickTree",
    "FixedSizeTree",
    "GrowingTree",
    "available_trees",
    "create_tree",
    "create_tree_from_config",
    "TREE_TYPES",
    "register",
]
