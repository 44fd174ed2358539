"""Aggregate conservation when a tree's backing store grows.

Extending the store appends identity slots.  Some of the new slots sit on
the ascending chain of the old highest position ``H``: their ranges reach
back into positions that already hold data, so they must be seeded with
the part of that data they are responsible for.  Slots below ``H`` are
never touched, so every query that was valid before the resize still
returns the same value afterwards.
"""

from __future__ import annotations

from typing import Any, Callable

from fenwick_bit_tree.indexing import Internal, ascending, witness_boundary
from fenwick_bit_tree.values import ValueOps

PrefixReader = Callable[[Internal], Any]


def conserve_aggregates(
    old_size: int,
    new_size: int,
    prefix: PrefixReader,
    ops: ValueOps,
) -> list[tuple[Internal, Any]]:
    """Compute the seed for every new slot covering pre-resize positions.

    *old_size* and *new_size* are store lengths (capacity + 1) before and
    after growth.  *prefix* reads the prefix aggregate through an internal
    position of the already-grown store; it is only ever called with
    positions ``<= old_size - 1``.

    Slot ``j`` aggregates ``(witness_boundary(j), j]``, so its seed is
    ``prefix(H) - prefix(witness_boundary(j))``.  For the first slot after
    ``H`` this boundary coincides with :func:`~fenwick_bit_tree.indexing.aggregate_from`
    when ``H`` is odd or a power of two.

    Returns ``(slot, seed)`` pairs; nothing is written here.
    """
    if old_size <= 1:
        return []

    highest = Internal(old_size - 1)
    total = prefix(highest)

    seeds = []
    chain = ascending(highest, new_size - 1)
    next(chain)  # highest itself already holds its aggregate
    for node in chain:
        boundary = witness_boundary(node)
        seeds.append((node, ops.inverse(total, prefix(boundary))))
    return seeds
