"""Internal/external index duality and least-significant-bit traversal.

Callers address a tree with 0-based *external* indices (plain ``int``).
The backing store is addressed with 1-based :class:`Internal` positions,
where position 0 is an unused sentinel.  Keeping the two numbering spaces
in separate types confines the off-by-one arithmetic of a binary indexed
tree to :func:`to_internal` and :func:`to_external`.

Slot ``i`` of the store aggregates the half-open range
``(i - lsb(i), i]``.  Walking :func:`descending` from ``i`` visits the slots
whose ranges tile ``(0, i]``; walking :func:`ascending` visits every slot
whose range contains ``i``.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Iterator, Union

from fenwick_bit_tree.errors import IndexOutOfBounds


@dataclass(frozen=True, order=True)
class Internal:
    """1-based position into a tree's backing store."""

    position: int

    def __post_init__(self) -> None:
        position = _as_index(self.position)
        if position < 0:
            raise IndexOutOfBounds(position)
        object.__setattr__(self, "position", position)


Index = Union[int, Internal]


def _as_index(value: object) -> int:
    """Coerce an int-like to ``int``; bools are not indices."""
    if isinstance(value, bool):
        raise TypeError(f"Index must be an integer, got {value!r}")
    return operator.index(value)


def to_internal(index: Index) -> Internal:
    """Convert an external index to its internal position (identity on Internal)."""
    if isinstance(index, Internal):
        return index
    external = _as_index(index)
    if external < 0:
        raise IndexOutOfBounds(external)
    return Internal(external + 1)


def to_external(index: Internal) -> int:
    """Convert an internal position back to the 0-based index callers use.

    The sentinel position 0 has no external counterpart.
    """
    if index.position == 0:
        raise IndexOutOfBounds(index.position)
    return index.position - 1


def lsb(value: int) -> int:
    """Lowest set bit of *value* (two's-complement trick)."""
    return value & -value


def is_power_of_two(index: Internal) -> bool:
    position = index.position
    return position > 0 and position & (position - 1) == 0


def descending(index: Index) -> Iterator[Internal]:
    """Yield ``i, i - lsb(i), ...`` while positive.

    Summing the visited slots gives the prefix aggregate through ``i``.
    """
    position = to_internal(index).position
    while position > 0:
        yield Internal(position)
        position -= lsb(position)


def ascending(index: Index, bound: int) -> Iterator[Internal]:
    """Yield ``i, i + lsb(i), ...`` while ``<= bound``.

    These are the slots a point update at ``i`` has to touch.
    """
    position = to_internal(index).position
    # lsb(0) == 0 would never advance
    if position == 0:
        return
    while position <= bound:
        yield Internal(position)
        position += lsb(position)


def witness_boundary(index: Internal) -> Internal:
    """Exclusive lower end of the range aggregated by slot *index*."""
    position = index.position
    return Internal(position - lsb(position))


def aggregate_from(highest: Internal) -> Internal:
    """Boundary describing what *highest* summarised before a resize.

    A power-of-two position covered the whole old tree, so the boundary is
    the sentinel.  Otherwise it is the node after ``highest + 1`` in the
    descending chain of ``highest + 1``.
    """
    if is_power_of_two(highest):
        return Internal(0)
    return witness_boundary(Internal(highest.position + 1))
