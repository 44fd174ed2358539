"""Exceptions raised by the Fenwick tree library."""

from __future__ import annotations


class FenwickTreeError(Exception):
    """Base class for all exceptions from this library."""


class IndexOutOfBounds(FenwickTreeError, IndexError):
    """Raised when an index falls outside the range a tree can address."""

    def __init__(self, index: int) -> None:
        super().__init__(f"Index out of bounds: {index}")
        self.index = index

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, IndexOutOfBounds):
            return NotImplemented
        return self.index == other.index

    def __hash__(self) -> int:
        return hash((type(self), self.index))
