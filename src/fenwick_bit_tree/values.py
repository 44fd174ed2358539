"""Aggregatable value kinds.

A tree never combines values itself; it delegates to a :class:`ValueOps`
object that knows the identity element, how to merge one value into an
accumulator and how to take the difference of two aggregates.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Protocol, TypeVar

import numpy as np

V = TypeVar("V")
M = TypeVar("M", bound="Mergeable")


class ValueOps(ABC, Generic[V]):
    """Capability set ``{identity, merge, inverse}`` for tree payloads."""

    @abstractmethod
    def identity(self) -> V:
        """Return a fresh identity value."""

    @abstractmethod
    def merge(self, acc: V, other: V) -> V:
        """Combine *other* into *acc* and return the result.

        Mutable value kinds may update *acc* in place; *other* is never
        modified.
        """

    @abstractmethod
    def inverse(self, total: V, part: V) -> V:
        """Return ``total - part`` without modifying either argument."""


class Additive(ValueOps[Any]):
    """Plain numbers combined with ``+`` and ``-``."""

    def __init__(self, zero: Any = 0) -> None:
        self.zero = zero

    def identity(self) -> Any:
        return self.zero

    def merge(self, acc: Any, other: Any) -> Any:
        return acc + other

    def inverse(self, total: Any, part: Any) -> Any:
        return total - part

    def __repr__(self) -> str:
        return f"Additive(zero={self.zero!r})"


class ArrayAdditive(ValueOps[np.ndarray]):
    """Fixed-shape NumPy arrays, summed element-wise in place.

    Useful for aggregating several channels per index in one tree.
    """

    def __init__(self, shape: int | tuple[int, ...], dtype: Any = np.float64) -> None:
        self.shape = (shape,) if isinstance(shape, int) else tuple(shape)
        self.dtype = np.dtype(dtype)

    def identity(self) -> np.ndarray:
        return np.zeros(self.shape, dtype=self.dtype)

    def merge(self, acc: np.ndarray, other: np.ndarray) -> np.ndarray:
        # same_kind casting: a float update into an integer store raises
        np.add(acc, other, out=acc)
        return acc

    def inverse(self, total: np.ndarray, part: np.ndarray) -> np.ndarray:
        return np.subtract(total, part, dtype=self.dtype)

    def __repr__(self) -> str:
        return f"ArrayAdditive(shape={self.shape}, dtype={self.dtype.name})"


class Mergeable(Protocol):
    """User value types that know how to combine themselves."""

    def merge(self, other: Any) -> None:
        """Combine *other* into ``self`` in place."""

    def inverse(self, other: Any) -> Any:
        """Return a new value equal to ``self - other``."""


class MergeableOps(ValueOps[M]):
    """Adapter exposing a :class:`Mergeable` type through :class:`ValueOps`.

    *factory* must return a new identity instance on every call.
    """

    def __init__(self, factory: Callable[[], M]) -> None:
        self.factory = factory

    def identity(self) -> M:
        return self.factory()

    def merge(self, acc: M, other: M) -> M:
        acc.merge(other)
        return acc

    def inverse(self, total: M, part: M) -> M:
        return total.inverse(part)


def make_value_ops(cfg: dict[str, Any] | None = None) -> ValueOps:
    """Build value ops from a config mapping such as ``{"type": "additive"}``."""
    cfg = dict(cfg or {})
    kind = cfg.pop("type", "additive")
    if kind == "additive":
        return Additive(**cfg)
    if kind == "array":
        if "shape" not in cfg:
            raise ValueError("Array values need a 'shape'")
        return ArrayAdditive(**cfg)
    raise ValueError(f"Unknown value type '{kind}'. Available: additive, array")
