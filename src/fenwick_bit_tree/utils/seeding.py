"""Reproducible random state for benchmarks and tests."""

from __future__ import annotations

import random

import numpy as np


def seed_everything(seed: int) -> np.random.Generator:
    """Seed Python's and NumPy's global RNGs and return a fresh Generator."""
    random.seed(seed)
    np.random.seed(seed)
    return np.random.default_rng(seed)
