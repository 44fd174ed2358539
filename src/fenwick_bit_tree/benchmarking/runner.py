"""Timing harness for tree updates and reads."""

from __future__ import annotations

import time
from typing import Any, Sequence

import numpy as np
from tqdm import tqdm

from fenwick_bit_tree.trees import create_tree_from_config
from fenwick_bit_tree.trees.base import FenwickTree
from fenwick_bit_tree.utils.config import validate_config
from fenwick_bit_tree.utils.logging import ExperimentLogger
from fenwick_bit_tree.utils.seeding import seed_everything
from fenwick_bit_tree.values import ArrayAdditive


def make_workload(
    size: int,
    n_ops: int,
    rng: np.random.Generator,
    scale: int = 100,
    value_shape: tuple[int, ...] = (),
) -> tuple[list[int], list[Any]]:
    """Draw *n_ops* random indices in ``[0, size)`` and values in ``[0, scale)``."""
    indices = rng.integers(0, size, size=n_ops).tolist()
    raw = rng.integers(0, scale, size=(n_ops, *value_shape))
    values = list(raw) if value_shape else raw.tolist()
    return indices, values


def time_updates(tree: FenwickTree, indices: Sequence[int], values: Sequence[Any]) -> float:
    """Apply every update and return mean nanoseconds per call."""
    start = time.perf_counter_ns()
    for idx, value in zip(indices, values):
        tree.update(idx, value)
    elapsed = time.perf_counter_ns() - start
    return elapsed / max(len(indices), 1)


def time_queries(tree: FenwickTree, indices: Sequence[int]) -> float:
    """Run every prefix query and return mean nanoseconds per call."""
    start = time.perf_counter_ns()
    for idx in indices:
        tree.query(idx)
    elapsed = time.perf_counter_ns() - start
    return elapsed / max(len(indices), 1)


def run_benchmark(
    config: dict,
    logger: ExperimentLogger | None = None,
    progress: bool = True,
) -> dict[str, float]:
    """Time updates then reads for every size in ``config["bench"]["sizes"]``.

    Fixed trees are built with capacity equal to the size; growing trees
    start from the configured capacity so the update timings include
    resizes.

    Returns:
        Dict keyed ``<tree>/update_ns/<size>`` and ``<tree>/query_ns/<size>``.
    """
    validate_config(config)
    bench_cfg = config["bench"]
    name = config["tree"]["type"]
    rng = seed_everything(config.get("seed", 0))

    if logger is not None:
        logger.log_params(config)

    results: dict[str, float] = {}
    for size in tqdm(bench_cfg["sizes"], desc=f"Benchmark [{name}]", disable=not progress):
        if name == "fixed":
            tree = create_tree_from_config(config, capacity=size)
        else:
            tree = create_tree_from_config(config)

        value_shape = tree.ops.shape if isinstance(tree.ops, ArrayAdditive) else ()
        indices, values = make_workload(
            size,
            bench_cfg["operations"],
            rng,
            scale=bench_cfg.get("value_scale", 100),
            value_shape=value_shape,
        )

        update_ns = time_updates(tree, indices, values)
        query_ns = time_queries(tree, rng.permutation(indices).tolist())

        results[f"{name}/update_ns/{size}"] = update_ns
        results[f"{name}/query_ns/{size}"] = query_ns
        if logger is not None:
            logger.log_metrics(
                {f"{name}/update_ns": update_ns, f"{name}/query_ns": query_ns},
                step=size,
            )

    return results
