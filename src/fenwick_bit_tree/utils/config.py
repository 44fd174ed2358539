"""Benchmark configuration: YAML layers, tree presets and validation.

A run is described by ``configs/default.yaml``, optionally layered with a
tree preset from ``configs/trees/<name>.yaml`` and ``KEY=VALUE``
overrides.  The merged result is validated before anything is built, so a
typo in a preset surfaces as one readable error instead of a ``KeyError``
halfway through a benchmark.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable

import yaml

from fenwick_bit_tree.trees import available_trees
from fenwick_bit_tree.trees.growing import GROWTH_POLICIES
from fenwick_bit_tree.values import make_value_ops

CONFIGS_DIR = Path("configs")


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML mapping; an empty file gives ``{}``."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def merge_layers(*layers: dict) -> dict:
    """Merge config layers left to right; nested sections merge key by key."""
    merged: dict = {}
    for layer in layers:
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = merge_layers(current, value)
            else:
                merged[key] = value
    return merged


def parse_override(text: str) -> tuple[list[str], Any]:
    """Split ``tree.capacity=64`` into ``(["tree", "capacity"], 64)``.

    The value is read as a YAML scalar or flow collection, so
    ``bench.sizes=[8, 16]`` gives a list.
    """
    key_path, sep, raw_value = text.partition("=")
    if not sep or not key_path:
        raise ValueError(f"Override must be key=value, got: {text!r}")
    return key_path.split("."), yaml.safe_load(raw_value)


def set_path(config: dict, keys: list[str], value: Any) -> None:
    """Assign *value* at the nested key path, creating sections as needed."""
    *parents, leaf = keys
    node = config
    for key in parents:
        node = node.setdefault(key, {})
    node[leaf] = value


def resolve_tree_preset(tree: str | Path, configs_dir: str | Path = CONFIGS_DIR) -> Path:
    """Turn a preset name (``fixed``) or a YAML path into an existing file."""
    path = Path(tree)
    if path.suffix not in (".yaml", ".yml"):
        path = Path(configs_dir) / "trees" / f"{tree}.yaml"
    if not path.is_file():
        raise ValueError(f"No tree preset '{tree}' (looked for {path})")
    return path


def _is_count(value: Any, minimum: int) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


def validate_config(config: dict) -> dict:
    """Check the ``tree`` and ``bench`` sections; returns *config* unchanged.

    Raises:
        ValueError: listing every problem found.
    """
    problems: list[str] = []

    tree = config.get("tree")
    if not isinstance(tree, dict):
        problems.append("missing 'tree' section")
    else:
        if tree.get("type") not in available_trees():
            problems.append(
                f"tree.type must be one of {available_trees()}, got {tree.get('type')!r}"
            )
        if not _is_count(tree.get("capacity", 0), 0):
            problems.append(f"tree.capacity must be a non-negative integer, got {tree['capacity']!r}")
        if tree.get("growth", "exact") not in GROWTH_POLICIES:
            problems.append(f"tree.growth must be one of {list(GROWTH_POLICIES)}, got {tree['growth']!r}")
        try:
            make_value_ops(tree.get("value"))
        except (TypeError, ValueError) as exc:
            problems.append(f"tree.value: {exc}")

    bench = config.get("bench")
    if not isinstance(bench, dict):
        problems.append("missing 'bench' section")
    else:
        sizes = bench.get("sizes")
        if not isinstance(sizes, list) or not sizes or not all(_is_count(s, 1) for s in sizes):
            problems.append(f"bench.sizes must be a non-empty list of positive integers, got {sizes!r}")
        if not _is_count(bench.get("operations"), 1):
            problems.append(f"bench.operations must be a positive integer, got {bench.get('operations')!r}")
        if not _is_count(bench.get("value_scale", 1), 1):
            problems.append(f"bench.value_scale must be a positive integer, got {bench['value_scale']!r}")

    if problems:
        raise ValueError("Invalid config: " + "; ".join(problems))
    return config


def load_config(
    tree: str | Path | None = None,
    overrides: Iterable[str] = (),
    configs_dir: str | Path = CONFIGS_DIR,
) -> dict[str, Any]:
    """Build a validated config: default → tree preset → overrides."""
    configs_dir = Path(configs_dir)
    layers = [load_yaml(configs_dir / "default.yaml")]
    if tree is not None:
        layers.append(load_yaml(resolve_tree_preset(tree, configs_dir)))
    config = merge_layers(*layers)
    for text in overrides:
        set_path(config, *parse_override(text))
    return validate_config(config)
