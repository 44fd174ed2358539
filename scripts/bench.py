#!/usr/bin/env python3
"""Benchmark entry point for Fenwick tree updates and reads."""

from __future__ import annotations

import argparse

from fenwick_bit_tree.benchmarking.runner import run_benchmark
from fenwick_bit_tree.utils.config import CONFIGS_DIR, load_config
from fenwick_bit_tree.utils.logging import ExperimentLogger


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Time point updates and prefix queries on a Fenwick tree",
        epilog="e.g. bench.py fixed --sizes 1000 1000000 --no-mlflow",
    )
    parser.add_argument(
        "tree",
        nargs="?",
        help="tree preset under <configs>/trees/ (fixed, growing) or a YAML path; "
        "omit to use the defaults",
    )
    parser.add_argument("--sizes", type=int, nargs="+", help="key-space sizes to time")
    parser.add_argument("--operations", type=int, help="updates and reads per size")
    parser.add_argument("--no-mlflow", action="store_true", help="skip MLflow tracking")
    parser.add_argument("--configs", default=str(CONFIGS_DIR), help="config directory")
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="overrides",
        metavar="KEY=VALUE",
        help="any other config value, e.g. --set tree.value.type=array",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    overrides = list(args.overrides)
    if args.sizes:
        overrides.append(f"bench.sizes={args.sizes}")
    if args.operations is not None:
        overrides.append(f"bench.operations={args.operations}")
    if args.no_mlflow:
        overrides.append("mlflow.enabled=false")

    config = load_config(tree=args.tree, overrides=overrides, configs_dir=args.configs)
    print(f"Tree: {config['tree']['type']} (capacity {config['tree'].get('capacity', 0)})")

    mlflow_cfg = config.get("mlflow", {})
    if mlflow_cfg.get("enabled", False):
        with ExperimentLogger(
            experiment_name=mlflow_cfg["experiment_name"],
            tracking_uri=mlflow_cfg["tracking_uri"],
        ) as logger:
            results = run_benchmark(config, logger=logger)
    else:
        results = run_benchmark(config)

    for key, ns in results.items():
        print(f"{key}: {ns:,.0f} ns/op")


if __name__ == "__main__":
    main()
