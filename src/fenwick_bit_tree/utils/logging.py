"""MLflow tracking for benchmark runs."""

from __future__ import annotations

from typing import Any

import mlflow


class ExperimentLogger:
    """Records benchmark parameters and timings as an MLflow run.

    Usable as a context manager so the run is closed even when a
    benchmark raises.
    """

    # MLflow rejects larger parameter batches
    PARAM_BATCH = 100

    def __init__(self, experiment_name: str, tracking_uri: str = "mlruns") -> None:
        mlflow.set_tracking_uri(tracking_uri)
        mlflow.set_experiment(experiment_name)
        self.run = mlflow.start_run()

    def log_params(self, params: dict[str, Any], prefix: str = "") -> None:
        """Log a (possibly nested) dict of parameters."""
        items = list(flatten(params, prefix).items())
        for i in range(0, len(items), self.PARAM_BATCH):
            mlflow.log_params(dict(items[i : i + self.PARAM_BATCH]))

    def log_metrics(self, metrics: dict[str, float], step: int | None = None) -> None:
        mlflow.log_metrics(metrics, step=step)

    def end(self) -> None:
        mlflow.end_run()

    def __enter__(self) -> ExperimentLogger:
        return self

    def __exit__(self, *exc: object) -> None:
        self.end()


def flatten(d: dict, prefix: str = "") -> dict[str, str]:
    """Flatten a nested dict into dot-separated keys with string values."""
    items: dict[str, str] = {}
    for k, v in d.items():
        key = f"{prefix}.{k}" if prefix else str(k)
        if isinstance(v, dict):
            items.update(flatten(v, key))
        else:
            items[key] = str(v)
    return items
