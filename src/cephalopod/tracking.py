"""
Experiment tracking helpers (optional MLflow backend).

MLflow is imported only when tracking is requested, so it stays an optional
extra (``pip install .[tracking]``). Without it every helper is a no-op.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

_active = False


def _mlflow() -> Any:
    try:
        import mlflow  # type: ignore
    except ImportError:
        logging.warning("mlflow is not installed; tracking disabled (pip install .[tracking])")
        return None
    return mlflow


@contextmanager
def maybe_mlflow_run(enabled: bool, run_name: str, log_dir: Optional[Path] = None) -> Iterator[bool]:
    """Open an MLflow run when enabled and available; yields whether tracking is on."""
    global _active
    mlflow = _mlflow() if enabled else None
    if mlflow is None:
        yield False
        return
    if log_dir is not None:
        mlflow.set_tracking_uri((log_dir / "mlruns").resolve().as_uri())
    with mlflow.start_run(run_name=run_name):
        _active = True
        try:
            yield True
        finally:
            _active = False


def log_params(params: Dict[str, object]) -> None:
    if _active:
        import mlflow  # type: ignore

        mlflow.log_params(params)


def log_metrics(metrics: Dict[str, float]) -> None:
    if _active:
        import mlflow  # type: ignore

        mlflow.log_metrics(metrics)


def log_artifact(path: Path, artifact_path: Optional[str] = None) -> None:
    if _active:
        import mlflow  # type: ignore

        mlflow.log_artifact(str(path), artifact_path=artifact_path)
