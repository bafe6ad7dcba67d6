import builtins
from pathlib import Path

from cephalopod import tracking


def test_disabled_tracking_is_noop(tmp_path: Path):
    with tracking.maybe_mlflow_run(False, run_name="t") as on:
        assert on is False
        tracking.log_params({"a": 1})
        tracking.log_metrics({"m": 1.0})
        tracking.log_artifact(tmp_path / "missing.json")


def test_missing_mlflow_degrades(monkeypatch, caplog):
    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "mlflow":
            raise ImportError("no mlflow")
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    with tracking.maybe_mlflow_run(True, run_name="t") as on:
        assert on is False
        tracking.log_metrics({"m": 1.0})
    assert "mlflow is not installed" in caplog.text
