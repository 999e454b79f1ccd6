"""Tests for the comparison table, ROC overlay and baselines."""

import math
import os

import numpy as np
import pandas as pd
import pytest

from baseline import run_baselines
from compare import run_comparison, build_comparison_table
from conftest import TINY_GRIDS


def _fake_results(name, roc_auc):
    metrics = {"accuracy": 0.7, "f1": 0.6, "roc_auc": roc_auc, "precision": 0.6, "recall": 0.6}
    cv = {m: {"mean": 0.5, "std": 0.0} for m in ("accuracy", "f1", "roc_auc")}
    return {"name": name, "test_metrics": metrics, "cv": cv, "runtime": {"fit_sec": 0.1}, "best_params": {}}


class TestCompare:
    """Test suite for model comparison."""

    def test_run_comparison(self, split_data, output_dir):
        table, results = run_comparison(
            *split_data, models=["logreg", "knn"], cv=3, param_grids=TINY_GRIDS,
            complexity=False, output_dir=output_dir,
        )
        assert {"Logistic Regression", "k-Nearest Neighbors", "Baseline (most_frequent)"} <= set(table.index)
        assert set(results) == {"logreg", "knn", "dummy_most_frequent", "dummy_stratified"}
        aucs = table["roc_auc"].tolist()
        assert aucs == sorted(aucs, reverse=True)
        for filename in ("model_comparison.csv", "MODEL_COMPARISON_results.txt", "roc_overlay.png",
                         "metric_comparison.png", "baseline_results.txt"):
            assert os.path.exists(os.path.join(output_dir, filename)), filename

        saved = pd.read_csv(os.path.join(output_dir, "model_comparison.csv"), index_col="model")
        assert list(saved.index) == list(table.index)

    def test_unknown_model_raises(self, split_data, output_dir):
        with pytest.raises(ValueError, match="Unknown model"):
            run_comparison(*split_data, models=["xgb"], output_dir=output_dir)

    def test_table_puts_nan_auc_last(self):
        table = build_comparison_table({
            "a": _fake_results("A", float("nan")),
            "b": _fake_results("B", 0.9),
            "c": _fake_results("C", 0.7),
        })
        assert list(table.index) == ["B", "C", "A"]
        assert math.isnan(table.loc["A", "roc_auc"])

    def test_baselines(self, split_data, output_dir):
        X_train, y_train, X_test, y_test = split_data
        results = run_baselines(X_train, y_train, X_test, y_test, cv=3, output_dir=output_dir)
        most_frequent = results["dummy_most_frequent"]
        assert most_frequent["test_metrics"]["roc_auc"] == 0.5
        majority = int(np.bincount(y_train).argmax())
        assert (most_frequent["y_pred"] == majority).all()
        assert os.path.exists(os.path.join(output_dir, "baseline_results.txt"))
