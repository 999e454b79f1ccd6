"""Tests for the seven tuned classifiers and the shared tuning helpers."""

import os

import numpy as np
import pytest

from config import MODEL_FEATURES
from compare import MODEL_RUNNERS
from models_dt import run_dt, MAX_DEPTHS_MC
from models_knn import run_knn
from models_logreg import run_logreg, build_logreg
from models_nn import width_complexity_curve
from models_svm import run_svm
from tuning import model_complexity_curve
from conftest import TINY_GRIDS


def _grid_size(grid):
    grids = grid if isinstance(grid, list) else [grid]
    return sum(int(np.prod([len(v) for v in g.values()])) for g in grids)


class TestModels:
    """Every model: grid search on train, one evaluation on test, results file."""

    @pytest.mark.parametrize("key", list(MODEL_RUNNERS))
    def test_run_model(self, key, split_data, output_dir):
        X_train, y_train, X_test, y_test = split_data
        grid = TINY_GRIDS[key]
        results = MODEL_RUNNERS[key](
            X_train, y_train, X_test, y_test, cv=3, param_grid=grid, complexity=False, output_dir=output_dir
        )

        assert results["key"] == key
        assert results["n_candidates"] == _grid_size(grid)
        for metric in ("accuracy", "f1", "roc_auc"):
            assert 0.0 <= results["test_metrics"][metric] <= 1.0, metric
            assert 0.0 <= results["cv"][metric]["mean"] <= 1.0, metric
        if isinstance(grid, dict):
            for name, value in results["best_params"].items():
                assert value in grid[name]

        assert np.asarray(results["confusion_matrix"]).sum() == len(y_test)
        assert len(results["y_score"]) == len(y_test)
        assert os.path.exists(results["results_path"])
        with open(results["results_path"], encoding="utf-8") as f:
            text = f.read()
        assert "--- Test metrics ---" in text
        assert "--- Confusion matrix (rows=true, cols=predicted) ---" in text
        assert os.path.exists(os.path.join(output_dir, f"{key}_confusion_matrix.png"))

    def test_logreg_reports_coefficients(self, split_data, output_dir):
        results = run_logreg(*split_data, cv=3, param_grid=TINY_GRIDS["logreg"], complexity=False,
                             output_dir=output_dir)
        assert list(results["extras"]["coefficients"]) == MODEL_FEATURES
        # alcohol drives quality in the fixture data
        assert results["extras"]["coefficients"]["alcohol"] > 0

    def test_dt_complexity_and_learning_curve(self, split_data, output_dir):
        results = run_dt(*split_data, cv=3, param_grid=TINY_GRIDS["dt"], complexity=True,
                         output_dir=output_dir, learning_curves=True)
        mc = results["model_complexity"]
        assert mc["values"] == MAX_DEPTHS_MC
        assert len(mc["cv_score"]) == len(mc["train_score"]) == len(MAX_DEPTHS_MC)
        assert mc["best_value"] in MAX_DEPTHS_MC
        assert results["extras"]["depth"] <= 4
        assert len(results["learning_curve"]["train_sizes"]) == 10
        assert os.path.exists(os.path.join(output_dir, "dt_model_complexity.png"))
        assert os.path.exists(os.path.join(output_dir, "dt_learning_curve.png"))

    def test_knn_complexity_skips_k_larger_than_fold(self, split_data, output_dir):
        X_train = split_data[0]
        results = run_knn(*split_data, cv=3, param_grid=TINY_GRIDS["knn"], output_dir=output_dir)
        n_fit = len(X_train) * 2 // 3
        assert max(results["model_complexity"]["values"]) <= n_fit

    def test_svm_kernel_curves(self, split_data, output_dir):
        results = run_svm(*split_data, cv=3, param_grid=TINY_GRIDS["svm"], output_dir=output_dir)
        assert len(results["kernel_curves"]) == 2
        assert "linear" in results["kernel_curves"]
        assert results["extras"]["n_support_vectors"] > 0

    def test_nn_width_curve(self, split_data):
        X_train, y_train, _, _ = split_data
        curve = width_complexity_curve(X_train, y_train, fixed={"max_iter": 50}, widths=[2, 8], cv=3)
        assert curve["values"] == [2, 8]
        assert curve["best_value"] in (2, 8)
        assert all(0.0 <= s <= 1.0 for s in curve["cv_score"])

    def test_model_complexity_curve(self, split_data):
        X_train, y_train, _, _ = split_data
        values = [0.01, 1.0, 100.0]
        curve = model_complexity_curve(lambda c: build_logreg(C=c), "C", values, X_train, y_train, cv=3)
        assert curve["param"] == "C"
        assert curve["best_cv_score"] == max(curve["cv_score"])
        assert curve["best_value"] == values[int(np.argmax(curve["cv_score"]))]
