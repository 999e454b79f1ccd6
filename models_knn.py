"""
k-Nearest Neighbors for Wine Quality (Binary Classification).
Compare meaningfully different k (small/medium/large) together with distance
metric (L2 vs L1) and neighbour weighting (uniform vs distance).
Scale features (required — preprocessing uses StandardScaler).
Model-complexity curve over k with weights/metric at their best values.
"""

import os

from sklearn.neighbors import KNeighborsClassifier

from config import CV_FOLDS
from tuning import tune_and_evaluate, model_complexity_curve, plot_model_complexity, report_results

NAME = "k-Nearest Neighbors"
KEY = "knn"

K_VALUES = [3, 5, 10, 15, 20, 30, 50]
WEIGHTS_OPTIONS = ["uniform", "distance"]
METRIC_OPTIONS = ["euclidean", "manhattan"]  # L2, L1
PARAM_GRID = {
    "n_neighbors": K_VALUES,
    "weights": WEIGHTS_OPTIONS,
    "metric": METRIC_OPTIONS,
}
K_VALUES_MC = [1, 3, 5, 10, 15, 20, 25, 30, 40, 50, 70, 100]


def build_knn(**params):
    return KNeighborsClassifier(**params)


def run_knn(X_train, y_train, X_test, y_test, cv=CV_FOLDS, param_grid=None, complexity=True,
            output_dir=None, learning_curves=False):
    """
    Tune (k, weights, metric) via CV on training only; refit and evaluate on test.
    """
    results = tune_and_evaluate(
        NAME, KEY, build_knn(), param_grid or PARAM_GRID, X_train, y_train, X_test, y_test,
        cv=cv, output_dir=output_dir, learning_curves=learning_curves,
    )

    if complexity:
        # k cannot exceed the number of samples in a CV training fold
        n_fit = len(y_train) * (cv - 1) // cv
        k_values = [k for k in K_VALUES_MC if k <= n_fit]
        fixed = {k: v for k, v in results["best_params"].items() if k != "n_neighbors"}
        results["model_complexity"] = model_complexity_curve(
            lambda k: build_knn(n_neighbors=k, **fixed), "n_neighbors", k_values, X_train, y_train, cv=cv
        )
        plot_model_complexity(
            results["model_complexity"], NAME, os.path.join(results["output_dir"], f"{KEY}_model_complexity.png")
        )

    return report_results(results)
