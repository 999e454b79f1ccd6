"""
Random Forest for Wine Quality (Binary Classification).
Bagged decision trees with feature subsampling; tune number of trees,
features per split, depth and leaf size.
"""

import os

from sklearn.ensemble import RandomForestClassifier

from config import RANDOM_SEED, CV_FOLDS, MODEL_FEATURES
from tuning import tune_and_evaluate, model_complexity_curve, plot_model_complexity, report_results

NAME = "Random Forest"
KEY = "rf"

PARAM_GRID = {
    "n_estimators": [200, 500],
    "max_features": ["sqrt", 0.5],
    "max_depth": [None, 10, 20],
    "min_samples_leaf": [1, 3],
}
MAX_DEPTHS_MC = [2, 4, 6, 8, 10, 15, 20, None]


def build_rf(**params):
    return RandomForestClassifier(random_state=RANDOM_SEED, **params)


def run_rf(X_train, y_train, X_test, y_test, cv=CV_FOLDS, param_grid=None, complexity=True,
           output_dir=None, learning_curves=False):
    """
    Tune RF via CV on training only; refit and evaluate on test.
    Model-complexity curve: CV score vs max_depth of the member trees.
    """
    results = tune_and_evaluate(
        NAME, KEY, build_rf(), param_grid or PARAM_GRID, X_train, y_train, X_test, y_test,
        cv=cv, output_dir=output_dir, learning_curves=learning_curves,
    )
    clf = results["best_model"]
    results["extras"]["feature_importances"] = dict(
        zip(MODEL_FEATURES, clf.feature_importances_.astype(float).tolist())
    )

    if complexity:
        fixed = {k: v for k, v in results["best_params"].items() if k != "max_depth"}
        results["model_complexity"] = model_complexity_curve(
            lambda d: build_rf(max_depth=d, **fixed), "max_depth", MAX_DEPTHS_MC, X_train, y_train, cv=cv
        )
        plot_model_complexity(
            results["model_complexity"], NAME, os.path.join(results["output_dir"], f"{KEY}_model_complexity.png")
        )

    return report_results(results)
