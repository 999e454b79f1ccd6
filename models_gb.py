"""
Gradient Boosting for Wine Quality (Binary Classification).
Additive ensemble of shallow regression trees fit to the log-loss gradient.
Tune number of stages, shrinkage, tree depth and row subsampling.
Model-complexity curve over n_estimators (boosting stages).
"""

import os

from sklearn.ensemble import GradientBoostingClassifier

from config import RANDOM_SEED, CV_FOLDS, MODEL_FEATURES
from tuning import tune_and_evaluate, model_complexity_curve, plot_model_complexity, report_results

NAME = "Gradient Boosting"
KEY = "gb"

PARAM_GRID = {
    "n_estimators": [100, 300],
    "learning_rate": [0.05, 0.1],
    "max_depth": [3, 5],
    "subsample": [0.8, 1.0],
}
N_ESTIMATORS_MC = [25, 50, 100, 200, 300, 500]


def build_gb(**params):
    return GradientBoostingClassifier(random_state=RANDOM_SEED, **params)


def run_gb(X_train, y_train, X_test, y_test, cv=CV_FOLDS, param_grid=None, complexity=True,
           output_dir=None, learning_curves=False):
    """
    Tune gradient boosting via CV on training only; refit and evaluate on test.
    Model-complexity curve: CV score vs n_estimators (other params at best).
    """
    results = tune_and_evaluate(
        NAME, KEY, build_gb(), param_grid or PARAM_GRID, X_train, y_train, X_test, y_test,
        cv=cv, output_dir=output_dir, learning_curves=learning_curves,
    )
    clf = results["best_model"]
    results["extras"]["n_estimators_fitted"] = int(clf.n_estimators_)
    results["extras"]["feature_importances"] = dict(
        zip(MODEL_FEATURES, clf.feature_importances_.astype(float).tolist())
    )

    if complexity:
        fixed = {k: v for k, v in results["best_params"].items() if k != "n_estimators"}
        results["model_complexity"] = model_complexity_curve(
            lambda n: build_gb(n_estimators=n, **fixed), "n_estimators", N_ESTIMATORS_MC, X_train, y_train, cv=cv
        )
        plot_model_complexity(
            results["model_complexity"], NAME, os.path.join(results["output_dir"], f"{KEY}_model_complexity.png")
        )

    return report_results(results)
