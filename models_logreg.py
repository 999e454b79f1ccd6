"""
Logistic Regression for Wine Quality (Binary Classification).
L2-regularized GLM with logit link; tune inverse regularization strength C.
Scale features (required for the penalty to treat features equally).
Reports coefficients of the refit model (standardized features, so comparable).
"""

import os

import numpy as np
from sklearn.linear_model import LogisticRegression

from config import RANDOM_SEED, CV_FOLDS, MODEL_FEATURES
from tuning import tune_and_evaluate, model_complexity_curve, plot_model_complexity, report_results

NAME = "Logistic Regression"
KEY = "logreg"

C_VALUES = np.logspace(-3, 2, 6).tolist()
PARAM_GRID = {
    "C": C_VALUES,
    "class_weight": [None, "balanced"],
}
C_VALUES_MC = np.logspace(-4, 3, 15).tolist()


def build_logreg(**params):
    """LogisticRegression with lbfgs (L2 penalty) and enough iterations to converge."""
    kw = {"solver": "lbfgs", "max_iter": 2000, "random_state": RANDOM_SEED}
    kw.update(params)
    return LogisticRegression(**kw)


def run_logreg(X_train, y_train, X_test, y_test, cv=CV_FOLDS, param_grid=None, complexity=True,
               output_dir=None, learning_curves=False):
    """
    Tune C (and class weighting) via CV on training only, refit, evaluate on test.
    Model-complexity curve: CV score vs C with class_weight at its best value.
    """
    results = tune_and_evaluate(
        NAME, KEY, build_logreg(), param_grid or PARAM_GRID, X_train, y_train, X_test, y_test,
        cv=cv, output_dir=output_dir, learning_curves=learning_curves,
    )
    clf = results["best_model"]
    results["extras"]["intercept"] = round(float(clf.intercept_[0]), 4)
    results["extras"]["coefficients"] = dict(zip(MODEL_FEATURES, clf.coef_[0].astype(float).tolist()))

    if complexity:
        fixed = {k: v for k, v in results["best_params"].items() if k != "C"}
        results["model_complexity"] = model_complexity_curve(
            lambda c: build_logreg(C=c, **fixed), "C", C_VALUES_MC, X_train, y_train, cv=cv
        )
        plot_model_complexity(
            results["model_complexity"], NAME,
            os.path.join(results["output_dir"], f"{KEY}_model_complexity.png"), log_x=True,
        )

    return report_results(results)
