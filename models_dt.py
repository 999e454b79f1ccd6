"""
Decision Tree for Wine Quality (Binary Classification).
Split criterion tuned (Gini vs entropy) together with pruning/regularization:
ccp_alpha, max_depth, min_samples_leaf.
Model-complexity curve over max_depth; depth and leaf count of the refit tree.
"""

import os

from sklearn.tree import DecisionTreeClassifier

from config import RANDOM_SEED, CV_FOLDS, MODEL_FEATURES
from tuning import tune_and_evaluate, model_complexity_curve, plot_model_complexity, report_results

NAME = "Decision Tree"
KEY = "dt"

# Hyperparameter grid for tuning (criterion, ccp_alpha, max_depth, min_samples_leaf)
PARAM_GRID = {
    "criterion": ["gini", "entropy"],
    "max_depth": [3, 5, 8, 10, 15, None],
    "min_samples_leaf": [1, 5, 10, 20],
    "ccp_alpha": [0.0, 1e-4, 1e-3, 1e-2],
}
# Range for model-complexity curve (None = grow until pure leaves)
MAX_DEPTHS_MC = [1, 2, 3, 4, 5, 6, 8, 10, 12, 15, 20, None]


def build_dt(**params):
    return DecisionTreeClassifier(random_state=RANDOM_SEED, **params)


def run_dt(X_train, y_train, X_test, y_test, cv=CV_FOLDS, param_grid=None, complexity=True,
           output_dir=None, learning_curves=False):
    """
    Train and tune DT via CV on training only; refit and evaluate on test.
    Model-complexity curve: CV score vs max_depth (other params at grid-search best).
    """
    results = tune_and_evaluate(
        NAME, KEY, build_dt(), param_grid or PARAM_GRID, X_train, y_train, X_test, y_test,
        cv=cv, output_dir=output_dir, learning_curves=learning_curves,
    )
    clf = results["best_model"]
    results["extras"]["depth"] = int(clf.get_depth())
    results["extras"]["n_leaves"] = int(clf.get_n_leaves())
    results["extras"]["feature_importances"] = dict(
        zip(MODEL_FEATURES, clf.feature_importances_.astype(float).tolist())
    )

    if complexity:
        fixed = {k: v for k, v in results["best_params"].items() if k != "max_depth"}
        results["model_complexity"] = model_complexity_curve(
            lambda d: build_dt(max_depth=d, **fixed), "max_depth", MAX_DEPTHS_MC, X_train, y_train, cv=cv
        )
        plot_model_complexity(
            results["model_complexity"], NAME, os.path.join(results["output_dir"], f"{KEY}_model_complexity.png")
        )

    return report_results(results)
