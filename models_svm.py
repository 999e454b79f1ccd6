"""
Support Vector Machines for Wine Quality (Binary Classification).
Evaluate 2 kernels (linear vs RBF); tune C and gamma (where relevant).
Scale features (required — preprocessing uses StandardScaler).
ROC uses the decision function (no Platt scaling needed for ranking).
Model-complexity curves: CV score vs C for each kernel.
"""

import os

import matplotlib.pyplot as plt
import numpy as np
from sklearn.svm import SVC

from config import RANDOM_SEED, CV_FOLDS
from tuning import tune_and_evaluate, model_complexity_curve, report_results
from utils import save_figure

NAME = "SVM"
KEY = "svm"

# Hyperparameter ranges
C_VALUES = [0.1, 1, 10, 100]
GAMMA_VALUES = ["scale", 0.01, 0.1]
PARAM_GRID = [
    {"kernel": ["linear"], "C": C_VALUES},
    {"kernel": ["rbf"], "C": C_VALUES, "gamma": GAMMA_VALUES},
]
C_VALUES_MC = [0.01, 0.1, 1, 10, 100, 1000]
MAX_ITER = 100000


def build_svm(**params):
    return SVC(random_state=RANDOM_SEED, max_iter=MAX_ITER, **params)


def run_svm(X_train, y_train, X_test, y_test, cv=CV_FOLDS, param_grid=None, complexity=True,
            output_dir=None, learning_curves=False):
    """
    Tune kernel, C and gamma via CV on training only; refit and evaluate on test.
    Model-complexity: linear and RBF curves vs C (RBF gamma at its best or 'scale').
    """
    results = tune_and_evaluate(
        NAME, KEY, build_svm(), param_grid or PARAM_GRID, X_train, y_train, X_test, y_test,
        cv=cv, output_dir=output_dir, learning_curves=learning_curves,
    )
    clf = results["best_model"]
    results["extras"]["n_support_vectors"] = int(np.sum(clf.n_support_))

    if complexity:
        best = results["best_params"]
        gamma = best.get("gamma", "scale")
        curves = {
            "linear": model_complexity_curve(
                lambda c: build_svm(kernel="linear", C=c), "C", C_VALUES_MC, X_train, y_train, cv=cv
            ),
            f"rbf (gamma={gamma})": model_complexity_curve(
                lambda c: build_svm(kernel="rbf", C=c, gamma=gamma), "C", C_VALUES_MC, X_train, y_train, cv=cv
            ),
        }
        results["kernel_curves"] = curves
        best_kernel = best.get("kernel", "rbf")
        results["model_complexity"] = curves["linear"] if best_kernel == "linear" else curves[f"rbf (gamma={gamma})"]
        _plot_kernel_curves(curves, os.path.join(results["output_dir"], f"{KEY}_model_complexity.png"))

    return report_results(results)


def _plot_kernel_curves(curves, path):
    """Two panels: Linear (C vs score) | RBF (C vs score)."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 4))
    for ax, (label, curve) in zip(axes, curves.items()):
        ax.plot(curve["values"], curve["train_score"], "o-", label=f"Train {curve['scoring']}")
        ax.plot(curve["values"], curve["cv_score"], "s-", label=f"Cross-Val {curve['scoring']}")
        ax.axvline(curve["best_value"], color="gray", ls="--", alpha=0.7, label=f"best C={curve['best_value']}")
        ax.set_xscale("log")
        ax.set_xlabel("C")
        ax.set_ylabel(curve["scoring"])
        ax.set_title(f"SVM — {label} kernel")
        ax.legend()
        ax.grid(True, alpha=0.3)
    plt.tight_layout()
    save_figure(fig, path)
