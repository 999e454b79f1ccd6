"""
Shared utilities: set seeds, hardware note, fit/predict timing helpers.
"""

import platform
import random
import time

import matplotlib.pyplot as plt
import numpy as np

from config import RANDOM_SEED, SHOW_PLOTS
from evaluation import score_binary


def set_seed(seed=None):
    """Fix random seeds for reproducibility (NumPy and random)."""
    seed = seed if seed is not None else RANDOM_SEED
    np.random.seed(seed)
    random.seed(seed)


def get_hardware_note():
    """Return a brief hardware description for reproducibility."""
    cpu = platform.processor() or platform.machine() or "unknown"
    return f"{platform.system()} {platform.release()}, CPU: {cpu}"


def positive_scores(clf, X):
    """Positive-class score for ROC: predict_proba[:, 1], else decision_function."""
    if hasattr(clf, "predict_proba"):
        return clf.predict_proba(X)[:, 1]
    if hasattr(clf, "decision_function"):
        return clf.decision_function(X)
    return None


def train_and_eval(clf, X_tr, y_tr, X_te, y_te):
    """Train and evaluate classifier, return metrics, predictions, scores, and runtime."""
    t0 = time.perf_counter()
    clf.fit(X_tr, y_tr)
    fit_time = time.perf_counter() - t0
    t0 = time.perf_counter()
    y_pred = clf.predict(X_te)
    y_score = positive_scores(clf, X_te)
    predict_time = time.perf_counter() - t0
    metrics = score_binary(y_te, y_pred, y_score)
    return metrics, y_pred, y_score, fit_time, predict_time


def save_figure(fig, path):
    """Save figure at 150 dpi; show only when SHOW_PLOTS is set."""
    fig.savefig(path, dpi=150, bbox_inches="tight")
    if SHOW_PLOTS:
        plt.show()
    plt.close(fig)
    print("Saved:", path)
