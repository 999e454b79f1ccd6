"""
Evaluation utilities for Wine Quality project (Binary Classification).
Metrics: Accuracy, F1, ROC-AUC (compared across models); precision, recall,
specificity and PR-AUC reported alongside. Confusion matrix always 2x2.
Metrics that are undefined for the given predictions come back as NaN.
"""

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    average_precision_score,
    confusion_matrix,
    f1_score,
    precision_score,
    recall_score,
    roc_auc_score,
    roc_curve,
)

from config import CLASS_NAMES

LABELS = [0, 1]


def _safe_metric(fn, *args, **kwargs):
    """Call a metric; NaN when it cannot be computed."""
    try:
        return float(fn(*args, **kwargs))
    except ValueError:
        return float("nan")


def _has_both_classes(y_true):
    return len(np.unique(np.asarray(y_true))) == 2


def binary_confusion_matrix(y_true, y_pred):
    """2x2 confusion matrix (rows=true, cols=predicted), even if a class is absent."""
    return confusion_matrix(y_true, y_pred, labels=LABELS)


def score_binary(y_true, y_pred, y_score=None):
    """
    Return dict with accuracy, precision, recall, specificity, f1 and, when
    y_score (positive-class probability or decision value) is given, roc_auc
    and pr_auc. Undefined values (e.g. precision with no positive predictions,
    AUC with a single class in y_true) are NaN.
    """
    y_true = np.asarray(y_true).ravel()
    y_pred = np.asarray(y_pred).ravel()

    out = {
        "accuracy": _safe_metric(accuracy_score, y_true, y_pred),
        "precision": _safe_metric(precision_score, y_true, y_pred, zero_division=np.nan),
        "recall": _safe_metric(recall_score, y_true, y_pred, zero_division=np.nan),
        "f1": _safe_metric(f1_score, y_true, y_pred, zero_division=np.nan),
    }

    tn, fp, fn, tp = binary_confusion_matrix(y_true, y_pred).ravel()
    out["specificity"] = float(tn / (tn + fp)) if (tn + fp) > 0 else float("nan")

    if y_score is not None:
        y_score = np.asarray(y_score).ravel()
        if _has_both_classes(y_true):
            out["roc_auc"] = _safe_metric(roc_auc_score, y_true, y_score)
            out["pr_auc"] = _safe_metric(average_precision_score, y_true, y_score)
        else:
            out["roc_auc"] = float("nan")
            out["pr_auc"] = float("nan")
    return out


def roc_points(y_true, y_score):
    """Return (fpr, tpr, auc) for plotting, or None when ROC is undefined."""
    if y_score is None or not _has_both_classes(y_true):
        return None
    fpr, tpr, _ = roc_curve(y_true, y_score)
    return fpr, tpr, _safe_metric(roc_auc_score, y_true, y_score)


def format_confusion_matrix(cm, class_names=None):
    """Text table of a 2x2 confusion matrix for console and results files."""
    cm = np.asarray(cm)
    class_names = class_names or CLASS_NAMES
    width = max(len(n) for n in class_names) + 7  # room for "true "/"pred " prefix
    lines = [" " * width + "".join(f"{'pred ' + n:>{width}}" for n in class_names)]
    for i, name in enumerate(class_names):
        lines.append(f"{'true ' + name:<{width}}" + "".join(f"{int(cm[i, j]):>{width}d}" for j in range(len(class_names))))
    return "\n".join(lines)


def format_metrics(metrics, keys=None):
    """One-line 'name=value' summary; NaN printed as 'nan'."""
    keys = keys or [k for k in ("accuracy", "f1", "roc_auc", "precision", "recall") if k in metrics]
    return ", ".join(f"{k}={metrics[k]:.4f}" for k in keys)
