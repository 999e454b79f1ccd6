"""
Baseline models for Wine Quality (binary classification).
Minimal config: DummyClassifier (most_frequent, stratified). No tuning.
Writes metrics to baseline_results.txt; rows join the model comparison
as the floor every tuned model must beat.
"""

import os

import numpy as np
from sklearn.dummy import DummyClassifier
from sklearn.model_selection import cross_validate

from config import RANDOM_SEED, CV_FOLDS, OUTPUT_DIR, N_JOBS
from evaluation import binary_confusion_matrix, format_confusion_matrix
from tuning import CV_METRICS, make_cv_splitter
from utils import train_and_eval

BASELINE_STRATEGIES = ["most_frequent", "stratified"]


def run_baselines(X_train, y_train, X_test, y_test, cv=CV_FOLDS, output_dir=None):
    """Score each dummy strategy with CV on train and once on test; return {key: results}."""
    output_dir = output_dir or OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, "baseline_results.txt")
    y_train = np.asarray(y_train).ravel()
    y_test = np.asarray(y_test).ravel()
    cv_splitter = make_cv_splitter(cv)

    lines = []
    lines.append("=" * 60)
    lines.append("BASELINE MODELS — Wine Quality (binary classification)")
    lines.append("CV = %d-fold stratified on train; Test = held-out test set." % cv)
    lines.append("=" * 60)

    out = {}
    for strategy in BASELINE_STRATEGIES:
        m = DummyClassifier(strategy=strategy, random_state=RANDOM_SEED)
        res = cross_validate(m, X_train, y_train, cv=cv_splitter, scoring=CV_METRICS, n_jobs=N_JOBS)
        metrics, y_pred, y_score, fit_time, predict_time = train_and_eval(m, X_train, y_train, X_test, y_test)
        cm = binary_confusion_matrix(y_test, y_pred)
        key = f"dummy_{strategy}"
        out[key] = {
            "name": f"Baseline ({strategy})",
            "key": key,
            "best_model": m,
            "best_params": {"strategy": strategy},
            "cv": {
                name: {"mean": float(np.nanmean(res[f"test_{name}"])), "std": float(np.nanstd(res[f"test_{name}"]))}
                for name in CV_METRICS
            },
            "test_metrics": metrics,
            "confusion_matrix": cm.tolist(),
            "y_pred": np.asarray(y_pred),
            "y_score": np.asarray(y_score),
            "runtime": {"search_sec": 0.0, "fit_sec": fit_time, "predict_sec": predict_time},
            "baseline": True,
        }
        lines.append(f"\n--- DummyClassifier ({strategy}) ---")
        lines.append("Hyperparameters: strategy='%s', random_state=%s" % (strategy, RANDOM_SEED))
        lines.append("CV (train): Accuracy=%.4f, F1=%.4f, ROC-AUC=%.4f" % (
            out[key]["cv"]["accuracy"]["mean"], out[key]["cv"]["f1"]["mean"], out[key]["cv"]["roc_auc"]["mean"]))
        lines.append("Test:       Accuracy=%.4f, F1=%.4f, ROC-AUC=%.4f" % (
            metrics["accuracy"], metrics["f1"], metrics["roc_auc"]))
        lines.append("Confusion matrix (rows=true, cols=predicted):\n" + format_confusion_matrix(cm))
        print("\n".join(lines[-5:]))

    lines.append("\n" + "=" * 60)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
    print("\nResults written to:", output_path)
    return out
