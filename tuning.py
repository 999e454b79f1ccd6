"""
Cross-validated grid search + held-out test evaluation shared by all models.
Tuning via stratified K-fold CV on training only; the best configuration is
refit on the full training set and evaluated once on the test set.
Also: model-complexity curves, learning curves, results text file and
confusion-matrix heatmap.
"""

import os
import time

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from sklearn.base import clone
from sklearn.model_selection import GridSearchCV, StratifiedKFold, cross_validate, learning_curve

from config import (
    RANDOM_SEED,
    CV_FOLDS,
    SCORING,
    N_JOBS,
    OUTPUT_DIR,
    CLASS_NAMES,
    TASK_TYPE,
    QUALITY_THRESHOLD,
    MODEL_FEATURES,
)
from evaluation import binary_confusion_matrix, format_confusion_matrix, format_metrics
from utils import get_hardware_note, save_figure, train_and_eval

# Every candidate is scored on all compared metrics; refit uses SCORING
CV_METRICS = {"roc_auc": "roc_auc", "accuracy": "accuracy", "f1": "f1"}


def make_cv_splitter(cv=CV_FOLDS):
    """Stratified, shuffled K-fold splitter seeded with RANDOM_SEED."""
    return StratifiedKFold(n_splits=cv, shuffle=True, random_state=RANDOM_SEED)


def tune_and_evaluate(name, key, estimator, param_grid, X_train, y_train, X_test, y_test,
                      cv=CV_FOLDS, scoring=SCORING, output_dir=None, learning_curves=False):
    """
    Grid-search `estimator` over `param_grid` with CV on training only, refit the
    best params on the full training set and score once on the test set.

    Returns:
        results dict (best_model, best_params, cv, test_metrics, confusion_matrix,
        y_pred, y_score, runtime, ...). Nothing is printed or written here; see
        report_results().
    """
    output_dir = output_dir or OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)
    np.random.seed(RANDOM_SEED)
    y_train = np.asarray(y_train).ravel()
    y_test = np.asarray(y_test).ravel()

    scoring_dict = dict(CV_METRICS)
    scoring_dict.setdefault(scoring, scoring)
    cv_splitter = make_cv_splitter(cv)

    # 1) Grid search: all metrics per candidate, refit metric picks the winner
    gs = GridSearchCV(estimator, param_grid, cv=cv_splitter, scoring=scoring_dict, refit=scoring, n_jobs=N_JOBS)
    t0 = time.perf_counter()
    gs.fit(X_train, y_train)
    search_time = time.perf_counter() - t0
    best_idx = gs.best_index_
    cv_summary = {
        m: {
            "mean": float(gs.cv_results_[f"mean_test_{m}"][best_idx]),
            "std": float(gs.cv_results_[f"std_test_{m}"][best_idx]),
        }
        for m in scoring_dict
    }

    # 2) Final model on full train with best params
    clf_final = clone(estimator).set_params(**gs.best_params_)
    metrics, y_pred, y_score, fit_time, predict_time = train_and_eval(
        clf_final, X_train, y_train, X_test, y_test
    )
    cm = binary_confusion_matrix(y_test, y_pred)

    classes, counts = np.unique(y_train, return_counts=True)
    results = {
        "name": name,
        "key": key,
        "best_model": clf_final,
        "best_params": dict(gs.best_params_),
        "scoring": scoring,
        "cv_folds": cv,
        "cv": cv_summary,
        "n_candidates": len(gs.cv_results_["params"]),
        "train_class_counts": {int(c): int(n) for c, n in zip(classes, counts)},
        "test_metrics": metrics,
        "confusion_matrix": cm.tolist(),
        "y_pred": np.asarray(y_pred),
        "y_score": None if y_score is None else np.asarray(y_score),
        "runtime": {"search_sec": search_time, "fit_sec": fit_time, "predict_sec": predict_time},
        "extras": {},
        "output_dir": output_dir,
        "results_path": os.path.join(output_dir, f"{key.upper()}_results.txt"),
    }

    # 3) Learning curve (train size vs train/val metric) for the tuned model
    if learning_curves:
        results["learning_curve"] = compute_learning_curve(clf_final, X_train, y_train, cv=cv, scoring=scoring)
        plot_learning_curve(results["learning_curve"], name, os.path.join(output_dir, f"{key}_learning_curve.png"))
    return results


def model_complexity_curve(build, param_name, values, X_train, y_train, cv=CV_FOLDS, scoring=SCORING):
    """
    Train and CV score vs one hyperparameter. `build(value)` returns a fresh
    estimator with that value set (other params held fixed by the caller).
    """
    cv_splitter = make_cv_splitter(cv)
    train_scores, cv_scores = [], []
    for value in values:
        res = cross_validate(build(value), X_train, y_train, cv=cv_splitter, scoring=scoring,
                             return_train_score=True, n_jobs=N_JOBS)
        train_scores.append(float(np.nanmean(res["train_score"])))
        cv_scores.append(float(np.nanmean(res["test_score"])))
    best_idx = int(np.nanargmax(cv_scores))
    return {
        "param": param_name,
        "values": list(values),
        "scoring": scoring,
        "train_score": train_scores,
        "cv_score": cv_scores,
        "best_value": values[best_idx],
        "best_cv_score": cv_scores[best_idx],
    }


def plot_model_complexity(curve, title, path, log_x=False):
    """Train + CV score vs hyperparameter; non-numeric values plotted by position."""
    values = curve["values"]
    numeric = all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in values)
    x = list(values) if numeric else list(range(len(values)))
    best_x = curve["best_value"] if numeric else values.index(curve["best_value"])

    fig, ax = plt.subplots(figsize=(6, 4))
    ax.plot(x, curve["train_score"], "o-", label=f"Train {curve['scoring']}")
    ax.plot(x, curve["cv_score"], "s-", label=f"Cross-Val {curve['scoring']}")
    ax.axvline(best_x, color="gray", ls="--", alpha=0.7, label=f"best {curve['param']}={curve['best_value']}")
    if not numeric:
        ax.set_xticks(x)
        ax.set_xticklabels([str(v) for v in values], rotation=45)
    elif log_x:
        ax.set_xscale("log")
    ax.set_xlabel(curve["param"])
    ax.set_ylabel(curve["scoring"])
    ax.set_title(f"{title} — Model Complexity ({curve['param']})")
    ax.legend()
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    save_figure(fig, path)


def compute_learning_curve(clf, X_train, y_train, cv=CV_FOLDS, scoring=SCORING):
    """Train/val score vs training size (10 sizes from 10% to 100%)."""
    train_sizes = np.linspace(0.1, 1.0, 10)
    sizes, lc_train, lc_val = learning_curve(
        clone(clf), X_train, y_train, train_sizes=train_sizes, cv=make_cv_splitter(cv),
        scoring=scoring, n_jobs=N_JOBS,
    )
    return {
        "scoring": scoring,
        "train_sizes": np.asarray(sizes).flatten().tolist(),
        "train_mean": np.nanmean(lc_train, axis=1).tolist(),
        "train_std": np.nanstd(lc_train, axis=1).tolist(),
        "val_mean": np.nanmean(lc_val, axis=1).tolist(),
        "val_std": np.nanstd(lc_val, axis=1).tolist(),
    }


def plot_learning_curve(lc, title, path):
    fig, ax = plt.subplots(figsize=(6, 4))
    sizes = lc["train_sizes"]
    for prefix, marker, label in (("train", "o-", "Train"), ("val", "s-", "Cross-Val")):
        mean = np.array(lc[f"{prefix}_mean"])
        std = np.array(lc[f"{prefix}_std"])
        ax.plot(sizes, mean, marker, label=f"{label} {lc['scoring']}")
        ax.fill_between(sizes, mean - std, mean + std, alpha=0.2)
    ax.set_xlabel("Training size")
    ax.set_ylabel(lc["scoring"])
    ax.set_title(f"{title} Learning Curve")
    ax.legend()
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    save_figure(fig, path)


def plot_confusion_matrix(cm, title, path):
    """Confusion matrix heatmap (rows=true, cols=predicted)."""
    fig, ax = plt.subplots(figsize=(6, 5))
    sns.heatmap(np.asarray(cm), annot=True, fmt='d', cmap='Blues', ax=ax, cbar_kws={'label': 'Count'},
                xticklabels=CLASS_NAMES, yticklabels=CLASS_NAMES)
    ax.set_xlabel('Predicted quality')
    ax.set_ylabel('True quality')
    ax.set_title(f'{title} Confusion Matrix')
    plt.tight_layout()
    save_figure(fig, path)


def _format_extra(name, value):
    if isinstance(value, dict):
        lines = [f"{name}:"]
        for k, v in sorted(value.items(), key=lambda kv: -abs(kv[1])):
            lines.append(f"  {k:22s} {v: .4f}")
        return lines
    return [f"{name}: {value}"]


def save_results(results, path=None):
    """Write results to <KEY>_results.txt including DATA & METHODOLOGY."""
    path = path or results["results_path"]
    m = results["test_metrics"]
    rt = results["runtime"]
    counts = results["train_class_counts"]
    total = sum(counts.values())
    pos_rate = counts.get(1, 0) / total if total else float("nan")

    lines = [
        "=" * 60,
        f"{results['name'].upper()} — RESULTS (Wine Quality, red + white)",
        "=" * 60,
        "",
        "--- DATA & METHODOLOGY ---",
        f"Target: quality_binary = 1 if quality >= {QUALITY_THRESHOLD} else 0; task: {TASK_TYPE}.",
        f"Features ({len(MODEL_FEATURES)}): 11 physicochemical + origin flag, standardized on train.",
        f"Class distribution (train): {dict(sorted(counts.items()))}. Positive rate: {pos_rate:.3f}.",
        "Leakage controls: raw 'quality' score excluded from features.",
        f"Single held-out test split; tuning via {results['cv_folds']}-fold stratified CV on training only.",
        f"Grid-search refit metric: {results['scoring']}. Candidates evaluated: {results['n_candidates']}.",
        "",
        "--- Best hyperparameters (CV on training) ---",
    ]
    for k, v in results["best_params"].items():
        lines.append(f"{k}: {v}")

    lines.extend(["", "--- CV metrics at best params (mean ± std) ---"])
    for k, v in results["cv"].items():
        lines.append(f"{k:10s} {v['mean']:.4f} ± {v['std']:.4f}")

    if results.get("extras"):
        lines.extend(["", "--- Fitted model ---"])
        for k, v in results["extras"].items():
            lines.extend(_format_extra(k, v))

    mc = results.get("model_complexity")
    if mc:
        lines.extend([
            "",
            f"--- Model-complexity curve ({mc['param']}, other params at best) ---",
            f"{mc['param']}: {mc['values']}",
            f"Mean train {mc['scoring']}: {[round(x, 4) for x in mc['train_score']]}",
            f"Mean CV {mc['scoring']}:    {[round(x, 4) for x in mc['cv_score']]}",
            f"best {mc['param']}={mc['best_value']}, CV {mc['scoring']}={mc['best_cv_score']:.4f}",
        ])

    lc = results.get("learning_curve")
    if lc:
        lines.extend([
            "",
            "--- Learning curve ---",
            "train_sizes: " + str(lc["train_sizes"]),
            f"  train_{lc['scoring']}_mean: " + str([round(x, 4) for x in lc["train_mean"]]),
            f"  val_{lc['scoring']}_mean: " + str([round(x, 4) for x in lc["val_mean"]]),
        ])

    lines.extend([
        "",
        "--- Test metrics ---",
        f"Accuracy:     {m.get('accuracy', float('nan')):.4f}",
        f"F1:           {m.get('f1', float('nan')):.4f}",
        f"ROC-AUC:      {m.get('roc_auc', float('nan')):.4f}",
        f"PR-AUC:       {m.get('pr_auc', float('nan')):.4f}",
        f"Precision:    {m.get('precision', float('nan')):.4f}",
        f"Recall:       {m.get('recall', float('nan')):.4f}",
        f"Specificity:  {m.get('specificity', float('nan')):.4f}",
        "",
        "--- Confusion matrix (rows=true, cols=predicted) ---",
        format_confusion_matrix(results["confusion_matrix"]),
        "",
        "--- Runtime ---",
        f"Grid search (sec): {rt['search_sec']:.4f}",
        f"Fit (sec):         {rt['fit_sec']:.4f}",
        f"Predict (sec):     {rt['predict_sec']:.4f}",
        f"Hardware: {get_hardware_note()}",
        "",
        "=" * 60,
    ])
    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
    return path


def report_results(results):
    """Print console summary + confusion matrix, write results file, plot heatmap."""
    name = results["name"]
    print(f"--- {name}: grid search ({results['n_candidates']} candidates, {results['cv_folds']}-fold CV) ---")
    print("Best params:", results["best_params"])
    print("CV at best:", ", ".join(f"{k}={v['mean']:.4f}" for k, v in results["cv"].items()))
    mc = results.get("model_complexity")
    if mc:
        print(f"Model-complexity best {mc['param']}={mc['best_value']} (CV {mc['scoring']}={mc['best_cv_score']:.4f})")
    print("Test:", format_metrics(results["test_metrics"]))
    print("Runtime - search (s):", round(results["runtime"]["search_sec"], 4),
          "| fit (s):", round(results["runtime"]["fit_sec"], 4),
          "| predict (s):", round(results["runtime"]["predict_sec"], 4))
    print("\nConfusion matrix:")
    print(format_confusion_matrix(results["confusion_matrix"]))

    save_results(results)
    plot_confusion_matrix(
        results["confusion_matrix"], name,
        os.path.join(results["output_dir"], f"{results['key']}_confusion_matrix.png"),
    )
    print("Results saved to:", results["results_path"])
    return results
