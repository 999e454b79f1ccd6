"""
Model comparison for Wine Quality (binary classification).
Runs every tuned model (plus dummy baselines), then aggregates test and CV
metrics into one table sorted by ROC-AUC, overlays ROC curves on one plot
and draws a grouped bar chart of Accuracy / F1 / ROC-AUC.
"""

import os

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from tqdm import tqdm

from config import CV_FOLDS, OUTPUT_DIR, METRICS_NAMES
from baseline import run_baselines
from evaluation import roc_points
from models_logreg import run_logreg
from models_dt import run_dt
from models_rf import run_rf
from models_gb import run_gb
from models_nn import run_nn
from models_knn import run_knn
from models_svm import run_svm
from utils import save_figure

# Ordered: simplest model first
MODEL_RUNNERS = {
    "logreg": run_logreg,
    "dt": run_dt,
    "rf": run_rf,
    "gb": run_gb,
    "nn": run_nn,
    "knn": run_knn,
    "svm": run_svm,
}

TABLE_COLUMNS = [
    "accuracy", "f1", "roc_auc", "precision", "recall",
    "cv_accuracy", "cv_f1", "cv_roc_auc", "fit_sec", "best_params",
]


def run_comparison(X_train, y_train, X_test, y_test, models=None, cv=CV_FOLDS, param_grids=None,
                   complexity=True, learning_curves=False, include_baselines=True, output_dir=None):
    """
    Tune and evaluate each requested model, then build the comparison outputs.

    Args:
        models: iterable of keys from MODEL_RUNNERS (default: all seven)
        param_grids: optional {key: param_grid} overriding a model's default grid

    Returns:
        (table DataFrame, {key: results})
    """
    output_dir = output_dir or OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)
    models = list(models) if models else list(MODEL_RUNNERS)
    unknown = [m for m in models if m not in MODEL_RUNNERS]
    if unknown:
        raise ValueError(f"Unknown model key(s) {unknown}; choose from {list(MODEL_RUNNERS)}")
    param_grids = param_grids or {}

    results = {}
    if include_baselines:
        results.update(run_baselines(X_train, y_train, X_test, y_test, cv=cv, output_dir=output_dir))

    for key in tqdm(models, desc="Models"):
        print("\n" + "=" * 60)
        results[key] = MODEL_RUNNERS[key](
            X_train, y_train, X_test, y_test, cv=cv, param_grid=param_grids.get(key),
            complexity=complexity, output_dir=output_dir, learning_curves=learning_curves,
        )

    table = build_comparison_table(results)
    _print_table(table)
    save_comparison(table, output_dir)
    plot_roc_overlay(results, y_test, os.path.join(output_dir, "roc_overlay.png"))
    plot_metric_comparison(table, os.path.join(output_dir, "metric_comparison.png"))
    return table, results


def build_comparison_table(results):
    """One row per model: test metrics, CV metrics at best params, fit time; sorted by ROC-AUC."""
    rows = []
    for res in results.values():
        m = res["test_metrics"]
        rows.append({
            "model": res["name"],
            "accuracy": m.get("accuracy", np.nan),
            "f1": m.get("f1", np.nan),
            "roc_auc": m.get("roc_auc", np.nan),
            "precision": m.get("precision", np.nan),
            "recall": m.get("recall", np.nan),
            "cv_accuracy": res["cv"]["accuracy"]["mean"],
            "cv_f1": res["cv"]["f1"]["mean"],
            "cv_roc_auc": res["cv"]["roc_auc"]["mean"],
            "fit_sec": res["runtime"]["fit_sec"],
            "best_params": str(res["best_params"]),
        })
    table = pd.DataFrame(rows, columns=["model"] + TABLE_COLUMNS).set_index("model")
    return table.sort_values("roc_auc", ascending=False, na_position="last")


def _print_table(table):
    print("\n" + "=" * 60)
    print("MODEL COMPARISON — test set (sorted by ROC-AUC)")
    print("=" * 60)
    with pd.option_context("display.width", 160, "display.float_format", "{:.4f}".format):
        print(table.drop(columns=["best_params"]).to_string())
    best = table.index[0]
    print(f"\nBest model by test ROC-AUC: {best} ({table.loc[best, 'roc_auc']:.4f})")


def save_comparison(table, output_dir=None):
    """Write model_comparison.csv and MODEL_COMPARISON_results.txt."""
    output_dir = output_dir or OUTPUT_DIR
    csv_path = os.path.join(output_dir, "model_comparison.csv")
    txt_path = os.path.join(output_dir, "MODEL_COMPARISON_results.txt")
    table.to_csv(csv_path)

    lines = [
        "=" * 60,
        "MODEL COMPARISON — Wine Quality (binary: quality >= 6)",
        "=" * 60,
        "",
        "--- Test metrics (sorted by ROC-AUC) ---",
        table[["accuracy", "f1", "roc_auc", "precision", "recall"]].to_string(float_format="{:.4f}".format),
        "",
        "--- CV metrics at best params (training only) ---",
        table[["cv_accuracy", "cv_f1", "cv_roc_auc"]].to_string(float_format="{:.4f}".format),
        "",
        "--- Best hyperparameters ---",
    ]
    for model, params in table["best_params"].items():
        lines.append(f"{model}: {params}")
    lines.extend(["", "=" * 60])
    with open(txt_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines))
    print("Comparison saved to:", csv_path, "and", txt_path)
    return csv_path, txt_path


def plot_roc_overlay(results, y_test, path):
    """All ROC curves on one axes, AUC in legend, chance diagonal."""
    fig, ax = plt.subplots(figsize=(7, 6))
    for res in results.values():
        points = roc_points(y_test, res.get("y_score"))
        if points is None:
            continue
        fpr, tpr, auc = points
        style = ":" if res.get("baseline") else "-"
        ax.plot(fpr, tpr, style, linewidth=1.5, label=f"{res['name']} (AUC={auc:.3f})")
    ax.plot([0, 1], [0, 1], color="gray", ls="--", alpha=0.7, label="chance")
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1.02)
    ax.set_xlabel("False positive rate")
    ax.set_ylabel("True positive rate")
    ax.set_title("ROC curves — test set")
    ax.legend(loc="lower right", fontsize=8)
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    save_figure(fig, path)


def plot_metric_comparison(table, path):
    """Grouped bars: Accuracy, F1, ROC-AUC per model."""
    long_df = (
        table[METRICS_NAMES]
        .reset_index()
        .melt(id_vars="model", var_name="metric", value_name="score")
    )
    fig, ax = plt.subplots(figsize=(10, 5))
    sns.barplot(data=long_df, x="model", y="score", hue="metric", ax=ax, edgecolor="black")
    ax.set_ylim(0, 1)
    ax.set_xlabel("")
    ax.set_ylabel("Test score")
    ax.set_title("Model comparison — Accuracy, F1, ROC-AUC")
    plt.setp(ax.get_xticklabels(), rotation=30, ha="right")
    ax.grid(axis="y", alpha=0.3, linestyle="--")
    plt.tight_layout()
    save_figure(fig, path)
