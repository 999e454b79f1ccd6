"""
Exploratory Data Analysis for Wine Quality (red + white).
Functions to compute label balance, basic stats, and EDA plots.
Used to ground modelling choices (imbalance, separability, origin effect).
"""

import os
import sys

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from config import (
    TARGET_COLUMN,
    LABEL_COLUMN,
    TYPE_COLUMN,
    ORIGIN_FLAG_COLUMN,
    FEATURE_COLUMNS,
    QUALITY_THRESHOLD,
    OUTPUT_DIR,
)
from utils import save_figure


class TeeOutput:
    """Context manager that writes to both stdout and a file."""
    def __init__(self, file_path):
        self.file_path = file_path
        self.file = None
        self.stdout = sys.stdout

    def __enter__(self):
        self.file = open(self.file_path, 'w', encoding='utf-8')
        sys.stdout = self
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        sys.stdout = self.stdout
        if self.file:
            self.file.close()

    def write(self, data):
        self.stdout.write(data)
        if self.file:
            self.file.write(data)

    def flush(self):
        self.stdout.flush()
        if self.file:
            self.file.flush()


def _feature_columns(df):
    """Physicochemical columns present in df."""
    return [c for c in FEATURE_COLUMNS if c in df.columns]


def class_distribution(df):
    """Compute and print binary label distribution and imbalance ratio."""
    counts = df[LABEL_COLUMN].value_counts().sort_index()
    pct = df[LABEL_COLUMN].value_counts(normalize=True).sort_index() * 100
    minor = counts.min()
    major = counts.max()
    ratio = major / minor if minor > 0 else float("inf")
    print(f"Class distribution (target: {LABEL_COLUMN} = quality >= {QUALITY_THRESHOLD})")
    print(counts.to_string())
    print(f"\nPercentages:\n{pct.to_string()}")
    print(f"\nImbalance ratio (majority/minority): {ratio:.2f}")
    return {"counts": counts, "ratio": ratio, "pct": pct}


def quality_distribution(df):
    """Raw quality score counts overall and per wine type."""
    ct = pd.crosstab(df[TARGET_COLUMN], df[TYPE_COLUMN], margins=True, margins_name="total")
    print("Quality score counts by type:")
    print(ct.to_string())
    return ct


def missing_and_dtypes(df):
    """Report missing values and dtypes."""
    missing = df.isna().sum()
    missing = missing[missing > 0]
    print("Missing values:")
    if missing.empty:
        print("  None.")
    else:
        print(missing.to_string())
    print("\nDtypes:")
    print(df.dtypes.to_string())
    return missing


def numeric_summary(df, numeric_cols=None):
    """Describe numeric features, overall and per label."""
    numeric_cols = numeric_cols or _feature_columns(df)
    if not numeric_cols:
        print("No numeric columns.")
        return None
    desc = df[numeric_cols].describe()
    print("Numeric features — describe:")
    print(desc.to_string())
    print(f"\nFeature means by {LABEL_COLUMN}:")
    print(df.groupby(LABEL_COLUMN)[numeric_cols].mean().T.to_string())
    return desc


def plot_class_balance(df, save=True, output_dir=None):
    """Bar plots: binary label counts | raw quality score counts."""
    fig, axes = plt.subplots(1, 2, figsize=(11, 4))
    df[LABEL_COLUMN].value_counts().sort_index().plot(kind="bar", ax=axes[0], edgecolor="black")
    axes[0].set_title(f"Target distribution ({LABEL_COLUMN})")
    axes[0].set_xlabel(LABEL_COLUMN)
    axes[0].set_ylabel("Count")
    axes[0].tick_params(axis="x", rotation=0)
    scores = df[TARGET_COLUMN].value_counts().sort_index()
    scores.plot(kind="bar", ax=axes[1], edgecolor="black", color="steelblue")
    # Bars sit at 0..n-1; the threshold line goes before the first score >= threshold
    n_below = int((scores.index < QUALITY_THRESHOLD).sum())
    axes[1].axvline(n_below - 0.5, color="red", ls="--", label=f"threshold = {QUALITY_THRESHOLD}")
    axes[1].set_title(f"Raw {TARGET_COLUMN} score")
    axes[1].set_xlabel(TARGET_COLUMN)
    axes[1].tick_params(axis="x", rotation=0)
    axes[1].legend()
    plt.tight_layout()
    _finish(fig, save, output_dir, "eda_class_balance.png")


def plot_numeric_distributions(df, numeric_cols=None, save=True, output_dir=None):
    """Distributions of all numeric features, split by label."""
    numeric_cols = numeric_cols or _feature_columns(df)
    if not numeric_cols:
        return
    n = len(numeric_cols)
    ncols = 3
    nrows = (n + ncols - 1) // ncols
    fig, axes = plt.subplots(nrows, ncols, figsize=(5 * ncols, 4 * nrows))
    axes = np.atleast_2d(axes)
    for idx, col in enumerate(numeric_cols):
        ax = axes[idx // ncols, idx % ncols]
        sns.histplot(data=df, x=col, hue=LABEL_COLUMN, bins=30, ax=ax, element="step", stat="density",
                     common_norm=False)
        ax.set_title(col)
    for idx in range(len(numeric_cols), axes.size):
        axes[idx // ncols, idx % ncols].set_visible(False)
    plt.tight_layout()
    _finish(fig, save, output_dir, "eda_numeric_distributions.png")


def plot_type_by_quality(df, type_col=TYPE_COLUMN, save=True, output_dir=None):
    """
    Visualize type (red/white) showing percentage of each quality score for each type,
    plus the share of 'high' wines per type.
    """
    if type_col not in df.columns:
        print(f"Warning: Column '{type_col}' not found in dataset. Skipping type visualization.")
        return None

    ct = pd.crosstab(df[type_col], df[TARGET_COLUMN], normalize='index') * 100
    high = df.groupby(type_col)[LABEL_COLUMN].mean() * 100
    print(f"\nQuality distribution by {type_col} (percentages):")
    print("-" * 60)
    print(ct.round(2).to_string())
    print(f"\nShare with quality >= {QUALITY_THRESHOLD} by {type_col} (%):")
    print(high.round(2).to_string())

    fig, ax = plt.subplots(figsize=(10, 6))
    types = ct.index.tolist()
    quality_classes = ct.columns.tolist()
    x = np.arange(len(types))
    width = 0.8 / len(quality_classes)
    colors = plt.cm.Set3(np.linspace(0, 1, len(quality_classes)))
    for i, quality in enumerate(quality_classes):
        values = ct[quality].values
        bars = ax.bar(x + i * width, values, width, label=f'Quality {quality}',
                      color=colors[i], edgecolor='black', alpha=0.8)
        for val, rect in zip(values, bars):
            if val > 0:
                ax.text(rect.get_x() + rect.get_width() / 2., rect.get_height(),
                        f'{val:.1f}%', ha='center', va='bottom', fontsize=8)

    ax.set_xlabel(type_col.capitalize(), fontsize=12)
    ax.set_ylabel('Percentage (%)', fontsize=12)
    ax.set_title(f'Quality Distribution by {type_col.capitalize()}', fontsize=14, fontweight='bold')
    ax.set_xticks(x + width * (len(quality_classes) - 1) / 2)
    ax.set_xticklabels(types)
    ax.legend(title='Quality', loc='upper right')
    ax.set_ylim([0, ct.values.max() * 1.2])
    ax.grid(axis='y', alpha=0.3, linestyle='--')
    plt.tight_layout()
    _finish(fig, save, output_dir, "eda_type_by_quality.png")
    return ct


def plot_correlation_with_target(df, numeric_cols=None, save=True, output_dir=None):
    """Correlation of numeric features (and origin flag) with the raw quality score."""
    numeric_cols = numeric_cols or _feature_columns(df) + [c for c in [ORIGIN_FLAG_COLUMN] if c in df.columns]
    raw = df[numeric_cols].corrwith(df[TARGET_COLUMN].astype(float))
    corrs = raw.reindex(raw.abs().sort_values().index)

    print(f"\nCorrelation of numeric features with {TARGET_COLUMN}:")
    print("-" * 60)
    for feature, corr_val in corrs.items():
        print(f"  {feature:22s}: {corr_val:7.4f}")

    fig, ax = plt.subplots(figsize=(8, max(4, len(corrs) * 0.35)))
    corrs.plot(kind="barh", ax=ax, color="steelblue", edgecolor="black")
    ax.set_title(f"Correlation of numeric features with {TARGET_COLUMN}")
    ax.set_xlabel("Correlation")
    ax.axvline(0, color="gray", linestyle="--")
    plt.tight_layout()
    _finish(fig, save, output_dir, "eda_correlation_with_target.png")
    return corrs


def plot_numeric_correlation_matrix(df, numeric_cols=None, save=True, output_dir=None):
    """Heatmap of correlations between numeric features."""
    numeric_cols = numeric_cols or _feature_columns(df)
    corr = df[numeric_cols].corr()

    print("\nCorrelation matrix (numeric features):")
    print("-" * 60)
    print(corr.round(3).to_string())

    fig, ax = plt.subplots(figsize=(10, 8))
    sns.heatmap(corr, annot=True, fmt=".2f", cmap="RdBu_r", center=0, ax=ax, square=True)
    ax.set_title("Correlation matrix (numeric features)")
    plt.tight_layout()
    _finish(fig, save, output_dir, "eda_correlation_matrix.png")
    return corr


def plot_features_by_label(df, numeric_cols=None, save=True, output_dir=None):
    """Boxplots of each feature by binary label, split by wine type."""
    numeric_cols = numeric_cols or _feature_columns(df)
    n = len(numeric_cols)
    ncols = 4
    nrows = (n + ncols - 1) // ncols
    fig, axes = plt.subplots(nrows, ncols, figsize=(4 * ncols, 3.5 * nrows))
    axes = np.atleast_2d(axes)
    for idx, col in enumerate(numeric_cols):
        ax = axes[idx // ncols, idx % ncols]
        sns.boxplot(data=df, x=LABEL_COLUMN, y=col, hue=TYPE_COLUMN, ax=ax, fliersize=1)
        ax.set_title(col)
        ax.set_xlabel("")
        if idx > 0 and ax.get_legend() is not None:
            ax.get_legend().remove()
    for idx in range(n, axes.size):
        axes[idx // ncols, idx % ncols].set_visible(False)
    plt.tight_layout()
    _finish(fig, save, output_dir, "eda_features_by_label.png")


def _finish(fig, save, output_dir, filename):
    if save:
        save_figure(fig, os.path.join(output_dir or OUTPUT_DIR, filename))
    else:
        plt.close(fig)


def run_eda(df, save_figures=True, save_results_to_file=True, output_dir=None):
    """
    Run full EDA: label and score distribution, missing/dtypes, numeric summary,
    and all plots. Figures saved to output_dir (config.OUTPUT_DIR) if save_figures.

    Args:
        df: DataFrame from data_loading.load_wine (with type and label columns)
        save_figures: If True, save plots to output_dir
        save_results_to_file: If True, save all printed output to EDA_RESULTS.txt
        output_dir: Where figures and EDA_RESULTS.txt go
    """
    output_dir = output_dir or OUTPUT_DIR
    os.makedirs(output_dir, exist_ok=True)
    results_file = os.path.join(output_dir, "EDA_RESULTS.txt")

    if save_results_to_file:
        with TeeOutput(results_file):
            summary = _run_eda_internal(df, save_figures, output_dir)
        print(f"\nEDA results saved to: {results_file}")
    else:
        summary = _run_eda_internal(df, save_figures, output_dir)
    return summary


def _run_eda_internal(df, save_figures=True, output_dir=None):
    """Internal function that performs the actual EDA analysis."""
    print("\nFirst 5 rows:\n", df.head())
    print("=" * 60)
    print("EXPLORATORY DATA ANALYSIS — Wine Quality (red + white)")
    print("=" * 60)
    print(f"\nShape: {df.shape[0]} rows, {df.shape[1]} columns")
    print(f"Types: {df[TYPE_COLUMN].value_counts().to_dict()}")

    numeric_cols = _feature_columns(df)
    print(f"\nNumeric feature columns ({len(numeric_cols)}): {numeric_cols}")

    print("\n" + "-" * 40)
    balance = class_distribution(df)

    print("\n" + "-" * 40)
    quality_distribution(df)

    print("\n" + "-" * 40)
    missing = missing_and_dtypes(df)

    print("\n" + "-" * 40)
    numeric_summary(df, numeric_cols)

    print("\n" + "-" * 40)
    print(f"Plots (saving to {output_dir}):")
    plot_class_balance(df, save=save_figures, output_dir=output_dir)
    plot_numeric_distributions(df, numeric_cols=numeric_cols, save=save_figures, output_dir=output_dir)
    plot_type_by_quality(df, save=save_figures, output_dir=output_dir)
    corrs = plot_correlation_with_target(df, save=save_figures, output_dir=output_dir)
    plot_numeric_correlation_matrix(df, numeric_cols=numeric_cols, save=save_figures, output_dir=output_dir)
    plot_features_by_label(df, numeric_cols=numeric_cols, save=save_figures, output_dir=output_dir)

    print("\nEDA complete.")
    return {
        "numeric_cols": numeric_cols,
        "imbalance_ratio": balance["ratio"],
        "n_missing": int(missing.sum()),
        "correlation_with_quality": corrs,
    }
