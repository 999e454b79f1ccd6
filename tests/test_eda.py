"""Tests for the exploratory analysis report."""

import os

from config import FEATURE_COLUMNS
from eda import run_eda, class_distribution


class TestEDA:
    """Test suite for EDA."""

    def test_run_eda_writes_report_and_figures(self, wine_df, output_dir):
        summary = run_eda(wine_df, output_dir=output_dir)
        report = os.path.join(output_dir, "EDA_RESULTS.txt")
        assert os.path.exists(report)
        with open(report, encoding="utf-8") as f:
            assert "EXPLORATORY DATA ANALYSIS" in f.read()
        assert summary["numeric_cols"] == FEATURE_COLUMNS
        assert summary["n_missing"] == 0
        assert "alcohol" in summary["correlation_with_quality"].index
        for filename in ("eda_class_balance.png", "eda_correlation_matrix.png", "eda_type_by_quality.png"):
            assert os.path.exists(os.path.join(output_dir, filename)), filename

    def test_run_eda_without_files(self, wine_df, output_dir):
        run_eda(wine_df, save_figures=False, save_results_to_file=False, output_dir=output_dir)
        assert os.listdir(output_dir) == []

    def test_class_distribution(self, wine_df):
        out = class_distribution(wine_df)
        assert out["counts"].sum() == len(wine_df)
        assert out["ratio"] >= 1.0
