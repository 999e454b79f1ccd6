"""End-to-end run of the command-line entry point on small data."""

import os

from run_pipeline import main


class TestPipeline:
    """Test suite for run_pipeline.main."""

    def test_main_single_model(self, wine_files, output_dir):
        red, white = wine_files
        table = main([
            "--red", red, "--white", white, "--models", "logreg", "--cv", "3",
            "--output-dir", output_dir, "--no-complexity",
        ])
        assert "Logistic Regression" in table.index
        assert "Baseline (stratified)" in table.index
        assert os.path.exists(os.path.join(output_dir, "EDA_RESULTS.txt"))
        assert os.path.exists(os.path.join(output_dir, "LOGREG_results.txt"))

    def test_main_skip_eda_no_baselines(self, wine_files, output_dir):
        red, white = wine_files
        table = main([
            "--red", red, "--white", white, "--models", "knn", "--cv", "3",
            "--output-dir", output_dir, "--no-complexity", "--skip-eda", "--no-baselines",
        ])
        assert list(table.index) == ["k-Nearest Neighbors"]
        assert not os.path.exists(os.path.join(output_dir, "EDA_RESULTS.txt"))
