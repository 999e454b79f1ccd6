"""Tests for loading the red/white files and deriving the binary label."""

import pandas as pd
import pytest

from config import MODEL_FEATURES, LABEL_COLUMN, TARGET_COLUMN, TYPE_COLUMN, ORIGIN_FLAG_COLUMN
from data_loading import load_wine, read_wine_csv, add_quality_label, get_target_and_features
from conftest import N_RED, N_WHITE, make_wine_frame, write_wine_csv


class TestDataLoading:
    """Test suite for data loading and label derivation."""

    def test_load_wine_stacks_both_files(self, wine_df):
        assert len(wine_df) == N_RED + N_WHITE
        assert wine_df[TYPE_COLUMN].value_counts().to_dict() == {"white": N_WHITE, "red": N_RED}
        assert (wine_df[ORIGIN_FLAG_COLUMN] == (wine_df[TYPE_COLUMN] == "red")).all()

    def test_quoted_headers_are_stripped(self, wine_files):
        df = read_wine_csv(wine_files[0])
        assert "fixed acidity" in df.columns
        assert not any('"' in c for c in df.columns)

    def test_label_threshold(self):
        df = pd.DataFrame({TARGET_COLUMN: [3, 5, 6, 7, 9]})
        assert add_quality_label(df)[LABEL_COLUMN].tolist() == [0, 0, 1, 1, 1]
        assert add_quality_label(df, threshold=7)[LABEL_COLUMN].tolist() == [0, 0, 0, 1, 1]

    def test_label_consistent_with_quality(self, wine_df):
        assert ((wine_df[TARGET_COLUMN] >= 6).astype(int) == wine_df[LABEL_COLUMN]).all()
        assert set(wine_df[LABEL_COLUMN].unique()) == {0, 1}

    def test_features_exclude_raw_quality(self, wine_df):
        X, y = get_target_and_features(wine_df)
        assert list(X.columns) == MODEL_FEATURES
        assert TARGET_COLUMN not in X.columns
        assert len(X) == len(y) == len(wine_df)

    def test_target_derived_when_label_missing(self, wine_df):
        X, y = get_target_and_features(wine_df.drop(columns=[LABEL_COLUMN]))
        assert (y.values == wine_df[LABEL_COLUMN].values).all()

    def test_remove_duplicates(self, tmp_path, wine_files):
        red = make_wine_frame(10, red=True, seed=5)
        red = pd.concat([red, red.iloc[:3]], ignore_index=True)
        red_path = write_wine_csv(red, tmp_path / "dup-red.csv")

        deduped = load_wine(red_path=red_path, white_path=wine_files[1])
        kept = load_wine(red_path=red_path, white_path=wine_files[1], remove_duplicates=False)
        assert len(kept) == 13 + N_WHITE
        assert len(deduped) == 10 + N_WHITE
        assert deduped.index.equals(pd.RangeIndex(len(deduped)))

    def test_missing_column_raises(self, tmp_path, wine_files):
        broken = make_wine_frame(5, red=True, seed=3).drop(columns=["alcohol"])
        path = write_wine_csv(broken, tmp_path / "broken.csv")
        with pytest.raises(ValueError, match="alcohol"):
            load_wine(red_path=path, white_path=wine_files[1])
