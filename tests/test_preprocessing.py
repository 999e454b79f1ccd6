"""Tests for the stratified split and train-only scaling."""

import numpy as np
import pytest

from config import MODEL_FEATURES, LABEL_COLUMN
from preprocessing import prepare_X_y, split_train_test, get_preprocessed_train_test
from conftest import N_RED, N_WHITE


class TestPreprocessing:
    """Test suite for split + standardization."""

    def test_split_sizes_sum_to_n(self, split_data):
        X_train, y_train, X_test, y_test = split_data
        assert len(X_train) + len(X_test) == N_RED + N_WHITE
        assert len(X_train) == len(y_train)
        assert len(X_test) == len(y_test)
        assert len(X_test) == int(np.ceil(0.2 * (N_RED + N_WHITE)))

    def test_split_is_stratified(self, wine_df):
        train_df, test_df = split_train_test(wine_df)
        overall = wine_df[LABEL_COLUMN].mean()
        assert abs(train_df[LABEL_COLUMN].mean() - overall) < 0.05
        assert abs(test_df[LABEL_COLUMN].mean() - overall) < 0.05
        assert set(train_df.index).isdisjoint(test_df.index)

    def test_split_is_reproducible(self, wine_df):
        a, _ = split_train_test(wine_df, random_state=7)
        b, _ = split_train_test(wine_df, random_state=7)
        assert a.index.equals(b.index)

    def test_features_standardized_on_train(self, split_data):
        X_train, y_train, X_test, _ = split_data
        assert X_train.dtype == np.float32
        assert X_train.shape[1] == len(MODEL_FEATURES)
        np.testing.assert_allclose(X_train.mean(axis=0), 0.0, atol=1e-4)
        np.testing.assert_allclose(X_train.std(axis=0), 1.0, atol=1e-3)
        assert set(np.unique(y_train)) == {0, 1}

    def test_scaler_fitted_on_train_only(self, wine_df):
        train_df, test_df = split_train_test(wine_df)
        _, _, scaler = prepare_X_y(train_df, fit=True)
        np.testing.assert_allclose(scaler.mean_, train_df[MODEL_FEATURES].mean().values, rtol=1e-4)

        _, _, X_test, _ = get_preprocessed_train_test(train_df, test_df)
        expected = (test_df[MODEL_FEATURES].values - scaler.mean_) / scaler.scale_
        np.testing.assert_allclose(X_test, expected, rtol=1e-3, atol=1e-3)

    def test_transform_without_scaler_raises(self, wine_df):
        with pytest.raises(ValueError, match="scaler"):
            prepare_X_y(wine_df, fit=False)
