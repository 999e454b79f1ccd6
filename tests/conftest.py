"""Shared fixtures: synthetic red/white wine files in the UCI layout."""

import csv
import os

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

from config import FEATURE_COLUMNS, TARGET_COLUMN

N_RED = 60
N_WHITE = 100

# Small grids so every model fits in a few seconds
TINY_GRIDS = {
    "logreg": {"C": [0.1, 1.0]},
    "dt": {"max_depth": [2, 4]},
    "rf": {"n_estimators": [10], "max_depth": [3, None]},
    "gb": {"n_estimators": [10, 20], "max_depth": [2]},
    "nn": {"hidden_layer_sizes": [(4,), (8,)], "max_iter": [50]},
    "knn": {"n_neighbors": [3, 7]},
    "svm": [
        {"kernel": ["linear"], "C": [1.0]},
        {"kernel": ["rbf"], "C": [1.0], "gamma": ["scale"]},
    ],
}


def make_wine_frame(n, red, seed):
    """Random physicochemical values; quality driven by alcohol and volatile acidity."""
    rng = np.random.default_rng(seed)
    df = pd.DataFrame({
        "fixed acidity": rng.normal(8.3 if red else 6.9, 1.2, n).round(1),
        "volatile acidity": rng.normal(0.53 if red else 0.28, 0.12, n).clip(0.08).round(3),
        "citric acid": rng.uniform(0.0, 0.7, n).round(2),
        "residual sugar": rng.gamma(2.0, 1.3 if red else 3.0, n).round(1),
        "chlorides": rng.normal(0.087 if red else 0.046, 0.02, n).clip(0.01).round(3),
        "free sulfur dioxide": rng.normal(16 if red else 35, 8, n).clip(1).round(0),
        "total sulfur dioxide": rng.normal(46 if red else 138, 25, n).clip(6).round(0),
        "density": rng.normal(0.9967 if red else 0.9940, 0.002, n).round(5),
        "pH": rng.normal(3.31 if red else 3.19, 0.15, n).round(2),
        "sulphates": rng.normal(0.66 if red else 0.49, 0.12, n).clip(0.2).round(2),
        "alcohol": rng.normal(10.4, 1.1, n).round(1),
    })
    latent = (
        0.9 * (df["alcohol"] - 10.4)
        - 4.0 * (df["volatile acidity"] - df["volatile acidity"].mean())
        + rng.normal(0, 0.5, n)
    )
    df[TARGET_COLUMN] = np.clip(np.round(5.8 + latent), 3, 9).astype(int)
    return df[FEATURE_COLUMNS + [TARGET_COLUMN]]


def write_wine_csv(df, path):
    """Semicolon-delimited with quoted header, like the UCI files."""
    df.to_csv(path, sep=";", index=False, quoting=csv.QUOTE_NONNUMERIC)
    return str(path)


@pytest.fixture
def wine_files(tmp_path):
    red = write_wine_csv(make_wine_frame(N_RED, red=True, seed=1), tmp_path / "winequality-red.csv")
    white = write_wine_csv(make_wine_frame(N_WHITE, red=False, seed=2), tmp_path / "winequality-white.csv")
    return red, white


@pytest.fixture
def wine_df(wine_files):
    from data_loading import load_wine
    red, white = wine_files
    return load_wine(red_path=red, white_path=white)


@pytest.fixture
def split_data(wine_files):
    from preprocessing import get_dataset
    red, white = wine_files
    return get_dataset(red_path=red, white_path=white)


@pytest.fixture
def output_dir(tmp_path):
    path = tmp_path / "outputs"
    os.makedirs(path, exist_ok=True)
    return str(path)
