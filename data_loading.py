"""
Load the red and white Wine Quality datasets.
Declare origin flag and binary target; basic loading and column info.
"""

import pandas as pd

from config import (
    RED_DATA_PATH,
    WHITE_DATA_PATH,
    CSV_SEPARATOR,
    FEATURE_COLUMNS,
    MODEL_FEATURES,
    TYPE_COLUMN,
    ORIGIN_FLAG_COLUMN,
    TARGET_COLUMN,
    LABEL_COLUMN,
    QUALITY_THRESHOLD,
)


def read_wine_csv(path):
    """Read one semicolon-delimited wine file and check its columns."""
    df = pd.read_csv(path, sep=CSV_SEPARATOR)
    df.columns = [c.strip().strip('"') for c in df.columns]

    missing = [c for c in FEATURE_COLUMNS + [TARGET_COLUMN] if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing expected column(s) {missing}")
    return df


def load_wine(red_path=None, white_path=None, remove_duplicates=True):
    """
    Load both wine files and stack them into one DataFrame.

    Args:
        red_path: Path to red wine CSV (defaults to config.RED_DATA_PATH)
        white_path: Path to white wine CSV (defaults to config.WHITE_DATA_PATH)
        remove_duplicates: If True, remove exact duplicate rows (default: True)

    Returns:
        DataFrame with 'type' (red/white), 'is_red' and 'quality_binary' columns added
    """
    red = read_wine_csv(red_path or RED_DATA_PATH)
    white = read_wine_csv(white_path or WHITE_DATA_PATH)
    red[TYPE_COLUMN] = "red"
    white[TYPE_COLUMN] = "white"

    df = pd.concat([red, white], ignore_index=True)
    df[ORIGIN_FLAG_COLUMN] = (df[TYPE_COLUMN] == "red").astype(int)
    print(f"Loaded {len(red)} red + {len(white)} white = {len(df)} rows.")

    if remove_duplicates:
        initial_rows = len(df)
        df = df.drop_duplicates(keep='first').reset_index(drop=True)
        n_removed = initial_rows - len(df)
        if n_removed > 0:
            print(f"Removed {n_removed} duplicate row(s). Dataset: {initial_rows} -> {len(df)} rows.")

    return add_quality_label(df)


def add_quality_label(df, threshold=QUALITY_THRESHOLD):
    """Return a copy with the binary label: 1 if quality >= threshold, else 0."""
    df = df.copy()
    df[LABEL_COLUMN] = (df[TARGET_COLUMN] >= threshold).astype(int)
    return df


def get_target_and_features(df):
    """Split into features (11 physicochemical + origin flag) and binary target."""
    if LABEL_COLUMN not in df.columns:
        df = add_quality_label(df)
    y = df[LABEL_COLUMN].copy()
    X = df[MODEL_FEATURES].copy()
    return X, y


# For reference: columns in winequality-{red,white}.csv
# fixed acidity; volatile acidity; citric acid; residual sugar; chlorides;
# free sulfur dioxide; total sulfur dioxide; density; pH; sulphates; alcohol;
# quality
