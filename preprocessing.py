"""
Preprocessing for the combined red/white Wine Quality dataset.
Based on EDA: keep the 11 physicochemical features plus the origin flag,
drop the raw 'quality' score (it defines the label, data leakage),
standardize all features.
"""

import numpy as np
from sklearn.model_selection import train_test_split
from sklearn.preprocessing import StandardScaler

from config import LABEL_COLUMN, TEST_SIZE, RANDOM_SEED
from data_loading import load_wine, get_target_and_features


def prepare_X_y(df, scaler=None, fit=True):
    """
    Prepare feature matrix X and target y from DataFrame.
    Steps: (1) Select features (raw quality excluded), (2) Extract binary label,
    (3) Standardize all features.

    Args:
        df: DataFrame with feature columns and quality/label column
        scaler: Pre-fitted StandardScaler (for test set)
        fit: If True, fit scaler; if False, use provided scaler

    Returns:
        X (float32), y (int), and scaler for reuse
    """
    X_df, y = get_target_and_features(df)
    X_num = X_df.astype(np.float32)

    if fit:
        scaler = StandardScaler()
        scaler.fit(X_num)
    else:
        if scaler is None:
            raise ValueError("For test set pass scaler from train.")

    X = scaler.transform(X_num).astype(np.float32)
    return X, y.astype(int).to_numpy(), scaler


def get_preprocessed_train_test(train_df, test_df):
    """
    Apply preprocessing to train and test. Fit on train only; transform both.
    Returns (X_train, y_train, X_test, y_test).
    """
    X_train, y_train, scaler = prepare_X_y(train_df, fit=True)
    X_test, y_test, _ = prepare_X_y(test_df, scaler=scaler, fit=False)
    return X_train, y_train, X_test, y_test


def split_train_test(df, test_size=None, random_state=None):
    """Stratified (on the binary label) train/test split of the full DataFrame."""
    test_size = test_size if test_size is not None else TEST_SIZE
    random_state = random_state if random_state is not None else RANDOM_SEED
    train_df, test_df = train_test_split(
        df, test_size=test_size, random_state=random_state, stratify=df[LABEL_COLUMN]
    )
    return train_df, test_df


def get_dataset(red_path=None, white_path=None, test_size=None, random_state=None, remove_duplicates=True):
    """
    Single entry point: load data, stratified train/test split, preprocess.
    Use this everywhere (notebook, model scripts) for consistent data.

    Returns:
        X_train, y_train, X_test, y_test (ready for fit/predict).
    """
    df = load_wine(red_path=red_path, white_path=white_path, remove_duplicates=remove_duplicates)
    train_df, test_df = split_train_test(df, test_size=test_size, random_state=random_state)
    return get_preprocessed_train_test(train_df, test_df)
