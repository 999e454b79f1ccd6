"""
Wine Quality (red + white) — binary model comparison: configuration.
Reproducibility: random seeds, paths, metrics, and constants.
"""

import os

# ----- Reproducibility -----
RANDOM_SEED = 42

# ----- Paths -----
PROJECT_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.environ.get("WINE_DATA_DIR", os.path.join(PROJECT_DIR, "data"))
RED_DATA_PATH = os.path.join(DATA_DIR, "winequality-red.csv")
WHITE_DATA_PATH = os.path.join(DATA_DIR, "winequality-white.csv")
CSV_SEPARATOR = ";"  # UCI files are semicolon-delimited with quoted headers

# ----- Columns -----
FEATURE_COLUMNS = [
    "fixed acidity",
    "volatile acidity",
    "citric acid",
    "residual sugar",
    "chlorides",
    "free sulfur dioxide",
    "total sulfur dioxide",
    "density",
    "pH",
    "sulphates",
    "alcohol",
]
TYPE_COLUMN = "type"  # "red" / "white"
ORIGIN_FLAG_COLUMN = "is_red"  # numeric origin flag used as a feature
MODEL_FEATURES = FEATURE_COLUMNS + [ORIGIN_FLAG_COLUMN]

# ----- Task -----
TARGET_COLUMN = "quality"  # Raw 0-10 sensory score, never a feature
LABEL_COLUMN = "quality_binary"  # 1 if quality >= QUALITY_THRESHOLD else 0
QUALITY_THRESHOLD = 6
CLASS_NAMES = ["low (<6)", "high (>=6)"]
TASK_TYPE = "binary_classification"

# ----- Evaluation metrics (compared: Accuracy, F1, ROC-AUC) -----
METRICS_NAMES = ["accuracy", "f1", "roc_auc"]
SCORING = "roc_auc"  # Grid-search refit metric

# ----- Train/test split -----
TEST_SIZE = 0.2  # Single held-out test split; tuning via CV on training only
CV_FOLDS = 5
N_JOBS = 1  # Sequential by default; -1 uses all cores for CV fits

# ----- Plots -----
SHOW_PLOTS = False  # Figures are always saved; set True in a notebook to display

# ----- Optional: where to save figures/tables -----
OUTPUT_DIR = os.path.join(PROJECT_DIR, "outputs")
os.makedirs(OUTPUT_DIR, exist_ok=True)
