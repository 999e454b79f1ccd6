"""
Wine Quality model comparison — Entry Point.

Usage:
    # Full run: EDA, baselines, seven tuned models, comparison table + ROC overlay
    python run_pipeline.py

    # Custom data location and a subset of models
    python run_pipeline.py --red data/winequality-red.csv --white data/winequality-white.csv
    python run_pipeline.py --models logreg rf gb --cv 10

    # Faster: skip EDA and per-model complexity curves
    python run_pipeline.py --skip-eda --no-complexity
"""

import argparse

from config import RED_DATA_PATH, WHITE_DATA_PATH, TEST_SIZE, CV_FOLDS, RANDOM_SEED, OUTPUT_DIR
from compare import MODEL_RUNNERS, run_comparison
from data_loading import load_wine
from eda import run_eda
from preprocessing import split_train_test, get_preprocessed_train_test
from utils import set_seed


def build_parser():
    parser = argparse.ArgumentParser(
        description="Tune and compare seven classifiers on the red + white Wine Quality data "
                    "(binary label: quality >= 6)."
    )
    parser.add_argument("--red", default=RED_DATA_PATH, help="Red wine CSV (semicolon-delimited)")
    parser.add_argument("--white", default=WHITE_DATA_PATH, help="White wine CSV (semicolon-delimited)")
    parser.add_argument("--test-size", type=float, default=TEST_SIZE, help="Held-out test fraction")
    parser.add_argument("--cv", type=int, default=CV_FOLDS, help="Number of stratified CV folds")
    parser.add_argument("--models", nargs="+", choices=list(MODEL_RUNNERS), default=list(MODEL_RUNNERS),
                        help="Models to tune and compare")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="Seed for the train/test split")
    parser.add_argument("--output-dir", default=OUTPUT_DIR, help="Where results files and figures go")
    parser.add_argument("--keep-duplicates", action="store_true", help="Do not drop exact duplicate rows")
    parser.add_argument("--skip-eda", action="store_true", help="Skip exploratory analysis")
    parser.add_argument("--no-complexity", action="store_true", help="Skip model-complexity curves")
    parser.add_argument("--learning-curves", action="store_true", help="Compute learning curves for tuned models")
    parser.add_argument("--no-baselines", action="store_true", help="Leave dummy baselines out of the comparison")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    set_seed(args.seed)

    print("=" * 60)
    print("WINE QUALITY — binary model comparison")
    print("=" * 60)
    df = load_wine(red_path=args.red, white_path=args.white, remove_duplicates=not args.keep_duplicates)

    if not args.skip_eda:
        run_eda(df, output_dir=args.output_dir)

    train_df, test_df = split_train_test(df, test_size=args.test_size, random_state=args.seed)
    X_train, y_train, X_test, y_test = get_preprocessed_train_test(train_df, test_df)
    print(f"\nTrain: {len(y_train)} rows | Test: {len(y_test)} rows | Features: {X_train.shape[1]}")

    table, _ = run_comparison(
        X_train, y_train, X_test, y_test,
        models=args.models,
        cv=args.cv,
        complexity=not args.no_complexity,
        learning_curves=args.learning_curves,
        include_baselines=not args.no_baselines,
        output_dir=args.output_dir,
    )
    return table


if __name__ == "__main__":
    main()
