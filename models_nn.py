"""
Neural Network — scikit-learn MLPClassifier for Wine Quality (Binary Classification).
Feed-forward network trained by backpropagation (Adam), ReLU hidden units,
L2 regularization (alpha) and early stopping on a 10% validation split.
Tune architecture (depth vs width), alpha and initial learning rate.
Model-complexity curve: width of a single hidden layer, CV folds fit in parallel
with joblib (N_JOBS) and a tqdm progress bar.
"""

import os
from collections import defaultdict

import numpy as np
from joblib import Parallel, delayed
from sklearn.metrics import roc_auc_score
from sklearn.neural_network import MLPClassifier
from tqdm import tqdm

from config import RANDOM_SEED, CV_FOLDS, N_JOBS
from tuning import tune_and_evaluate, make_cv_splitter, plot_model_complexity, report_results

NAME = "Neural Network (MLP)"
KEY = "nn"

PARAM_GRID = {
    "hidden_layer_sizes": [(16,), (32,), (64,), (32, 32), (16, 16, 16)],
    "alpha": [1e-4, 1e-3, 1e-2],
    "learning_rate_init": [0.01, 0.001],
}
# Width search (1 hidden layer)
WIDTH_VALUES = [2, 4, 8, 16, 32, 64, 128]

BATCH_SIZE = 64
MAX_EPOCHS = 500
EARLY_STOPPING_PATIENCE = 10


def build_nn(**params):
    """MLPClassifier with Adam, ReLU, early stopping on a 10% validation split."""
    kw = {
        "activation": "relu",
        "solver": "adam",
        "batch_size": BATCH_SIZE,
        "max_iter": MAX_EPOCHS,
        "early_stopping": True,
        "n_iter_no_change": EARLY_STOPPING_PATIENCE,
        "validation_fraction": 0.1,
        "random_state": RANDOM_SEED,
    }
    kw.update(params)
    return MLPClassifier(**kw)


def _fit_one_fold_width(w, fixed, train_idx, val_idx, X_train, y_train):
    """Fit one (width, fold); return (train_roc_auc, val_roc_auc). Picklable for joblib."""
    clf = build_nn(hidden_layer_sizes=(w,), **fixed)
    clf.fit(X_train[train_idx], y_train[train_idx])
    return (
        roc_auc_score(y_train[train_idx], clf.predict_proba(X_train[train_idx])[:, 1]),
        roc_auc_score(y_train[val_idx], clf.predict_proba(X_train[val_idx])[:, 1]),
    )


def width_complexity_curve(X_train, y_train, fixed=None, widths=None, cv=CV_FOLDS):
    """
    Width search, 1 hidden layer: Input → Dense(W) → ReLU → Output.
    Every (width, fold) pair is an independent joblib task.
    """
    fixed = fixed or {}
    widths = widths or WIDTH_VALUES
    X_train = np.asarray(X_train)
    y_train = np.asarray(y_train).ravel()
    folds_list = list(make_cv_splitter(cv).split(X_train, y_train))
    tasks = [(w, train_idx, val_idx) for w in widths for train_idx, val_idx in folds_list]
    scores = Parallel(n_jobs=N_JOBS)(
        delayed(_fit_one_fold_width)(w, fixed, train_idx, val_idx, X_train, y_train)
        for w, train_idx, val_idx in tqdm(tasks, desc="NN width sweep", total=len(tasks))
    )

    # Aggregate by width
    by_width = defaultdict(lambda: {"train": [], "val": []})
    for (w, _, _), (train_auc, val_auc) in zip(tasks, scores):
        by_width[w]["train"].append(train_auc)
        by_width[w]["val"].append(val_auc)
    train_score = [float(np.mean(by_width[w]["train"])) for w in widths]
    cv_score = [float(np.mean(by_width[w]["val"])) for w in widths]
    best_idx = int(np.argmax(cv_score))
    return {
        "param": "hidden width",
        "values": list(widths),
        "scoring": "roc_auc",
        "train_score": train_score,
        "cv_score": cv_score,
        "best_value": widths[best_idx],
        "best_cv_score": cv_score[best_idx],
    }


def run_nn(X_train, y_train, X_test, y_test, cv=CV_FOLDS, param_grid=None, complexity=True,
           output_dir=None, learning_curves=False):
    """
    Tune MLP via CV on training only; refit and evaluate on test.
    Reports epochs run and final training loss of the refit network.
    """
    results = tune_and_evaluate(
        NAME, KEY, build_nn(), param_grid or PARAM_GRID, X_train, y_train, X_test, y_test,
        cv=cv, output_dir=output_dir, learning_curves=learning_curves,
    )
    clf = results["best_model"]
    results["extras"]["epochs"] = int(clf.n_iter_)
    results["extras"]["final_loss"] = round(float(clf.loss_), 4)
    best_val = getattr(clf, "best_validation_score_", None)
    if best_val is not None:
        results["extras"]["best_validation_accuracy"] = round(float(best_val), 4)

    if complexity:
        fixed = {k: v for k, v in results["best_params"].items() if k != "hidden_layer_sizes"}
        results["model_complexity"] = width_complexity_curve(X_train, y_train, fixed=fixed, cv=cv)
        plot_model_complexity(
            results["model_complexity"], NAME,
            os.path.join(results["output_dir"], f"{KEY}_width_model_complexity.png"), log_x=True,
        )

    return report_results(results)
