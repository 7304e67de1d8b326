"""Evaluation metrics."""

import numpy as np


def r2_score(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Coefficient of determination, ``1 - SS_res / SS_tot``.

    For 2D targets the score is computed per column and averaged.
    Constant targets have ``SS_tot == 0``; the score of such a column is
    1.0 for a perfect prediction and 0.0 otherwise.
    """
    y_true, y_pred = _check_pair(y_true, y_pred)
    y_true = y_true.astype(np.float64).reshape(y_true.shape[0], -1)
    y_pred = y_pred.astype(np.float64).reshape(y_pred.shape[0], -1)

    ss_res = np.sum((y_true - y_pred) ** 2, axis=0)
    ss_tot = np.sum((y_true - np.mean(y_true, axis=0)) ** 2, axis=0)

    scores = np.where(ss_res == 0, 1.0, 0.0)
    varying = ss_tot != 0
    scores[varying] = 1 - ss_res[varying] / ss_tot[varying]

    return float(np.mean(scores))


def accuracy_score(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Fraction of predictions equal to the true labels."""
    y_true, y_pred = _check_pair(y_true, y_pred)
    return float(np.mean(y_true == y_pred))


def mean_squared_error(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    y_true, y_pred = _check_pair(y_true, y_pred)
    return float(np.mean((y_true - y_pred) ** 2))


def relative_error(y_true: np.ndarray, y_pred: np.ndarray) -> np.ndarray:
    """Per-sample error relative to the true value, ``(y_true - y_pred) / y_true``."""
    y_true, y_pred = _check_pair(y_true, y_pred)
    if np.any(y_true == 0):
        raise ValueError("relative_error is undefined for zero true values")
    return (y_true - y_pred) / y_true


def _check_pair(y_true, y_pred):
    y_true = np.asarray(y_true)
    y_pred = np.asarray(y_pred)

    # Column vectors and flat vectors compare element-wise
    if y_true.ndim == 2 and y_true.shape[1] == 1:
        y_true = y_true.ravel()
    if y_pred.ndim == 2 and y_pred.shape[1] == 1:
        y_pred = y_pred.ravel()

    if y_true.shape != y_pred.shape:
        raise ValueError(f"Shape mismatch: y_true {y_true.shape} vs y_pred {y_pred.shape}")
    if y_true.size == 0:
        raise ValueError("Cannot score zero samples")

    return y_true, y_pred
