"""
Loss functions for the gradlearn models.
Each loss maps (y_true, y_pred) to a scalar recorded once per epoch.
"""

import numpy as np
from abc import ABC, abstractmethod

EPSILON = 1e-7


class Loss(ABC):
    """Abstract base class for losses."""

    @abstractmethod
    def __call__(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        pass


class MSELoss(Loss):
    """Mean squared error, summed over outputs and averaged over rows."""

    def __call__(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        y_true, y_pred = _as_pair(y_true, y_pred)
        return float(np.sum((y_pred - y_true) ** 2) / y_true.shape[0])


class BCELoss(Loss):
    """
    Binary cross-entropy.

    ``epsilon`` is added inside both logarithms so a saturated prediction
    of exactly 0 or 1 still yields a finite loss.
    """

    def __init__(self, epsilon: float = EPSILON):
        self.epsilon = epsilon

    def __call__(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        y_true, y_pred = _as_pair(y_true, y_pred)
        term_one = y_true * np.log(y_pred + self.epsilon)
        term_two = (1 - y_true) * np.log(1 - y_pred + self.epsilon)
        return float(-np.sum(term_one + term_two) / y_true.shape[0])


class CrossEntropyLoss(Loss):
    """Categorical cross-entropy for one-hot targets and softmax predictions."""

    def __init__(self, epsilon: float = EPSILON):
        self.epsilon = epsilon

    def __call__(self, y_true: np.ndarray, y_pred: np.ndarray) -> float:
        y_true, y_pred = _as_pair(y_true, y_pred)
        return float(-np.sum(y_true * np.log(y_pred + self.epsilon)) / y_true.shape[0])


def _as_pair(y_true, y_pred):
    y_true = np.asarray(y_true, dtype=np.float64)
    y_pred = np.asarray(y_pred, dtype=np.float64)
    if y_true.shape != y_pred.shape:
        raise ValueError(f"Shape mismatch: y_true {y_true.shape} vs y_pred {y_pred.shape}")
    if y_true.shape[0] == 0:
        raise ValueError("Cannot compute a loss on zero samples")
    return y_true, y_pred
