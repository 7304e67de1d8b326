"""
Feature preprocessing for the gradlearn models.
Standardizes features with frozen training statistics and adds the bias column.
"""

import numpy as np
from typing import Optional


class StandardScaler:
    """
    Scale features to zero mean and unit variance.

    Statistics are computed once by ``fit`` and reused verbatim by every
    later ``transform`` call, so test data is always scaled with the
    training mean and variance.
    """

    def __init__(self):
        self.mean_: Optional[np.ndarray] = None
        self.variance_: Optional[np.ndarray] = None
        self.n_features_in_: Optional[int] = None

    @property
    def is_fitted(self) -> bool:
        return self.mean_ is not None and self.variance_ is not None

    def fit(self, X: np.ndarray) -> 'StandardScaler':
        """
        Compute the per-column mean and variance of ``X``.

        Args:
            X: Training data of shape (n_samples, n_features)

        Returns:
            self: Returns the instance itself
        """
        X = _as_matrix(X)
        if X.shape[0] == 0:
            raise ValueError("Cannot fit StandardScaler on an empty array")

        mean = X.mean(axis=0)
        variance = X.var(axis=0)

        # Columns without spread are centred on their value and divided by 1
        constant = np.ptp(X, axis=0) == 0
        mean[constant] = X[0, constant]
        variance[constant | (variance == 0)] = 1.0

        self.mean_ = mean
        self.variance_ = variance
        self.n_features_in_ = X.shape[1]
        return self

    def transform(self, X: np.ndarray) -> np.ndarray:
        """
        Standardize ``X`` with the stored statistics.

        Args:
            X: Data of shape (n_samples, n_features)

        Returns:
            Standardized data of the same shape
        """
        if not self.is_fitted:
            raise ValueError("StandardScaler must be fitted before calling transform")

        X = _as_matrix(X)
        if X.shape[1] != self.n_features_in_:
            raise ValueError(f"X has {X.shape[1]} features, but StandardScaler was fitted with "
                             f"{self.n_features_in_} features")

        return (X - self.mean_) / np.sqrt(self.variance_)

    def fit_transform(self, X: np.ndarray) -> np.ndarray:
        return self.fit(X).transform(X)


def add_bias(X: np.ndarray) -> np.ndarray:
    """Prepend a column of ones (the intercept term) to ``X``."""
    X = _as_matrix(X)
    return np.hstack([np.ones((X.shape[0], 1)), X])


def _as_matrix(X) -> np.ndarray:
    X = np.asarray(X, dtype=np.float64)
    if X.ndim != 2:
        raise ValueError(f"Expected a 2D array of shape (n_samples, n_features), got {X.ndim}D")
    return X
