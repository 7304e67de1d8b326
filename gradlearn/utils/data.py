"""
Dataset helpers shared by the models.
"""

import numpy as np
from typing import Optional, Tuple


def check_features_labels(X, y) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert features and labels to float arrays and validate their shapes.

    Args:
        X: Features of shape (n_samples, n_features)
        y: Labels of shape (n_samples,) or (n_samples, n_outputs)

    Returns:
        (X, y) as float64 arrays
    """
    X = np.asarray(X, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)

    if X.ndim != 2:
        raise ValueError(f"X must be 2D of shape (n_samples, n_features), got {X.ndim}D")

    if y.ndim not in (1, 2):
        raise ValueError(f"y must be 1D or 2D, got {y.ndim}D")

    if X.shape[0] != y.shape[0]:
        raise ValueError("X and y must have the same number of samples")

    if X.shape[0] == 0:
        raise ValueError("Cannot train on zero samples")

    return X, y


def one_hot(labels, n_classes: Optional[int] = None) -> np.ndarray:
    """
    Encode integer class indices as one-hot rows.

    Args:
        labels: Class indices of shape (n_samples,)
        n_classes: Number of columns. Defaults to ``max(labels) + 1``

    Returns:
        Array of shape (n_samples, n_classes)
    """
    labels = np.asarray(labels)
    if labels.ndim != 1:
        raise ValueError("labels must be 1D")
    if not np.issubdtype(labels.dtype, np.integer):
        if not np.all(np.equal(np.mod(labels, 1), 0)):
            raise ValueError("labels must be integer class indices")
        labels = labels.astype(int)
    if labels.size and labels.min() < 0:
        raise ValueError("labels must be non-negative")

    if n_classes is None:
        n_classes = int(labels.max()) + 1 if labels.size else 0
    elif labels.size and labels.max() >= n_classes:
        raise ValueError(f"label {labels.max()} is out of range for {n_classes} classes")

    encoded = np.zeros((labels.shape[0], n_classes))
    encoded[np.arange(labels.shape[0]), labels] = 1.0
    return encoded
