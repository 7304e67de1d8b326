"""
Train/test splitting and the k-accuracy sweep for KNN.
"""

import numpy as np
from typing import Iterable, List, Optional, Tuple
from sklearn.model_selection import train_test_split

from .knn import KNeighborsClassifier


def split_dataset(features, labels, test_size: int, shuffle: bool = True,
                  random_state: Optional[int] = None
                  ) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Split features and labels into a training part and a fixed-size test part.

    Args:
        features: Data of shape (n_samples, n_features)
        labels: Labels of shape (n_samples,) or (n_samples, n_outputs)
        test_size: Number of rows to hold out
        shuffle: Shuffle rows before splitting
        random_state: Seed for the shuffle

    Returns:
        (train_features, train_labels, test_features, test_labels)
    """
    features = np.asarray(features)
    labels = np.asarray(labels)

    if features.shape[0] != labels.shape[0]:
        raise ValueError("features and labels must have the same number of samples")

    if not 0 < test_size < features.shape[0]:
        raise ValueError(f"test_size must be between 1 and {features.shape[0] - 1}, "
                         f"got {test_size}")

    train_features, test_features, train_labels, test_labels = train_test_split(
        features, labels, test_size=test_size, shuffle=shuffle, random_state=random_state
    )
    return train_features, train_labels, test_features, test_labels


def k_accuracy_sweep(features, labels, k_values: Iterable[int] = range(1, 25),
                     test_size: int = 100, random_state: Optional[int] = None,
                     **knn_params) -> List[Tuple[int, float]]:
    """
    Classification accuracy of KNN for several values of k.

    The data is shuffled and split once; every k is evaluated on the same
    held-out rows so the results are comparable.

    Args:
        features: Data of shape (n_samples, n_features)
        labels: Class labels of shape (n_samples,)
        k_values: Values of k to try
        test_size: Number of held-out rows
        random_state: Seed for the shuffle
        **knn_params: Extra parameters for KNeighborsClassifier (metric, weights, ...)

    Returns:
        List of (k, accuracy) pairs in the order of ``k_values``
    """
    features = np.asarray(features, dtype=np.float64)
    if features.ndim == 1:
        features = features.reshape(-1, 1)

    train_features, train_labels, test_features, test_labels = split_dataset(
        features, labels, test_size, shuffle=True, random_state=random_state
    )

    results = []
    for k in k_values:
        model = KNeighborsClassifier(n_neighbors=k, **knn_params)
        model.fit(train_features, train_labels)
        results.append((k, model.score(test_features, test_labels)))

    return results
