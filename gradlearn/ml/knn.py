"""
K-Nearest Neighbors for gradlearn.
Supports both classification and regression tasks.
"""

import numpy as np
from typing import Optional, Tuple, Union

from ..core.preprocessing import StandardScaler
from ..utils.metrics import accuracy_score, r2_score

METRICS = ['euclidean', 'manhattan', 'minkowski', 'chebyshev', 'cosine']


def compute_distances(point: np.ndarray, X: np.ndarray, metric: str = 'euclidean',
                      p: int = 2) -> np.ndarray:
    """
    Compute distances between a point and a set of points.

    With a single feature the euclidean distance is the absolute difference.

    Args:
        point: Single point of shape (n_features,)
        X: Set of points of shape (n_samples, n_features)
        metric: Distance metric
        p: Parameter for the Minkowski metric

    Returns:
        Distances of shape (n_samples,)
    """
    if metric == 'euclidean':
        return np.sqrt(np.sum((X - point) ** 2, axis=1))
    elif metric == 'manhattan':
        return np.sum(np.abs(X - point), axis=1)
    elif metric == 'minkowski':
        return np.sum(np.abs(X - point) ** p, axis=1) ** (1 / p)
    elif metric == 'chebyshev':
        return np.max(np.abs(X - point), axis=1)
    elif metric == 'cosine':
        # Cosine distance = 1 - cosine similarity
        dot_product = np.dot(X, point)
        norms = np.linalg.norm(X, axis=1) * np.linalg.norm(point)
        cosine_sim = dot_product / (norms + 1e-8)
        return 1 - cosine_sim
    else:
        raise ValueError(f"Unknown metric: {metric}")


def majority_vote(labels: np.ndarray, weights: Optional[np.ndarray] = None):
    """
    Most voted label. Ties go to the smallest label.

    Args:
        labels: Labels of the neighbors
        weights: Optional vote weight per neighbor

    Returns:
        The winning label
    """
    labels = np.asarray(labels)
    if weights is None:
        weights = np.ones(len(labels))

    # np.unique sorts, and argmax returns the first maximum
    classes = np.unique(labels)
    votes = np.array([np.sum(weights[labels == c]) for c in classes])
    return classes[np.argmax(votes)]


def k_nearest(features, labels, point, k: int, metric: str = 'euclidean',
              p: int = 2) -> Tuple[np.ndarray, np.ndarray]:
    """
    Labels and distances of the ``k`` training rows closest to ``point``.

    Rows at equal distance keep their training order.

    Args:
        features: Training data of shape (n_samples, n_features), or (n_samples,)
                  for a single feature
        labels: Training labels of shape (n_samples,)
        point: Query point of shape (n_features,)
        k: Number of neighbors
        metric: Distance metric
        p: Parameter for the Minkowski metric

    Returns:
        (labels, distances) of the k nearest rows, closest first
    """
    features = np.asarray(features, dtype=np.float64)
    if features.ndim == 1:
        features = features.reshape(-1, 1)
    labels = np.asarray(labels)
    if labels.ndim == 2 and labels.shape[1] == 1:
        labels = labels.ravel()
    point = np.atleast_1d(np.asarray(point, dtype=np.float64))

    if features.shape[0] != labels.shape[0]:
        raise ValueError("features and labels must have the same number of samples")

    if point.shape != (features.shape[1],):
        raise ValueError(f"point has shape {point.shape}, expected ({features.shape[1]},)")

    _check_k(k, features.shape[0])

    distances = compute_distances(point, features, metric, p)
    nearest = np.argsort(distances, kind='stable')[:k]
    return labels[nearest], distances[nearest]


def knn_regression(features, labels, point, k: int, metric: str = 'euclidean',
                   p: int = 2) -> float:
    """Mean label of the ``k`` nearest neighbors of ``point``."""
    nearest_labels, _ = k_nearest(features, labels, point, k, metric, p)
    return float(np.mean(nearest_labels))


def knn_classification(features, labels, point, k: int, metric: str = 'euclidean',
                       p: int = 2):
    """Majority label of the ``k`` nearest neighbors of ``point``."""
    nearest_labels, _ = k_nearest(features, labels, point, k, metric, p)
    return majority_vote(nearest_labels)


def _check_k(k: int, n_samples: int):
    if k <= 0:
        raise ValueError("n_neighbors must be positive")

    if k > n_samples:
        raise ValueError(f"n_neighbors ({k}) is larger than "
                         f"the number of samples ({n_samples})")


class KNN:
    """
    K-Nearest Neighbors classifier and regressor.

    This implementation supports both classification and regression tasks
    using various distance metrics and weighting schemes.
    """

    _task_is_classification = None

    def __init__(self, n_neighbors: int = 5, weights: str = 'uniform',
                 p: int = 2, metric: str = 'minkowski', standardize: bool = False):
        """
        Initialize KNN classifier/regressor.

        Args:
            n_neighbors: Number of neighbors to use
            weights: Weight function used in prediction ('uniform', 'distance')
            p: Parameter for the Minkowski metric
            metric: Distance metric to use
            standardize: Scale features with the training mean and variance
                         before measuring distances
        """
        self.n_neighbors = n_neighbors
        self.weights = weights
        self.p = p
        self.metric = metric
        self.standardize = standardize

        # Training data
        self.X_train = None
        self.y_train = None
        self.scaler_ = None
        self.is_classifier = None

        self._validate_params()

    def _validate_params(self):
        if self.n_neighbors <= 0:
            raise ValueError("n_neighbors must be positive")

        if self.weights not in ['uniform', 'distance']:
            raise ValueError("weights must be 'uniform' or 'distance'")

        if self.metric not in METRICS:
            raise ValueError(f"Unknown metric: {self.metric}")

    def fit(self, X: np.ndarray, y: np.ndarray):
        """
        Fit the KNN model.

        Args:
            X: Training data of shape (n_samples, n_features)
            y: Target values of shape (n_samples,)

        Returns:
            self: Returns the instance itself
        """
        X = np.asarray(X, dtype=np.float64)
        y = np.asarray(y)

        if X.ndim != 2:
            raise ValueError(f"X must be 2D of shape (n_samples, n_features), got {X.ndim}D")

        if X.shape[0] != y.shape[0]:
            raise ValueError("X and y must have the same number of samples")

        if y.ndim > 2 or (y.ndim == 2 and y.shape[1] != 1):
            raise ValueError(f"KNN expects a single label column, got shape {y.shape}")

        _check_k(self.n_neighbors, X.shape[0])

        if self.standardize:
            self.scaler_ = StandardScaler().fit(X)
            X = self.scaler_.transform(X)
        else:
            self.scaler_ = None

        self.X_train = X.copy()
        self.y_train = y.ravel().copy()

        # Determine if this is a classification or regression problem
        if self._task_is_classification is not None:
            self.is_classifier = self._task_is_classification
        else:
            self.is_classifier = bool(not np.issubdtype(self.y_train.dtype, np.number)
                                      or np.issubdtype(self.y_train.dtype, np.integer)
                                      or len(np.unique(self.y_train)) < 0.1 * len(self.y_train))

        return self

    def _prepare(self, X: np.ndarray) -> np.ndarray:
        if self.X_train is None:
            raise ValueError("Model must be fitted before making predictions")

        X = np.asarray(X, dtype=np.float64)

        if X.ndim != 2 or X.shape[1] != self.X_train.shape[1]:
            raise ValueError(f"X must have shape (n_samples, {self.X_train.shape[1]}), "
                             f"got {X.shape}")

        return self.scaler_.transform(X) if self.scaler_ is not None else X

    def _neighbors(self, x: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        return k_nearest(self.X_train, self.y_train, x, self.n_neighbors,
                         metric=self.metric, p=self.p)

    def _vote_weights(self, distances: np.ndarray) -> np.ndarray:
        if self.weights == 'uniform':
            return np.ones(len(distances))
        # Small epsilon avoids division by zero for exact matches
        return 1 / (distances + 1e-8)

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict the target for the provided data.

        Args:
            X: Test data of shape (n_samples, n_features)

        Returns:
            Predicted values of shape (n_samples,)
        """
        X = self._prepare(X)

        predictions = []
        for x in X:
            labels, distances = self._neighbors(x)
            weights = self._vote_weights(distances)

            if self.is_classifier:
                predictions.append(majority_vote(labels, weights))
            else:
                predictions.append(np.average(labels, weights=weights))

        return np.array(predictions)

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """
        Return prediction probabilities for classification.

        Args:
            X: Test data of shape (n_samples, n_features)

        Returns:
            Probability estimates of shape (n_samples, n_classes), columns in
            sorted class order
        """
        if not self.is_classifier:
            raise ValueError("predict_proba is only available for classification")

        X = self._prepare(X)
        classes = np.unique(self.y_train)
        probabilities = []

        for x in X:
            labels, distances = self._neighbors(x)
            weights = self._vote_weights(distances)

            class_probs = np.array([np.sum(weights[labels == c]) for c in classes])
            probabilities.append(class_probs / np.sum(class_probs))

        return np.array(probabilities)

    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        """
        Return the mean accuracy (classification) or R² score (regression).

        Args:
            X: Test data of shape (n_samples, n_features)
            y: True values of shape (n_samples,)

        Returns:
            Score (accuracy for classification, R² for regression)
        """
        predictions = self.predict(X)
        y = np.asarray(y).ravel()

        if self.is_classifier:
            return accuracy_score(y, predictions)
        return r2_score(y, predictions)

    def kneighbors(self, X: Optional[np.ndarray] = None, n_neighbors: Optional[int] = None,
                   return_distance: bool = True) -> Union[np.ndarray, Tuple[np.ndarray, np.ndarray]]:
        """
        Find the K-neighbors of a point.

        Args:
            X: Query points. If None, use training data
            n_neighbors: Number of neighbors to get. If None, use self.n_neighbors
            return_distance: Whether to return distances

        Returns:
            distances, indices (if return_distance=True) or just indices
        """
        if self.X_train is None:
            raise ValueError("Model must be fitted before calling kneighbors")

        X = self.X_train if X is None else self._prepare(X)
        n_neighbors = self.n_neighbors if n_neighbors is None else n_neighbors
        _check_k(n_neighbors, self.X_train.shape[0])

        distances_list = []
        indices_list = []

        for x in X:
            distances = compute_distances(x, self.X_train, self.metric, self.p)
            k_nearest_indices = np.argsort(distances, kind='stable')[:n_neighbors]

            distances_list.append(distances[k_nearest_indices])
            indices_list.append(k_nearest_indices)

        distances_array = np.array(distances_list)
        indices_array = np.array(indices_list)

        if return_distance:
            return distances_array, indices_array
        return indices_array

    def get_params(self, deep: bool = True) -> dict:
        """
        Get parameters for this estimator.

        Args:
            deep: If True, return parameters for sub-estimators too

        Returns:
            Parameter names mapped to their values
        """
        return {
            'n_neighbors': self.n_neighbors,
            'weights': self.weights,
            'p': self.p,
            'metric': self.metric,
            'standardize': self.standardize
        }

    def set_params(self, **params):
        """
        Set the parameters of this estimator.

        Args:
            **params: Estimator parameters

        Returns:
            self: Estimator instance
        """
        valid = self.get_params()
        for key, value in params.items():
            if key not in valid:
                raise ValueError(f"Invalid parameter {key}")
            setattr(self, key, value)

        self._validate_params()
        return self


class KNeighborsClassifier(KNN):
    """
    K-Nearest Neighbors classifier.

    This is a specialized version of KNN for classification tasks.
    """

    _task_is_classification = True

    def __init__(self, n_neighbors: int = 5, weights: str = 'uniform',
                 p: int = 2, metric: str = 'minkowski', standardize: bool = False):
        """Initialize KNN classifier."""
        super().__init__(n_neighbors, weights, p, metric, standardize)
        self.is_classifier = True


class KNeighborsRegressor(KNN):
    """
    K-Nearest Neighbors regressor.

    This is a specialized version of KNN for regression tasks.
    """

    _task_is_classification = False

    def __init__(self, n_neighbors: int = 5, weights: str = 'uniform',
                 p: int = 2, metric: str = 'minkowski', standardize: bool = False):
        """Initialize KNN regressor."""
        super().__init__(n_neighbors, weights, p, metric, standardize)
        self.is_classifier = False
