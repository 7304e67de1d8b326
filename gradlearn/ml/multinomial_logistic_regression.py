"""
Multinomial (softmax) logistic regression trained by gradient descent.
"""

import numpy as np

from .base import GradientDescentModel
from ..core.activations import softmax
from ..utils.data import one_hot
from ..utils.losses import Loss, CrossEntropyLoss
from ..utils.metrics import accuracy_score


class MultinomialLogisticRegression(GradientDescentModel):
    """
    Softmax regression over C classes.

    Labels are either one-hot rows of length C, in which case classes are
    the column indices ``0..C-1``, or a 1D array of class labels, which are
    one-hot encoded against their sorted unique values (``classes_``).
    Prediction picks the class with the largest softmax probability.
    """

    activation = staticmethod(softmax)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.classes_ = None

    def _loss(self) -> Loss:
        return CrossEntropyLoss()

    def _encode_targets(self, y: np.ndarray) -> np.ndarray:
        if y.ndim == 1:
            self.classes_ = np.unique(y)
            if len(self.classes_) < 2:
                raise ValueError("MultinomialLogisticRegression needs at least 2 classes")
            return one_hot(np.searchsorted(self.classes_, y), len(self.classes_))

        if y.shape[1] < 2:
            raise ValueError("One-hot labels must have at least 2 columns")

        if not (np.isin(y, (0, 1)).all() and np.all(y.sum(axis=1) == 1)):
            raise ValueError("2D labels must be one-hot rows")

        self.classes_ = np.arange(y.shape[1])
        return y

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Class probabilities of shape (n_samples, n_classes)."""
        return softmax(self.decision_function(X))

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict class labels.

        Args:
            X: Data of shape (n_samples, n_features)

        Returns:
            Labels from ``classes_`` of shape (n_samples,)
        """
        return self.classes_[np.argmax(self.predict_proba(X), axis=1)]

    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        """
        Fraction of rows of ``X`` whose predicted class matches ``y``.

        ``y`` may be one-hot rows or class labels.
        """
        y = np.asarray(y)
        if y.ndim == 2:
            y = self.classes_[np.argmax(y, axis=1)]
        return accuracy_score(y, self.predict(X))
