"""
Binary logistic regression trained by gradient descent.
"""

import numpy as np

from .base import GradientDescentModel, DEFAULT_LEARNING_RATE, DEFAULT_ITERATIONS
from ..core.activations import sigmoid
from ..utils.losses import Loss, BCELoss
from ..utils.metrics import accuracy_score

DEFAULT_DECISION_BOUNDARY = 0.5


class LogisticRegression(GradientDescentModel):
    """
    Binary logistic regression.

    Labels must be 0 or 1. A row is predicted as 1 when its probability
    is strictly greater than ``decision_boundary``.
    """

    activation = staticmethod(sigmoid)

    def __init__(self, learning_rate: float = DEFAULT_LEARNING_RATE,
                 iterations: int = DEFAULT_ITERATIONS, batch_size=None, drop_last: bool = True,
                 decision_boundary: float = DEFAULT_DECISION_BOUNDARY,
                 adaptive_learning_rate: bool = True, callbacks=None, verbose: bool = False):
        """
        Initialize logistic regression.

        Args:
            learning_rate: Initial learning rate
            iterations: Number of epochs to train for
            batch_size: Rows per gradient step. None trains on the full set
            drop_last: Drop rows that do not fill a whole batch
            decision_boundary: Probability above which a row is classified as 1
            adaptive_learning_rate: Adapt the learning rate from the cost history
            callbacks: Extra training callbacks
            verbose: Show a progress bar while training
        """
        self.decision_boundary = decision_boundary
        super().__init__(learning_rate=learning_rate, iterations=iterations,
                         batch_size=batch_size, drop_last=drop_last,
                         adaptive_learning_rate=adaptive_learning_rate,
                         callbacks=callbacks, verbose=verbose)

    def _validate_params(self):
        super()._validate_params()
        if not 0 < self.decision_boundary < 1:
            raise ValueError("decision_boundary must be in (0, 1)")

    def _loss(self) -> Loss:
        return BCELoss()

    def _encode_targets(self, y: np.ndarray) -> np.ndarray:
        if y.ndim == 2 and y.shape[1] != 1:
            raise ValueError(f"LogisticRegression expects a single label column, got {y.shape[1]}")

        if not np.isin(y, (0, 1)).all():
            raise ValueError("LogisticRegression labels must be 0 or 1")

        return y.reshape(-1, 1)

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """Probability of the positive class for every row, shape (n_samples,)."""
        return sigmoid(self.decision_function(X)).ravel()

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict 0/1 labels.

        Args:
            X: Data of shape (n_samples, n_features)

        Returns:
            Integer labels of shape (n_samples,)
        """
        return (self.predict_proba(X) > self.decision_boundary).astype(int)

    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        """Fraction of rows of ``X`` classified correctly."""
        return accuracy_score(y, self.predict(X))

    def get_params(self, deep: bool = True) -> dict:
        params = super().get_params(deep)
        params['decision_boundary'] = self.decision_boundary
        return params
