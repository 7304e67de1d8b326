"""
Linear regression trained by gradient descent.
"""

import numpy as np

from .base import GradientDescentModel
from ..core.activations import identity
from ..utils.losses import Loss, MSELoss
from ..utils.metrics import r2_score


class LinearRegression(GradientDescentModel):
    """
    Ordinary least squares fitted with (mini-)batch gradient descent.

    Features are standardized with the training statistics and a bias
    column is prepended, so ``weights_[0]`` is the intercept in
    standardized space. The mean squared error of every epoch is kept in
    ``history_['loss']``.
    """

    activation = staticmethod(identity)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._flat_targets = True

    def _loss(self) -> Loss:
        return MSELoss()

    def _encode_targets(self, y: np.ndarray) -> np.ndarray:
        self._flat_targets = y.ndim == 1
        return y.reshape(-1, 1) if y.ndim == 1 else y

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        Predict targets for ``X``.

        Args:
            X: Data of shape (n_samples, n_features)

        Returns:
            Predictions shaped like the training labels
        """
        predictions = self.decision_function(X)
        return predictions.ravel() if self._flat_targets else predictions

    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        """Coefficient of determination R² of the predictions on ``X``."""
        return r2_score(y, self.predict(X))

    @property
    def mse_history(self):
        return self.history_['loss']
