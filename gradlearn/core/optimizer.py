"""
Optimizers for the gradlearn models.
Provides batch and mini-batch gradient descent over an explicit weight state.
"""

import numpy as np
import warnings
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Any, Iterator, Optional


@dataclass
class TrainingState:
    """Weights and progress handed from one epoch to the next."""

    weights: np.ndarray
    epoch: int = 0


class Optimizer(ABC):
    """
    Abstract base class for all optimizers.

    All optimizers should inherit from this class and implement the step method.
    """

    def __init__(self, learning_rate: float = 0.1):
        """
        Initialize the optimizer.

        Args:
            learning_rate: Learning rate for the optimizer
        """
        if learning_rate <= 0:
            raise ValueError("learning_rate must be positive")

        self.learning_rate = learning_rate
        self.steps = 0

    @abstractmethod
    def step(self, weights: np.ndarray, X: np.ndarray, y: np.ndarray,
             activation: Callable) -> np.ndarray:
        """
        Perform a single optimization step.

        Args:
            weights: Current weight matrix of shape (n_features, n_outputs)
            X: Design matrix of the batch
            y: Targets of the batch
            activation: Activation applied to ``X @ weights``

        Returns:
            The updated weight matrix
        """
        pass

    def get_config(self) -> Dict[str, Any]:
        """Get optimizer configuration."""
        return {
            'learning_rate': self.learning_rate,
            'steps': self.steps
        }


class GradientDescent(Optimizer):
    """
    Gradient descent on ``activation(X @ W)`` with optional mini-batches.

    The gradient ``X.T @ (activation(X @ W) - y) / n`` is shared by linear,
    logistic and softmax regression; only the activation differs.
    """

    def __init__(self, learning_rate: float = 0.1, batch_size: Optional[int] = None,
                 drop_last: bool = True):
        """
        Initialize gradient descent.

        Args:
            learning_rate: Learning rate
            batch_size: Rows per batch. None uses the whole training set
            drop_last: Drop the rows that do not fill a whole batch instead
                       of training on them as a final, shorter batch
        """
        super().__init__(learning_rate)
        if batch_size is not None and batch_size <= 0:
            raise ValueError("batch_size must be positive")

        self.batch_size = batch_size
        self.drop_last = drop_last

    @staticmethod
    def compute_gradient(weights: np.ndarray, X: np.ndarray, y: np.ndarray,
                         activation: Callable) -> np.ndarray:
        """Gradient of the loss for the given batch."""
        differences = activation(X @ weights) - y
        return X.T @ differences / X.shape[0]

    def step(self, weights: np.ndarray, X: np.ndarray, y: np.ndarray,
             activation: Callable) -> np.ndarray:
        """Perform a gradient descent step and return the new weights."""
        gradients = self.compute_gradient(weights, X, y, activation)
        self.steps += 1
        return weights - self.learning_rate * gradients

    def batches(self, n_samples: int) -> Iterator[slice]:
        """
        Yield contiguous row slices covering one epoch.

        Args:
            n_samples: Number of training rows

        Returns:
            Iterator of slices, in order
        """
        if self.batch_size is None:
            yield slice(0, n_samples)
            return

        n_batches = self._full_batches(n_samples)
        for j in range(n_batches):
            start = j * self.batch_size
            yield slice(start, start + self.batch_size)

        remainder = n_samples - n_batches * self.batch_size
        if remainder and not self.drop_last:
            yield slice(n_batches * self.batch_size, n_samples)

    def _full_batches(self, n_samples: int) -> int:
        if self.batch_size > n_samples:
            raise ValueError(f"batch_size ({self.batch_size}) is larger than "
                             f"the number of samples ({n_samples})")
        return n_samples // self.batch_size

    def check_batch_size(self, n_samples: int):
        """Validate the batch size against the training set and warn about dropped rows."""
        if self.batch_size is None:
            return

        remainder = n_samples - self._full_batches(n_samples) * self.batch_size
        if remainder and self.drop_last:
            warnings.warn(f"batch_size ({self.batch_size}) does not divide the number of "
                          f"samples ({n_samples}); the last {remainder} rows are dropped "
                          f"from every epoch. Pass drop_last=False to train on them.")

    def run_epoch(self, state: TrainingState, X: np.ndarray, y: np.ndarray,
                  activation: Callable) -> TrainingState:
        """Apply one step per batch, in order, and return the next state."""
        weights = state.weights
        for batch in self.batches(X.shape[0]):
            weights = self.step(weights, X[batch], y[batch], activation)

        return TrainingState(weights=weights, epoch=state.epoch + 1)

    def get_config(self) -> Dict[str, Any]:
        """Get gradient descent configuration."""
        config = super().get_config()
        config.update({
            'batch_size': self.batch_size,
            'drop_last': self.drop_last
        })
        return config
