"""
Shared training loop for the gradient-descent models.

Linear, logistic and multinomial logistic regression only differ in the
activation applied to ``X @ W``, the loss recorded after each epoch and the
way predictions are scored. Everything else (standardization, the bias
column, mini-batching and learning rate adaptation) lives here.
"""

import numpy as np
from abc import ABC, abstractmethod
from typing import Callable, List, Optional
from tqdm import tqdm

from ..core.activations import identity
from ..core.optimizer import GradientDescent, TrainingState
from ..core.preprocessing import StandardScaler, add_bias
from ..callbacks.learning_rate import AdaptiveLearningRate
from ..utils.data import check_features_labels
from ..utils.losses import Loss

DEFAULT_LEARNING_RATE = 0.1
DEFAULT_ITERATIONS = 1000


class GradientDescentModel(ABC):
    """
    Base class for models trained by gradient descent on standardized features.

    Subclasses set ``activation`` and implement ``_loss``, ``_encode_targets``,
    ``predict`` and ``score``.
    """

    activation: Callable = staticmethod(identity)

    def __init__(self, learning_rate: float = DEFAULT_LEARNING_RATE,
                 iterations: int = DEFAULT_ITERATIONS, batch_size: Optional[int] = None,
                 drop_last: bool = True, adaptive_learning_rate: bool = True,
                 callbacks: Optional[List] = None, verbose: bool = False):
        """
        Initialize the model.

        Args:
            learning_rate: Initial learning rate
            iterations: Number of epochs to train for
            batch_size: Rows per gradient step. None trains on the full set
            drop_last: Drop rows that do not fill a whole batch
            adaptive_learning_rate: Halve the learning rate when the loss gets worse
                                    and grow it by 5% when it improves
            callbacks: Extra callbacks called at the start/end of training and every epoch
            verbose: Show a progress bar while training
        """
        self.learning_rate = learning_rate
        self.iterations = iterations
        self.batch_size = batch_size
        self.drop_last = drop_last
        self.adaptive_learning_rate = adaptive_learning_rate
        self.callbacks = callbacks
        self.verbose = verbose

        # Set during fit
        self.scaler_ = None
        self.weights_ = None
        self.optimizer_ = None
        self.learning_rate_ = None
        self.history_ = {'loss': [], 'learning_rate': []}

        self._validate_params()

    def _validate_params(self):
        if self.learning_rate <= 0:
            raise ValueError("learning_rate must be positive")

        if self.iterations <= 0:
            raise ValueError("iterations must be positive")

        if self.batch_size is not None and self.batch_size <= 0:
            raise ValueError("batch_size must be positive")

    @abstractmethod
    def _loss(self) -> Loss:
        """Loss recorded on the training set after every epoch."""

    @abstractmethod
    def _encode_targets(self, y: np.ndarray) -> np.ndarray:
        """Turn labels into the 2D target matrix the gradient is computed against."""

    def fit(self, X: np.ndarray, y: np.ndarray):
        """
        Fit the model.

        Args:
            X: Training data of shape (n_samples, n_features)
            y: Target values

        Returns:
            self: Returns the instance itself
        """
        X, y = check_features_labels(X, y)
        targets = self._encode_targets(y)

        self.scaler_ = StandardScaler()
        design = add_bias(self.scaler_.fit_transform(X))

        self.optimizer_ = GradientDescent(learning_rate=self.learning_rate,
                                          batch_size=self.batch_size,
                                          drop_last=self.drop_last)
        self.optimizer_.check_batch_size(design.shape[0])
        loss_fn = self._loss()
        self.history_ = {'loss': [], 'learning_rate': []}

        callbacks = self._training_callbacks()
        for callback in callbacks:
            if hasattr(callback, 'set_model'):
                callback.set_model(self)
            if hasattr(callback, 'on_train_begin'):
                callback.on_train_begin()

        state = TrainingState(weights=np.zeros((design.shape[1], targets.shape[1])))

        if self.verbose:
            pbar = tqdm(range(self.iterations), desc=f"Training {self.__class__.__name__}")
        else:
            pbar = range(self.iterations)

        for epoch in pbar:
            learning_rate = self.optimizer_.learning_rate
            state = self.optimizer_.run_epoch(state, design, targets, self.activation)

            loss = loss_fn(targets, self.activation(design @ state.weights))
            self.history_['loss'].append(loss)
            self.history_['learning_rate'].append(learning_rate)

            if self.verbose:
                pbar.set_postfix({'loss': f'{loss:.4f}', 'lr': f'{learning_rate:.4g}'})

            logs = {'loss': loss, 'learning_rate': learning_rate}
            for callback in callbacks:
                if hasattr(callback, 'on_epoch_end'):
                    callback.on_epoch_end(epoch, logs)

        for callback in callbacks:
            if hasattr(callback, 'on_train_end'):
                callback.on_train_end()

        self.weights_ = state.weights
        self.learning_rate_ = self.optimizer_.learning_rate
        return self

    def _training_callbacks(self) -> List:
        callbacks = list(self.callbacks or [])
        has_adaptive = any(isinstance(c, AdaptiveLearningRate) for c in callbacks)
        if self.adaptive_learning_rate and not has_adaptive:
            callbacks.insert(0, AdaptiveLearningRate())
        return callbacks

    def decision_function(self, X: np.ndarray) -> np.ndarray:
        """
        Linear predictions ``X @ W`` before the activation.

        Args:
            X: Data of shape (n_samples, n_features)

        Returns:
            Array of shape (n_samples, n_outputs)
        """
        if self.weights_ is None:
            raise ValueError("Model must be fitted before making predictions")

        return add_bias(self.scaler_.transform(X)) @ self.weights_

    @abstractmethod
    def predict(self, X: np.ndarray) -> np.ndarray:
        pass

    @abstractmethod
    def score(self, X: np.ndarray, y: np.ndarray) -> float:
        pass

    @property
    def cost_history(self) -> List[float]:
        """Per-epoch training loss, oldest first."""
        return self.history_['loss']

    def get_params(self, deep: bool = True) -> dict:
        """
        Get parameters for this estimator.

        Args:
            deep: If True, return parameters for sub-estimators too

        Returns:
            Parameter names mapped to their values
        """
        return {
            'learning_rate': self.learning_rate,
            'iterations': self.iterations,
            'batch_size': self.batch_size,
            'drop_last': self.drop_last,
            'adaptive_learning_rate': self.adaptive_learning_rate,
            'callbacks': self.callbacks,
            'verbose': self.verbose
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
