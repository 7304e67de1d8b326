"""
Learning rate adaptation for the gradlearn models.
Adjusts the learning rate after every epoch from the recorded loss history.
"""

from typing import Optional, Dict, Any, Sequence


def adapt_learning_rate(learning_rate: float, history: Sequence[float],
                        decrease_factor: float = 0.5, increase_factor: float = 1.05,
                        min_lr: Optional[float] = None, max_lr: Optional[float] = None) -> float:
    """
    Compute the next learning rate from the two most recent losses.

    The rate is halved when the latest loss is worse than the previous one
    and grown by 5% otherwise. With fewer than two losses it is unchanged.

    Args:
        learning_rate: Current learning rate
        history: Loss values, oldest first
        decrease_factor: Multiplier applied when the loss got worse
        increase_factor: Multiplier applied when the loss improved or held
        min_lr: Optional lower bound on the result
        max_lr: Optional upper bound on the result

    Returns:
        The new learning rate
    """
    if len(history) < 2:
        return learning_rate

    if history[-1] > history[-2]:
        learning_rate *= decrease_factor
    else:
        learning_rate *= increase_factor

    if min_lr is not None:
        learning_rate = max(learning_rate, min_lr)
    if max_lr is not None:
        learning_rate = min(learning_rate, max_lr)

    return learning_rate


class AdaptiveLearningRate:
    """
    Halve the learning rate when the loss worsens, grow it when it improves.

    Attached to a model by ``fit``; updates the learning rate of the
    model's optimizer at the end of every epoch.
    """

    def __init__(self, monitor: str = 'loss', decrease_factor: float = 0.5,
                 increase_factor: float = 1.05, min_lr: Optional[float] = None,
                 max_lr: Optional[float] = None, verbose: int = 0):
        """
        Initialize AdaptiveLearningRate callback.

        Args:
            monitor: Quantity to be monitored
            decrease_factor: Factor applied to the learning rate when the monitored
                             quantity increases
            increase_factor: Factor applied otherwise
            min_lr: Lower bound on the learning rate (None for unbounded)
            max_lr: Upper bound on the learning rate (None for unbounded)
            verbose: Verbosity mode (0 = silent, 1 = update messages)
        """
        if not 0 < decrease_factor < 1:
            raise ValueError("decrease_factor must be in (0, 1)")
        if increase_factor < 1:
            raise ValueError("increase_factor must be >= 1")
        if min_lr is not None and max_lr is not None and min_lr > max_lr:
            raise ValueError("min_lr must not be larger than max_lr")

        self.monitor = monitor
        self.decrease_factor = decrease_factor
        self.increase_factor = increase_factor
        self.min_lr = min_lr
        self.max_lr = max_lr
        self.verbose = verbose

        self.model = None
        self.history = []

    def set_model(self, model):
        self.model = model

    def on_train_begin(self, logs: Optional[Dict[str, Any]] = None):
        """Called at the beginning of training."""
        self.history = []

    def on_epoch_end(self, epoch: int, logs: Optional[Dict[str, Any]] = None):
        """Called at the end of each epoch."""
        logs = logs or {}
        current = logs.get(self.monitor)

        if current is None:
            raise ValueError(f"AdaptiveLearningRate conditioned on metric `{self.monitor}` "
                             f"which is not available. Available metrics are: {list(logs.keys())}")

        self.history.append(current)

        old_lr = self._get_learning_rate()
        new_lr = adapt_learning_rate(old_lr, self.history,
                                     decrease_factor=self.decrease_factor,
                                     increase_factor=self.increase_factor,
                                     min_lr=self.min_lr, max_lr=self.max_lr)
        self._set_learning_rate(new_lr)

        if self.verbose > 0 and new_lr != old_lr:
            print(f"Epoch {epoch + 1}: AdaptiveLearningRate setting learning rate "
                  f"from {old_lr:.6g} to {new_lr:.6g}.")

    def on_train_end(self, logs: Optional[Dict[str, Any]] = None):
        """Called at the end of training."""
        pass

    def _get_learning_rate(self) -> float:
        if self.model is None or self.model.optimizer_ is None:
            raise ValueError('AdaptiveLearningRate callback requires a model')
        return self.model.optimizer_.learning_rate

    def _set_learning_rate(self, lr: float):
        self.model.optimizer_.learning_rate = lr
