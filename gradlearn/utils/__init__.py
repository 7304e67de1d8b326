"""Metrics, losses and data helpers."""

from .metrics import r2_score, accuracy_score, mean_squared_error, relative_error
from .losses import Loss, MSELoss, BCELoss, CrossEntropyLoss
from .data import check_features_labels, one_hot
from .buffer import ObservationBuffer
from .visualization import plot_history

__all__ = [
    'r2_score', 'accuracy_score', 'mean_squared_error', 'relative_error',
    'Loss', 'MSELoss', 'BCELoss', 'CrossEntropyLoss',
    'check_features_labels', 'one_hot', 'ObservationBuffer', 'plot_history'
]
