"""Core building blocks: preprocessing, activations and optimizers."""

from .preprocessing import StandardScaler, add_bias
from .activations import identity, sigmoid, softmax, get_activation
from .optimizer import Optimizer, GradientDescent, TrainingState

__all__ = [
    'StandardScaler', 'add_bias',
    'identity', 'sigmoid', 'softmax', 'get_activation',
    'Optimizer', 'GradientDescent', 'TrainingState'
]
