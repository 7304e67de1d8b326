"""Activation functions applied to the linear predictions ``X @ W``."""

import numpy as np
from typing import Callable
from scipy import special


def identity(z: np.ndarray) -> np.ndarray:
    """Identity activation (linear regression)."""
    return z


def sigmoid(z: np.ndarray) -> np.ndarray:
    """Logistic sigmoid activation."""
    return special.expit(z)


def softmax(z: np.ndarray) -> np.ndarray:
    """Row-wise softmax activation."""
    return special.softmax(z, axis=1)


def get_activation(name: str) -> Callable:
    """Get activation function by name."""
    activations = {
        'identity': identity,
        'linear': identity,
        'sigmoid': sigmoid,
        'softmax': softmax,
        None: identity
    }

    if name not in activations:
        raise ValueError(f"Unknown activation function: {name}")

    return activations[name]
