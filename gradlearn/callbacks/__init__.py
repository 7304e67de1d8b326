"""Callbacks for training the gradient-descent models."""

from .learning_rate import AdaptiveLearningRate, adapt_learning_rate

__all__ = ['AdaptiveLearningRate', 'adapt_learning_rate']
