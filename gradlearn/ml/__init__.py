"""Machine learning algorithms implemented from scratch."""

from .base import GradientDescentModel
from .linear_regression import LinearRegression
from .logistic_regression import LogisticRegression
from .multinomial_logistic_regression import MultinomialLogisticRegression
from .knn import (KNN, KNeighborsClassifier, KNeighborsRegressor,
                  k_nearest, knn_regression, knn_classification, majority_vote)
from .model_selection import split_dataset, k_accuracy_sweep

__all__ = [
    'GradientDescentModel', 'LinearRegression', 'LogisticRegression',
    'MultinomialLogisticRegression',
    'KNN', 'KNeighborsClassifier', 'KNeighborsRegressor',
    'k_nearest', 'knn_regression', 'knn_classification', 'majority_vote',
    'split_dataset', 'k_accuracy_sweep'
]
