"""
gradlearn - classic supervised learning on NumPy.

This package provides:
- Linear, logistic and multinomial logistic regression trained by gradient descent
- Feature standardization with frozen training statistics
- An adaptive learning rate driven by the per-epoch loss
- K-nearest neighbors classification and regression, and a k-accuracy sweep
"""

__version__ = "0.1.0"

# Core imports
from gradlearn.core.preprocessing import StandardScaler, add_bias
from gradlearn.core.optimizer import GradientDescent

# ML algorithms
from gradlearn.ml.linear_regression import LinearRegression
from gradlearn.ml.logistic_regression import LogisticRegression
from gradlearn.ml.multinomial_logistic_regression import MultinomialLogisticRegression
from gradlearn.ml.knn import KNN, KNeighborsClassifier, KNeighborsRegressor, knn_regression, knn_classification
from gradlearn.ml.model_selection import split_dataset, k_accuracy_sweep

# Utilities
from gradlearn.utils.losses import MSELoss, BCELoss, CrossEntropyLoss
from gradlearn.utils.metrics import r2_score, accuracy_score
from gradlearn.utils.buffer import ObservationBuffer
from gradlearn.callbacks.learning_rate import AdaptiveLearningRate

__all__ = [
    # Core
    'StandardScaler', 'add_bias', 'GradientDescent',

    # ML
    'LinearRegression', 'LogisticRegression', 'MultinomialLogisticRegression',
    'KNN', 'KNeighborsClassifier', 'KNeighborsRegressor', 'knn_regression', 'knn_classification',
    'split_dataset', 'k_accuracy_sweep',

    # Utils
    'MSELoss', 'BCELoss', 'CrossEntropyLoss', 'r2_score', 'accuracy_score',
    'ObservationBuffer', 'AdaptiveLearningRate'
]
