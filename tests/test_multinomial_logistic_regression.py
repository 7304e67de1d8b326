import numpy as np
import pytest

from gradlearn.ml.multinomial_logistic_regression import MultinomialLogisticRegression
from gradlearn.utils.data import one_hot


def test_separable_clusters_with_one_hot_labels(three_clusters):
    X, y = three_clusters
    Y = one_hot(y, 3)
    X_train, Y_train, X_test, y_test = X[:90], Y[:90], X[90:], y[90:]

    model = MultinomialLogisticRegression(learning_rate=0.5, iterations=100, batch_size=10)
    model.fit(X_train, Y_train)

    assert model.weights_.shape == (3, 3)
    assert np.array_equal(model.predict(X_test), y_test)
    assert model.score(X_test, one_hot(y_test, 3)) == 1.0


def test_class_labels_are_encoded(three_clusters):
    X, y = three_clusters
    labels = np.array([10, 20, 30])[y]

    model = MultinomialLogisticRegression(iterations=50).fit(X, labels)

    assert np.array_equal(model.classes_, [10, 20, 30])
    assert np.array_equal(model.predict(X), labels)
    assert model.score(X, labels) == 1.0


def test_predict_proba_rows_sum_to_one(three_clusters):
    X, y = three_clusters

    probabilities = MultinomialLogisticRegression(iterations=10).fit(X, y).predict_proba(X)

    assert probabilities.shape == (len(y), 3)
    assert np.allclose(probabilities.sum(axis=1), 1.0)


def test_cost_history_decreases(three_clusters):
    X, y = three_clusters

    model = MultinomialLogisticRegression(learning_rate=0.1, iterations=30).fit(X, y)

    assert len(model.cost_history) == 30
    assert model.cost_history[-1] < model.cost_history[0]


def test_rows_that_are_not_one_hot_raise(three_clusters):
    X, _ = three_clusters
    labels = np.full((len(X), 3), 0.5)

    with pytest.raises(ValueError, match="one-hot"):
        MultinomialLogisticRegression().fit(X, labels)


def test_single_class_raises():
    with pytest.raises(ValueError, match="at least 2 classes"):
        MultinomialLogisticRegression().fit(np.arange(6.0).reshape(3, 2), np.ones(3))
