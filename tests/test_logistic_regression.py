import numpy as np
import pytest

from gradlearn.ml.logistic_regression import LogisticRegression


def test_separable_clusters_reach_full_accuracy(two_clusters):
    X, y = two_clusters
    X_train, y_train, X_test, y_test = X[:100], y[:100], X[100:], y[100:]

    model = LogisticRegression(learning_rate=0.5, iterations=50, batch_size=10)
    model.fit(X_train, y_train)

    assert model.score(X_test, y_test) == 1.0
    assert model.score(X_train, y_train) == 1.0


def test_column_labels_are_accepted(two_clusters):
    X, y = two_clusters

    model = LogisticRegression(iterations=20).fit(X, y.reshape(-1, 1))

    assert model.weights_.shape == (3, 1)
    assert model.score(X, y.reshape(-1, 1)) == 1.0


def test_predict_proba_in_unit_interval(two_clusters):
    X, y = two_clusters

    model = LogisticRegression(iterations=20).fit(X, y)
    probabilities = model.predict_proba(X)

    assert probabilities.shape == (len(y),)
    assert np.all((probabilities >= 0) & (probabilities <= 1))


def test_predictions_are_zero_or_one(two_clusters):
    X, y = two_clusters

    predictions = LogisticRegression(iterations=10).fit(X, y).predict(X)

    assert set(np.unique(predictions)) <= {0, 1}


def test_decision_boundary_controls_threshold(two_clusters):
    X, y = two_clusters
    model = LogisticRegression(iterations=20).fit(X, y)
    probabilities = model.predict_proba(X)

    model.set_params(decision_boundary=0.99)

    assert np.array_equal(model.predict(X), (probabilities > 0.99).astype(int))


def test_cost_is_finite_when_predictions_saturate(two_clusters):
    X, y = two_clusters

    model = LogisticRegression(learning_rate=50.0, iterations=30).fit(X, y)

    assert np.all(np.isfinite(model.cost_history))


def test_non_binary_labels_raise(two_clusters):
    X, _ = two_clusters

    with pytest.raises(ValueError, match="0 or 1"):
        LogisticRegression().fit(X, np.arange(len(X)))


def test_multi_column_labels_raise(two_clusters):
    X, y = two_clusters

    with pytest.raises(ValueError, match="single label column"):
        LogisticRegression().fit(X, np.column_stack([y, 1 - y]))


@pytest.mark.parametrize("boundary", [0.0, 1.0, 1.5])
def test_invalid_decision_boundary_raises(boundary):
    with pytest.raises(ValueError, match="decision_boundary"):
        LogisticRegression(decision_boundary=boundary)


def test_get_params_includes_decision_boundary():
    assert LogisticRegression(decision_boundary=0.3).get_params()['decision_boundary'] == 0.3
