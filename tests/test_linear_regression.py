import warnings

import numpy as np
import pytest

from gradlearn.callbacks.learning_rate import AdaptiveLearningRate
from gradlearn.ml.linear_regression import LinearRegression


@pytest.fixture
def line():
    X = np.linspace(0, 10, 60).reshape(-1, 1)
    y = 2 * X.ravel() + 3
    return X, y


def test_noiseless_line_reaches_high_r2(line):
    X, y = line
    X_test = np.array([[0.5], [4.2], [9.7]])
    y_test = 2 * X_test.ravel() + 3

    model = LinearRegression(learning_rate=0.1, iterations=200).fit(X, y)

    assert model.score(X_test, y_test) >= 0.99
    assert np.allclose(model.predict(X_test), y_test, atol=0.1)


def test_history_has_one_loss_per_epoch(line):
    X, y = line

    model = LinearRegression(iterations=25).fit(X, y)

    assert len(model.history_['loss']) == 25
    assert len(model.history_['learning_rate']) == 25
    assert model.mse_history is model.history_['loss']
    assert model.history_['loss'][-1] < model.history_['loss'][0]


def test_configured_learning_rate_is_not_mutated(line):
    X, y = line

    model = LinearRegression(learning_rate=0.1, iterations=30).fit(X, y)

    assert model.learning_rate == 0.1
    assert model.learning_rate_ != 0.1
    assert model.get_params()['learning_rate'] == 0.1


def test_fixed_learning_rate_without_adaptation(line):
    X, y = line

    model = LinearRegression(learning_rate=0.05, iterations=10, adaptive_learning_rate=False).fit(X, y)

    assert model.learning_rate_ == 0.05
    assert model.history_['learning_rate'] == [0.05] * 10


def test_user_supplied_adaptive_callback_is_used(line):
    X, y = line
    callback = AdaptiveLearningRate(max_lr=0.2)

    model = LinearRegression(learning_rate=0.1, iterations=50, callbacks=[callback]).fit(X, y)

    assert model.learning_rate_ <= 0.2
    assert len(callback.history) == 50


def test_weights_shape_and_zero_start(line):
    X, y = line

    model = LinearRegression(iterations=1, adaptive_learning_rate=False, learning_rate=1.0).fit(X, y)

    # One full-batch step from zero weights with standardized features
    assert model.weights_.shape == (2, 1)
    assert model.weights_[0, 0] == pytest.approx(y.mean())


def test_multiple_features_with_mini_batches(rng):
    X = rng.uniform(-5, 5, size=(200, 3))
    y = X[:, 0] - 2 * X[:, 1] + 0.5 * X[:, 2] + 1

    model = LinearRegression(learning_rate=0.1, iterations=100, batch_size=20).fit(X, y)

    assert model.score(X, y) >= 0.99


def test_column_labels_predict_column(line):
    X, y = line

    model = LinearRegression(iterations=100).fit(X, y.reshape(-1, 1))

    assert model.predict(X).shape == (60, 1)
    assert model.score(X, y.reshape(-1, 1)) >= 0.99


def test_constant_feature_does_not_break_training(line):
    X, y = line
    X = np.hstack([X, np.full_like(X, 7.0)])

    model = LinearRegression(iterations=100).fit(X, y)

    assert np.all(np.isfinite(model.weights_))
    assert model.score(X, y) >= 0.99


def test_remainder_rows_warn(line):
    X, y = line

    with pytest.warns(UserWarning, match="dropped"):
        LinearRegression(iterations=2, batch_size=7).fit(X, y)


def test_batch_size_larger_than_dataset_raises(line):
    X, y = line

    with pytest.raises(ValueError, match="batch_size"):
        LinearRegression(iterations=2, batch_size=100).fit(X, y)


def test_predict_before_fit_raises():
    with pytest.raises(ValueError, match="fitted"):
        LinearRegression().predict(np.ones((2, 1)))


def test_row_count_mismatch_raises():
    with pytest.raises(ValueError, match="same number of samples"):
        LinearRegression().fit(np.ones((4, 1)), np.ones(3))


def test_predict_with_wrong_feature_count_raises(line):
    X, y = line
    model = LinearRegression(iterations=5).fit(X, y)

    with pytest.raises(ValueError):
        model.predict(np.ones((2, 2)))


@pytest.mark.parametrize("kwargs", [{"learning_rate": 0}, {"iterations": 0}, {"batch_size": -1}])
def test_invalid_parameters_raise(kwargs):
    with pytest.raises(ValueError):
        LinearRegression(**kwargs)


def test_set_params():
    model = LinearRegression().set_params(iterations=5, batch_size=10)

    assert model.iterations == 5
    assert model.batch_size == 10
    with pytest.raises(ValueError, match="Invalid parameter"):
        model.set_params(momentum=0.9)


def test_verbose_training_runs(line):
    X, y = line

    model = LinearRegression(iterations=3, verbose=True).fit(X, y)

    assert len(model.cost_history) == 3


def test_keeping_remainder_rows_trains_without_warning(line):
    X, y = line

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        model = LinearRegression(learning_rate=0.1, iterations=100, batch_size=7,
                                 drop_last=False).fit(X, y)

    # 60 rows in batches of 7: eight full batches and one of 4 rows
    assert model.optimizer_.steps == 100 * 9
    assert model.score(X, y) >= 0.99
