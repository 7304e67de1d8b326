import warnings

import numpy as np
import pytest

from gradlearn.core.activations import identity, sigmoid, softmax, get_activation
from gradlearn.core.optimizer import GradientDescent, TrainingState


def test_compute_gradient_matches_closed_form():
    X = np.array([[1.0, 0.0], [1.0, 1.0], [1.0, 2.0]])
    y = np.array([[1.0], [3.0], [5.0]])
    weights = np.zeros((2, 1))

    gradient = GradientDescent.compute_gradient(weights, X, y, identity)

    expected = X.T @ (X @ weights - y) / 3
    assert np.allclose(gradient, expected)


def test_step_returns_new_weights_without_mutating_input():
    X = np.array([[1.0, -1.0], [1.0, 1.0]])
    y = np.array([[0.0], [1.0]])
    weights = np.zeros((2, 1))

    optimizer = GradientDescent(learning_rate=0.5)
    updated = optimizer.step(weights, X, y, sigmoid)

    assert np.array_equal(weights, np.zeros((2, 1)))
    assert not np.array_equal(updated, weights)
    assert optimizer.steps == 1


def test_full_batch_is_a_single_slice():
    assert list(GradientDescent().batches(7)) == [slice(0, 7)]


def test_batches_drop_remainder_by_default():
    batches = list(GradientDescent(batch_size=3).batches(10))

    assert batches == [slice(0, 3), slice(3, 6), slice(6, 9)]


def test_batches_keep_remainder_when_requested():
    batches = list(GradientDescent(batch_size=3, drop_last=False).batches(10))

    assert batches[-1] == slice(9, 10)
    assert len(batches) == 4


def test_check_batch_size_warns_about_dropped_rows():
    with pytest.warns(UserWarning, match="last 1 rows"):
        GradientDescent(batch_size=3).check_batch_size(10)


def test_batch_size_larger_than_dataset_raises():
    with pytest.raises(ValueError, match="batch_size"):
        GradientDescent(batch_size=20).check_batch_size(10)


@pytest.mark.parametrize("kwargs", [{"learning_rate": 0}, {"learning_rate": -1.0}, {"batch_size": 0}])
def test_invalid_configuration_raises(kwargs):
    with pytest.raises(ValueError):
        GradientDescent(**kwargs)


def test_run_epoch_advances_state():
    X = np.hstack([np.ones((4, 1)), np.arange(4.0).reshape(-1, 1)])
    y = (2 * np.arange(4.0) + 1).reshape(-1, 1)
    state = TrainingState(weights=np.zeros((2, 1)))

    optimizer = GradientDescent(learning_rate=0.1, batch_size=2)
    next_state = optimizer.run_epoch(state, X, y, identity)

    assert next_state.epoch == 1
    assert optimizer.steps == 2
    assert np.array_equal(state.weights, np.zeros((2, 1)))


def test_get_config():
    config = GradientDescent(learning_rate=0.2, batch_size=5).get_config()

    assert config == {'learning_rate': 0.2, 'steps': 0, 'batch_size': 5, 'drop_last': True}


def test_softmax_rows_sum_to_one():
    z = np.array([[1.0, 2.0, 3.0], [1000.0, 0.0, -1000.0]])

    probabilities = softmax(z)

    assert np.allclose(probabilities.sum(axis=1), 1.0)
    assert np.all(np.isfinite(probabilities))


def test_get_activation():
    assert get_activation('sigmoid') is sigmoid
    assert get_activation(None) is identity
    with pytest.raises(ValueError):
        get_activation('relu')


def test_batches_larger_than_dataset_raise():
    with pytest.raises(ValueError, match="batch_size"):
        list(GradientDescent(batch_size=20).batches(10))


def test_check_batch_size_is_silent_when_rows_are_kept():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        GradientDescent(batch_size=3, drop_last=False).check_batch_size(10)
