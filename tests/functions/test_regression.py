import numpy as np
import pytest
from numpy.testing import assert_allclose

from gradfuncs.functions.builders import linear_regression, logistic_regression
from gradfuncs.functions.regression import (
    LinearRegression,
    LogisticRegression,
    split_features_target,
)
from gradfuncs.utils.coefficients import load_training_table
from gradfuncs.utils.errors import DimensionMismatchError, InvalidCoefficientTableError
from gradfuncs.utils.validation._enum import ShapeCode


@pytest.fixture
def linear_table():
    # bias, x -> y
    return np.array([
        [1.0, 1.0, 2.0],
        [1.0, 2.0, 3.0],
        [1.0, 3.0, 5.0],
    ])


@pytest.fixture
def logistic_table():
    return np.array([
        [1.0, 1.0, 1.0],
        [1.0, -1.0, 0.0],
        [1.0, 2.0, 1.0],
        [1.0, 0.0, 0.0],
    ])


def numeric_gradient(f, x, h=1e-6):
    x = np.asarray(x, dtype=float)
    grad = np.zeros_like(x)
    for j in range(x.size):
        step = np.zeros_like(x)
        step[j] = h
        grad[j] = (f.apply(x + step) - f.apply(x - step)) / (2 * h)
    return grad


class TestSplitFeaturesTarget:

    def test_last_column_is_target(self, linear_table):
        xs, y = split_features_target(linear_table)
        assert xs.shape == (3, 2)
        assert_allclose(y, [2.0, 3.0, 5.0])

    def test_single_column_rejected(self):
        with pytest.raises(InvalidCoefficientTableError) as exc:
            split_features_target(np.ones((3, 1)))
        assert exc.value.code == ShapeCode.COLUMNS

    def test_empty_table_rejected(self):
        with pytest.raises(InvalidCoefficientTableError) as exc:
            split_features_target(np.ones((0, 3)))
        assert exc.value.code == ShapeCode.ROWS


class TestLinearRegression:

    def test_cost_at_zero(self, linear_table):
        f = LinearRegression(linear_table)
        # (4 + 9 + 25) / (2 * 3)
        assert f.apply([0.0, 0.0]) == pytest.approx(38.0 / 6.0)

    def test_gradient_at_zero(self, linear_table):
        f = LinearRegression(linear_table)
        assert_allclose(f.gradient([0.0, 0.0]), [-10.0 / 3.0, -23.0 / 3.0])

    def test_cost_and_gradient_near_fit(self, linear_table):
        f = LinearRegression(linear_table)
        assert f.apply([1.0, 1.0]) == pytest.approx(1.0 / 6.0)
        assert_allclose(f.gradient([1.0, 1.0]), [-1.0 / 3.0, -1.0])

    def test_exact_fit_has_zero_cost(self):
        xs = np.column_stack([np.ones(4), np.arange(4.0)])
        y = xs @ np.array([0.5, 2.0])
        f = LinearRegression(np.column_stack([xs, y]))
        assert f.apply([0.5, 2.0]) == pytest.approx(0.0)
        assert_allclose(f.gradient([0.5, 2.0]), [0.0, 0.0], atol=1e-12)

    def test_gradient_matches_finite_differences(self):
        rng = np.random.default_rng(21)
        f = LinearRegression(rng.normal(size=(20, 4)))
        theta = rng.normal(size=3)
        assert_allclose(f.gradient(theta), numeric_gradient(f, theta), rtol=1e-5, atol=1e-7)

    def test_batch_equals_rowwise(self):
        rng = np.random.default_rng(22)
        f = LinearRegression(rng.normal(size=(10, 3)))
        rows = rng.normal(size=(5, 2))
        assert_allclose(f.apply_batch(rows), [f.apply(r) for r in rows])
        assert_allclose(f.gradient_batch(rows), np.stack([f.gradient(r) for r in rows]))

    def test_arity_excludes_target(self, linear_table):
        f = LinearRegression(linear_table)
        assert f.arity == 2
        assert f.n_samples == 3

    def test_wrong_length_raises(self, linear_table):
        with pytest.raises(DimensionMismatchError):
            LinearRegression(linear_table).apply([0.0, 0.0, 0.0])

    def test_narrow_table_fails_lazily(self):
        f = linear_regression(np.ones((3, 1)))
        with pytest.raises(InvalidCoefficientTableError):
            f.apply([0.0])
        with pytest.raises(InvalidCoefficientTableError):
            _ = f.arity

    def test_from_delimited_file(self, tmp_path):
        path = tmp_path / "linear.csv"
        path.write_text("1,2\n2,3\n3,5\n")
        f = linear_regression(load_training_table(path))
        assert f.apply([0.0, 0.0]) == pytest.approx(38.0 / 6.0)


class TestLogisticRegression:

    def test_cost_at_zero_is_log_two(self, logistic_table):
        f = LogisticRegression(logistic_table)
        assert f.apply([0.0, 0.0]) == pytest.approx(np.log(2.0))

    def test_gradient_at_zero(self, logistic_table):
        f = LogisticRegression(logistic_table)
        assert_allclose(f.gradient([0.0, 0.0]), [0.0, -0.5], atol=1e-15)

    def test_cost_decreases_along_negative_gradient(self, logistic_table):
        f = LogisticRegression(logistic_table)
        theta = np.zeros(2)
        assert f.apply(theta - 0.1 * f.gradient(theta)) < f.apply(theta)

    def test_gradient_matches_finite_differences(self):
        rng = np.random.default_rng(31)
        xs = np.column_stack([np.ones(15), rng.normal(size=(15, 2))])
        y = (rng.uniform(size=15) > 0.5).astype(float)
        f = LogisticRegression(np.column_stack([xs, y]))
        theta = rng.normal(size=3)
        assert_allclose(f.gradient(theta), numeric_gradient(f, theta), rtol=1e-5, atol=1e-7)

    def test_batch_equals_rowwise(self, logistic_table):
        f = LogisticRegression(logistic_table)
        rows = np.array([[0.0, 0.0], [0.5, -1.0], [-2.0, 3.0]])
        assert_allclose(f.apply_batch(rows), [f.apply(r) for r in rows])
        assert_allclose(f.gradient_batch(rows), np.stack([f.gradient(r) for r in rows]))

    def test_saturation_is_not_clamped(self):
        # sigmoid(1000) == 1.0 exactly, target 0 -> log(0)
        f = LogisticRegression(np.array([[1000.0, 0.0]]))
        with np.errstate(divide="ignore", invalid="ignore"):
            assert np.isinf(f.apply([1.0]))

    def test_arity_excludes_target(self, logistic_table):
        assert logistic_regression(logistic_table).arity == 2

    def test_equality(self, logistic_table):
        assert LogisticRegression(logistic_table) == LogisticRegression(logistic_table.copy())
        assert LogisticRegression(logistic_table) != LinearRegression(logistic_table)
