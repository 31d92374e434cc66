import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from gradfuncs.functions.base import ANY
from gradfuncs.functions.sigmoid import Sigmoid, sigmoid, sigmoid_gradient
from gradfuncs.utils.errors import DimensionMismatchError


class TestSigmoidKernels:

    def test_midpoint(self):
        assert sigmoid(0.0) == 0.5
        assert sigmoid_gradient(0.0) == 0.25

    def test_vector(self):
        x = np.array([-2.0, 0.0, 2.0])
        expected = 1.0 / (1.0 + np.exp(-x))
        assert_allclose(sigmoid(x), expected)
        assert_allclose(sigmoid_gradient(x), expected - expected ** 2)

    def test_matrix_keeps_shape(self):
        x = np.linspace(-3.0, 3.0, 6).reshape(2, 3)
        assert sigmoid(x).shape == (2, 3)
        assert sigmoid_gradient(x).shape == (2, 3)

    def test_saturates(self):
        assert sigmoid(1000.0) == 1.0
        assert sigmoid(-1000.0) == 0.0

    def test_symmetry(self):
        x = np.array([0.1, 1.5, 4.0])
        assert_allclose(sigmoid(x) + sigmoid(-x), np.ones(3))


class TestSigmoid:

    def test_apply1_scalar_returns_float(self):
        result = Sigmoid().apply1(0.0)
        assert isinstance(result, float)
        assert result == 0.5

    def test_elementwise_forms(self):
        x = np.array([[0.0, 1.0], [-1.0, 2.0]])
        f = Sigmoid()
        assert_allclose(f.apply1(x), sigmoid(x))
        assert_allclose(f.gradient1(x), sigmoid_gradient(x))

    def test_float32(self):
        f = Sigmoid(dtype=np.float32)
        assert f.apply1(np.zeros(3)).dtype == np.float32

    def test_apply_uses_first_coordinate(self):
        f = Sigmoid()
        assert f.apply([0.0, 5.0, -5.0]) == 0.5
        assert f.apply([2.0]) == pytest.approx(1.0 / (1.0 + np.exp(-2.0)))

    def test_gradient_only_first_coordinate(self):
        assert_array_equal(Sigmoid().gradient([0.0, 5.0]), [0.25, 0.0])
        assert_array_equal(Sigmoid().gradient([0.0]), [0.25])

    def test_arity_is_unconstrained(self):
        assert Sigmoid().arity == ANY

    def test_empty_vars_raises(self):
        with pytest.raises(DimensionMismatchError):
            Sigmoid().apply([])

    def test_batch_uses_first_column(self):
        rows = np.array([[0.0, 9.0], [1.0, -9.0]])
        assert_allclose(Sigmoid().apply_batch(rows), sigmoid(rows[:, 0]))
        grads = Sigmoid().gradient_batch(rows)
        assert_allclose(grads[:, 0], sigmoid_gradient(rows[:, 0]))
        assert_array_equal(grads[:, 1], [0.0, 0.0])
