import math
import numpy as np
import numpy.typing as npt

from typing import Union
from numba import vectorize, float64, float32

from gradfuncs.functions.base import DiffFunction
from gradfuncs.utils.errors import DimensionMismatchError
from gradfuncs.utils.validation._enum import ShapeCode

Elementwise = Union[float, npt.NDArray]

_sig = [
    float32(float32),
    float64(float64),
]


@vectorize(_sig)
def sigmoid(x):
    """Logistic function 1 / (1 + e^-x), elementwise"""
    return 1.0 / (1.0 + math.exp(-x))


@vectorize(_sig)
def sigmoid_gradient(x):
    """Derivative of the logistic function, s - s^2 with s = sigmoid(x)"""
    s = 1.0 / (1.0 + math.exp(-x))
    return s - s * s


class Sigmoid(DiffFunction):
    """
    Logistic nonlinearity.

    `apply1` / `gradient1` work elementwise on a scalar, vector or matrix.
    The aggregate `apply` / `gradient` treat the function as depending on
    the first coordinate of `vars` only.
    """

    def apply1(self, x: npt.ArrayLike) -> Elementwise:
        return self._elementwise(sigmoid, x)

    def gradient1(self, x: npt.ArrayLike) -> Elementwise:
        return self._elementwise(sigmoid_gradient, x)

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._check_first(vars)
        return self.apply1(vars_arr[0])

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._check_first(vars)
        out = np.zeros(vars_arr.shape[0], dtype=self._out_dtype)
        out[0] = self.gradient1(vars_arr[0])
        return out

    def _check_first(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._check_vars(vars)
        if vars_arr.shape[0] == 0:
            raise DimensionMismatchError("sigmoid needs at least one coordinate", ShapeCode.ARITY)
        return vars_arr

    def _elementwise(self, ufunc, x: npt.ArrayLike) -> Elementwise:
        x_arr = np.asarray(x, dtype=self._out_dtype)
        result = ufunc(x_arr)
        if x_arr.ndim == 0:
            return float(result)
        return result
