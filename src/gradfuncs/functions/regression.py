"""
Regression cost functions.

Both variants take a coefficient table that packs a training set: every
column but the last is a feature column (the caller prepends the bias
column of ones), the last column is the target. Rows are samples. The
function argument `vars` is the parameter vector theta, one entry per
feature column.
"""

import numpy as np
import numpy.typing as npt

from typing import Optional, Tuple

from gradfuncs.functions.base import DiffFunction
from gradfuncs.functions.sigmoid import sigmoid
from gradfuncs.utils.validation._core import DTypeLike, _validate_table_core


def split_features_target(
        coef: npt.ArrayLike,
        dtype: Optional[DTypeLike] = np.float64,
) -> Tuple[npt.NDArray, npt.NDArray]:
    """
    Split a training table into feature matrix X (all columns but the last)
    and target vector y (the last column).

    Raises
    ------
    InvalidCoefficientTableError
        If the table is not 2-D, has fewer than 2 columns or has no rows.
    """
    table = _validate_table_core(coef, min_rows=1, min_cols=2, dtype=dtype)
    return table[:, :-1], table[:, -1]


class _RegressionCost(DiffFunction):

    _fields = ("coef",)

    def __init__(self, coef: npt.ArrayLike, dtype: Optional[DTypeLike] = np.float64):
        super().__init__(dtype)
        # shape is checked on first use, see `split_features_target`
        self._coef = self._frozen(coef)

    @property
    def coef(self) -> npt.NDArray:
        return self._coef

    @property
    def arity(self) -> int:
        xs, _ = self._split()
        return xs.shape[1]

    @property
    def n_samples(self) -> int:
        xs, _ = self._split()
        return xs.shape[0]

    def _split(self) -> Tuple[npt.NDArray, npt.NDArray]:
        return split_features_target(self._coef, dtype=self._dtype)


class LinearRegression(_RegressionCost):
    """
    Linear regression cost, the halved mean squared error of the linear
    model `X * theta` against the targets `y`:

        fe(theta) = 1/2m * sum(X * theta - y)^2

    Differentiating one term by `theta_j` gives `x_ij * (f(x_i) - y_i)`, so
    in matrix form:

        grad(fe, theta) = 1/m * transpose(X) * (X * theta - y)

    where `m` is the number of samples.
    """

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._check_vars(vars)
        xs, y = self._split()
        residual = xs @ vars_arr - y
        return float(0.5 / xs.shape[0] * np.sum(residual ** 2))

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._check_vars(vars)
        xs, y = self._split()
        residual = xs @ vars_arr - y
        return 1.0 / xs.shape[0] * (xs.T @ residual)

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        xs, y = self._split()
        # one residual column per candidate theta
        residuals = xs @ rows_arr.T - y[:, np.newaxis]
        return 0.5 / xs.shape[0] * np.sum(residuals ** 2, axis=0)

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        xs, y = self._split()
        residuals = xs @ rows_arr.T - y[:, np.newaxis]
        return (1.0 / xs.shape[0] * (xs.T @ residuals)).T


class LogisticRegression(_RegressionCost):
    """
    Logistic regression cost, the mean binary cross-entropy of
    `s = sigmoid(X * theta)` against 0/1 targets `y`:

        fe(theta) = 1/m * sum(-y * log(s) - (1 - y) * log(1 - s))
        grad(fe, theta) = 1/m * transpose(X) * (s - y)

    The logarithms are not clamped. A saturated `s` on the wrong side of its
    target yields inf or nan.
    """

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._check_vars(vars)
        xs, y = self._split()
        s = sigmoid(xs @ vars_arr)
        return float(1.0 / y.shape[0] * np.sum(-y * np.log(s) - (1.0 - y) * np.log(1.0 - s)))

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._check_vars(vars)
        xs, y = self._split()
        s = sigmoid(xs @ vars_arr)
        return 1.0 / xs.shape[0] * (xs.T @ (s - y))
