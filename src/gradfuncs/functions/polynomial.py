import numpy as np
import numpy.typing as npt

from typing import Optional

from gradfuncs.functions.base import DiffFunction
from gradfuncs.utils.errors import InvalidCoefficientTableError
from gradfuncs.utils.validation._core import DTypeLike, _validate_table_core
from gradfuncs.utils.validation._enum import ShapeCode


class Zero(DiffFunction):
    """Constant 0, the identity element of `sum_combine`"""

    def apply(self, vars: npt.ArrayLike) -> float:
        self._check_vars(vars)
        return 0.0

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._check_vars(vars)
        return np.zeros(vars_arr.shape[0], dtype=self._out_dtype)

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        return np.zeros(rows_arr.shape[0], dtype=self._out_dtype)

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        return np.zeros(rows_arr.shape, dtype=self._out_dtype)


class Linear(DiffFunction):
    """
    Linear function `k0*x0 + k1*x1 + .. + kn*xn`.

    Parameters
    ----------
    coef : array_like, shape (n,)
        Coefficients k; their count fixes the arity.
    """

    _fields = ("coef",)

    def __init__(self, coef: npt.ArrayLike, dtype: Optional[DTypeLike] = np.float64):
        super().__init__(dtype)
        coef_arr = self._frozen(coef)
        if coef_arr.ndim != 1:
            raise InvalidCoefficientTableError(
                f"linear coefficients must be a 1-D vector, got shape {coef_arr.shape}", ShapeCode.NDIM
            )
        self._coef = coef_arr

    @property
    def coef(self) -> npt.NDArray:
        return self._coef

    @property
    def arity(self) -> int:
        return self._coef.shape[0]

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._check_vars(vars)
        return float(self._coef @ vars_arr)

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        self._check_vars(vars)
        return self._coef.copy()

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        return rows_arr @ self._coef

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        return np.tile(self._coef, (rows_arr.shape[0], 1))


class Polynomial(DiffFunction):
    """
    Polynomial without mixed terms:
    `sum(i = 0..m) (C[i, 0]*x0^i + C[i, 1]*x1^i + .. + C[i, n]*xn^i)`

    Row `i` of the coefficient matrix holds the degree-`i` coefficients,
    one column per input dimension.
    """

    _fields = ("coef",)

    def __init__(self, coef: npt.ArrayLike, dtype: Optional[DTypeLike] = np.float64):
        super().__init__(dtype)
        self._coef = self._frozen(_validate_table_core(coef, dtype=dtype))
        # exponent of each row as a column, broadcasts against (.., n)
        self._powers = np.arange(self._coef.shape[0], dtype=self._coef.dtype).reshape(-1, 1)

    @property
    def coef(self) -> npt.NDArray:
        return self._coef

    @property
    def degree(self) -> int:
        return self._coef.shape[0] - 1

    @property
    def arity(self) -> int:
        return self._coef.shape[1]

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._check_vars(vars)
        return float(np.sum(self._coef * vars_arr ** self._powers))

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._check_vars(vars)
        # max(0, i - 1) keeps the constant row away from negative exponents
        lowered = np.maximum(self._powers - 1, 0)
        return np.sum(self._coef * self._powers * vars_arr ** lowered, axis=0)

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        # (n_rows, 1, n) ** (m + 1, 1) -> (n_rows, m + 1, n)
        expanded = rows_arr[:, np.newaxis, :] ** self._powers
        return np.sum(self._coef * expanded, axis=(1, 2))

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        lowered = np.maximum(self._powers - 1, 0)
        expanded = rows_arr[:, np.newaxis, :] ** lowered
        return np.sum(self._coef * self._powers * expanded, axis=1)
