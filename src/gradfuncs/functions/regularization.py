import numpy as np
import numpy.typing as npt

from typing import Optional

from gradfuncs.functions.base import DiffFunction
from gradfuncs.utils.validation._core import DTypeLike


class _Regularizer(DiffFunction):
    """
    Shared plumbing for penalty terms.

    Parameters
    ----------
    lambda_ : float, default=1.0
        Regularization coefficient.
    ignore_first : bool, default=False
        Leave the first variable (usually the bias term) unpenalized. Its
        gradient entry is forced to 0, the gradient keeps its length.
    """

    _fields = ("lambda_", "ignore_first")

    def __init__(
        self,
        lambda_: float = 1.0,
        ignore_first: bool = False,
        dtype: Optional[DTypeLike] = np.float64,
    ):
        super().__init__(dtype)
        self._lambda = float(lambda_)
        self._ignore_first = bool(ignore_first)

    @property
    def lambda_(self) -> float:
        return self._lambda

    @property
    def ignore_first(self) -> bool:
        return self._ignore_first

    def _penalized(self, values: npt.NDArray) -> npt.NDArray:
        """Copy of `values` with the ignored coordinate zeroed along the last axis"""
        out = np.array(values, dtype=self._out_dtype, copy=True)
        if self._ignore_first and out.shape[-1] > 0:
            out[..., 0] = 0.0
        return out


class L1(_Regularizer):
    """
    L1 regularization, known as Lasso (Least Absolute Shrinkage and
    Selection Operator): `lambda/2 * sum(|x_i|)`.
    """

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._penalized(self._check_vars(vars))
        return float(self._lambda / 2 * np.sum(np.abs(vars_arr)))

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._penalized(self._check_vars(vars))
        return self._lambda * np.sign(vars_arr)

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._penalized(self._check_rows(rows))
        return self._lambda / 2 * np.sum(np.abs(rows_arr), axis=1)

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._penalized(self._check_rows(rows))
        return self._lambda * np.sign(rows_arr)


class L2(_Regularizer):
    """
    L2 regularization, known as Ridge: `lambda/2 * sum(x_i^2)`.
    """

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._penalized(self._check_vars(vars))
        return float(self._lambda / 2 * np.sum(vars_arr ** 2))

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._penalized(self._check_vars(vars))
        return self._lambda * vars_arr

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._penalized(self._check_rows(rows))
        return self._lambda / 2 * np.sum(rows_arr ** 2, axis=1)

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._penalized(self._check_rows(rows))
        return self._lambda * rows_arr
