import numpy as np
import numpy.typing as npt

from abc import ABC, abstractmethod
from typing import Callable, Optional, TypeVar

from gradfuncs.utils.validation._core import (
    ANY,
    Arity,
    DTypeLike,
    _shape_report,
    _validate_rows_core,
    _validate_vars_core,
)

__all__ = ["ANY", "Arity", "Builder", "DiffFunction"]


class DiffFunction(ABC):
    """
    A scalar function of a parameter vector that knows its own gradient.

    Concrete variants implement `apply` and `gradient` for a single point;
    the batch forms map them over the rows of a matrix and may be
    overridden with vectorised versions.
    """

    def __init__(self, dtype: Optional[DTypeLike] = np.float64):
        self._dtype = np.dtype(dtype) if dtype is not None else None

    @property
    def arity(self) -> Arity:
        """Expected length of `vars`, or ANY when unconstrained"""
        return ANY

    @abstractmethod
    def apply(self, vars: npt.ArrayLike) -> float:
        """Evaluate the function at `vars`"""

    @abstractmethod
    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        """Gradient with respect to `vars`, same length as `vars`"""

    def __call__(self, vars: npt.ArrayLike) -> float:
        return self.apply(vars)

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        """Evaluate at every row of `rows`, keeping row order"""
        rows_arr = self._check_rows(rows)
        out = np.empty(rows_arr.shape[0], dtype=self._out_dtype)
        for i, row in enumerate(rows_arr):
            out[i] = self.apply(row)
        return out

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        """Gradient at every row of `rows`, stacked in row order"""
        rows_arr = self._check_rows(rows)
        out = np.empty(rows_arr.shape, dtype=self._out_dtype)
        for i, row in enumerate(rows_arr):
            out[i] = self.gradient(row)
        return out

    def accepts(self, vars: npt.ArrayLike) -> bool:
        """True when `vars` has a shape this function can be evaluated at"""
        ok, _ = _shape_report(vars, self.arity)
        return ok

    @property
    def _out_dtype(self) -> np.dtype:
        return self._dtype if self._dtype is not None else np.dtype(np.float64)

    def _check_vars(self, vars: npt.ArrayLike) -> npt.NDArray:
        return _validate_vars_core(vars, self.arity, dtype=self._dtype)

    def _check_rows(self, rows: npt.ArrayLike) -> npt.NDArray:
        return _validate_rows_core(rows, self.arity, dtype=self._dtype)

    def _frozen(self, values: npt.ArrayLike) -> npt.NDArray:
        arr = np.array(values, dtype=self._dtype, copy=True)
        arr.flags.writeable = False
        return arr

    # value semantics, variants list their fields in `_fields`
    _fields: tuple = ()

    def _field_values(self) -> tuple:
        return tuple(getattr(self, name) for name in self._fields)

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        for a, b in zip(self._field_values(), other._field_values()):
            if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
                if not np.array_equal(a, b):
                    return False
            elif a != b:
                return False
        return True

    def __hash__(self) -> int:
        # arrays hash by value so equal coefficients of any float width agree
        key = tuple(
            (value.shape, tuple(value.ravel().tolist())) if isinstance(value, np.ndarray) else value
            for value in self._field_values()
        )
        return hash((type(self), key))

    def __repr__(self) -> str:
        fields = ", ".join(f"{name}={getattr(self, name)!r}" for name in self._fields)
        return f"{type(self).__name__}({fields})"


F = TypeVar("F", bound=DiffFunction)

# pure constructor: coefficient table -> function instance
Builder = Callable[[np.ndarray], F]
