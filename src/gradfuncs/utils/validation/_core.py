import numpy as np
import numpy.typing as npt

from typing import Tuple, Optional, Union
from typing_extensions import Literal

from gradfuncs.utils.errors import DimensionMismatchError, InvalidCoefficientTableError
from gradfuncs.utils.validation._enum import ShapeCode

ArrayLike = npt.ArrayLike
DTypeLike = Union[npt.DTypeLike, type]
Arity = Union[int, Literal["any"]]

ANY: Literal["any"] = "any"


def _as_array(values: ArrayLike, dtype: Optional[DTypeLike]) -> npt.NDArray:
    if dtype is None:
        return np.asarray(values)
    return np.asarray(values, dtype=np.dtype(dtype))


def _validate_vars_core(
        vars: ArrayLike,
        arity: Arity,
        *,
        dtype: Optional[DTypeLike] = np.float64,
) -> npt.NDArray:
    """
    Single point validator, returns `vars` as a 1-D array
    """
    vars_arr = _as_array(vars, dtype)

    if vars_arr.ndim != 1:
        raise DimensionMismatchError(
            f"vars must be a 1-D vector, got shape {vars_arr.shape}", ShapeCode.NDIM
        )

    if arity != ANY and vars_arr.shape[0] != arity:
        raise DimensionMismatchError(
            f"vars must have length {arity}, got {vars_arr.shape[0]}", ShapeCode.ARITY
        )

    return vars_arr


def _validate_rows_core(
        rows: ArrayLike,
        arity: Arity,
        *,
        dtype: Optional[DTypeLike] = np.float64,
) -> npt.NDArray:
    """
    Batch validator, returns `rows` as a 2-D array with one point per row
    """
    rows_arr = _as_array(rows, dtype)

    if rows_arr.ndim != 2:
        raise DimensionMismatchError(
            f"rows must be a 2-D matrix, got shape {rows_arr.shape}", ShapeCode.NDIM
        )

    if arity != ANY and rows_arr.shape[1] != arity:
        raise DimensionMismatchError(
            f"each row must have length {arity}, got {rows_arr.shape[1]}", ShapeCode.ARITY
        )

    return rows_arr


def _validate_table_core(
        table: ArrayLike,
        *,
        min_rows: int = 0,
        min_cols: int = 0,
        dtype: Optional[DTypeLike] = np.float64,
) -> npt.NDArray:
    """
    Coefficient table validator, returns `table` as a 2-D array
    """
    table_arr = _as_array(table, dtype)

    if table_arr.ndim != 2:
        raise InvalidCoefficientTableError(
            f"coefficient table must be 2-D, got shape {table_arr.shape}", ShapeCode.NDIM
        )

    n_rows, n_cols = table_arr.shape
    if n_cols < min_cols:
        raise InvalidCoefficientTableError(
            f"coefficient table needs at least {min_cols} columns, got {n_cols}", ShapeCode.COLUMNS
        )
    if n_rows < min_rows:
        raise InvalidCoefficientTableError(
            f"coefficient table needs at least {min_rows} rows, got {n_rows}", ShapeCode.ROWS
        )

    return table_arr


def _resolve_arity(left: Arity, right: Arity) -> Arity:
    """Arity of a sum of two functions"""
    if left == ANY:
        return right
    if right == ANY or left == right:
        return left
    raise DimensionMismatchError(
        f"cannot combine functions of arity {left} and {right}", ShapeCode.ARITY
    )


def _shape_report(
        vars: ArrayLike,
        arity: Arity,
) -> Tuple[bool, ShapeCode]:
    """Non-raising form of `_validate_vars_core`"""
    vars_arr = np.asarray(vars)
    if vars_arr.ndim != 1:
        return False, ShapeCode.NDIM
    if arity != ANY and vars_arr.shape[0] != arity:
        return False, ShapeCode.ARITY
    return True, ShapeCode.VALID
