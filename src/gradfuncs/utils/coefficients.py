"""
Helpers that produce coefficient tables for the builders.

Polynomial tables can be written by hand or derived from a SymPy
expression. Regression tables are read from a delimited numeric file and
get a leading bias column, giving the bias-first, target-last layout the
regression builders expect.
"""

import logging
import numpy as np
import numpy.typing as npt
import sympy as sp

from os import PathLike
from typing import Optional, Sequence, Union

from gradfuncs.utils.errors import InvalidCoefficientTableError
from gradfuncs.utils.validation._core import DTypeLike, _validate_table_core
from gradfuncs.utils.validation._enum import ShapeCode

logger = logging.getLogger(__name__)

# x0^2
X0_SQUARED = np.array([[0.0], [0.0], [1.0]])

# x0^2 + 5*x1^2 + 10
X0_SQUARED_PLUS_5_X1_SQUARED_PLUS_10 = np.array([
    [0.0, 10.0],
    [0.0, 0.0],
    [1.0, 5.0],
])

# x0^4 - 2*x0^2 + x1^2, saddle point at (0, 0) and minima at (-1, 0), (1, 0)
DOUBLE_WELL = np.array([
    [0.0, 0.0],
    [0.0, 0.0],
    [-2.0, 1.0],
    [0.0, 0.0],
    [1.0, 0.0],
])

for _table in (X0_SQUARED, X0_SQUARED_PLUS_5_X1_SQUARED_PLUS_10, DOUBLE_WELL):
    _table.flags.writeable = False


def polynomial_coefficients(
        expr: Union[sp.Expr, str],
        symbols: Sequence[sp.Symbol],
        dtype: Optional[DTypeLike] = np.float64,
) -> npt.NDArray:
    """
    Convert a polynomial without mixed terms into a Polynomial table.

    Parameters
    ----------
    expr : sympy.Expr or str
        Polynomial in `symbols`, e.g. ``x0**4 - 2*x0**2 + x1**2``.
    symbols : sequence of sympy.Symbol
        Input variables; symbol `j` becomes column `j`.

    Returns
    -------
    ndarray, shape (degree + 1, len(symbols))
        Row `i` holds the coefficients of the degree-`i` terms. The constant
        term goes to column 0.

    Raises
    ------
    InvalidCoefficientTableError
        If `expr` is not a polynomial in `symbols` or has a term mixing
        several variables, such as ``x0*x1``.
    """
    if not symbols:
        raise InvalidCoefficientTableError("at least one symbol is required", ShapeCode.COLUMNS)

    if isinstance(expr, str):
        expr = sp.sympify(expr, locals={str(s): s for s in symbols})

    try:
        poly = sp.Poly(expr, *symbols)
    except sp.PolynomialError as e:
        raise InvalidCoefficientTableError(f"not a polynomial in {tuple(symbols)}: {e}", ShapeCode.TERM) from e

    terms = poly.terms()
    degree = max((max(monom) for monom, _ in terms), default=0)
    table = np.zeros((degree + 1, len(symbols)), dtype=dtype)

    for monom, coeff in terms:
        used = [j for j, power in enumerate(monom) if power > 0]
        if len(used) > 1:
            term = sp.Mul(*(s ** p for s, p in zip(symbols, monom)))
            raise InvalidCoefficientTableError(f"mixed term {term} cannot be tabulated", ShapeCode.TERM)
        if not coeff.is_number:
            raise InvalidCoefficientTableError(f"coefficient {coeff} is not numeric", ShapeCode.TERM)
        column = used[0] if used else 0
        table[monom[column], column] += float(coeff)

    return table


def with_bias_column(table: npt.ArrayLike, dtype: Optional[DTypeLike] = np.float64) -> npt.NDArray:
    """Prepend a column of 1.0, the intercept term of a regression"""
    table_arr = _validate_table_core(table, dtype=dtype)
    ones = np.ones((table_arr.shape[0], 1), dtype=table_arr.dtype)
    return np.hstack([ones, table_arr])


def load_table(
        path: Union[str, PathLike],
        delimiter: str = ",",
        dtype: Optional[DTypeLike] = np.float64,
) -> npt.NDArray:
    """Read a delimited numeric table, one sample per line"""
    table = np.loadtxt(path, delimiter=delimiter, dtype=dtype, ndmin=2)
    logger.debug("Loaded table %s with shape %s", path, table.shape)
    return table


def load_training_table(
        path: Union[str, PathLike],
        delimiter: str = ",",
        dtype: Optional[DTypeLike] = np.float64,
) -> npt.NDArray:
    """
    Read a training set (features then target per line) and prepend the
    bias column, ready for `linear_regression` / `logistic_regression`.
    """
    return with_bias_column(load_table(path, delimiter=delimiter, dtype=dtype), dtype=dtype)
