"""
Builders: pure functions from a coefficient table to a function instance.

Builders only check what they need to read the table; the
regression builders defer shape checks to the first evaluation. Importing
this module registers every built-in variant in the builder registry.
"""

import numpy.typing as npt

from typing import Callable

from gradfuncs.functions.base import Builder
from gradfuncs.functions.polynomial import Linear, Polynomial, Zero
from gradfuncs.functions.regression import LinearRegression, LogisticRegression
from gradfuncs.functions.regularization import L1, L2
from gradfuncs.functions.sigmoid import Sigmoid
from gradfuncs.functions.registry import register_builder
from gradfuncs.utils.validation._core import _validate_table_core


def zero(coef: npt.ArrayLike) -> Zero:
    return Zero()


def linear(coef: npt.ArrayLike) -> Linear:
    """Only the first row of `coef` is used"""
    return Linear(_validate_table_core(coef, min_rows=1, dtype=None)[0])


def polynomial(coef: npt.ArrayLike) -> Polynomial:
    """Each row of `coef` raises the exponent by one"""
    return Polynomial(coef)


def linear_regression(coef: npt.ArrayLike) -> LinearRegression:
    return LinearRegression(coef)


def logistic_regression(coef: npt.ArrayLike) -> LogisticRegression:
    return LogisticRegression(coef)


def sigmoid(coef: npt.ArrayLike) -> Sigmoid:
    return Sigmoid()


def l1(lambda_: float = 1.0, ignore_first: bool = False) -> Builder[L1]:
    """Builder of an L1 penalty, the coefficient table is ignored"""
    def build(coef: npt.ArrayLike) -> L1:
        return L1(lambda_, ignore_first)
    return build


def l2(lambda_: float = 1.0, ignore_first: bool = False) -> Builder[L2]:
    """Builder of an L2 penalty, the coefficient table is ignored"""
    def build(coef: npt.ArrayLike) -> L2:
        return L2(lambda_, ignore_first)
    return build


def _unparameterized(builder: Builder) -> Callable[[], Builder]:
    return lambda: builder


register_builder("zero", _unparameterized(zero))
register_builder("linear", _unparameterized(linear))
register_builder("polynomial", _unparameterized(polynomial))
register_builder("linear_regression", _unparameterized(linear_regression))
register_builder("logistic_regression", _unparameterized(logistic_regression))
register_builder("sigmoid", _unparameterized(sigmoid))
register_builder("l1", l1)
register_builder("l2", l2)
