import numpy as np
import numpy.typing as npt

from typing import Callable, Generic, Iterator, TypeVar

from gradfuncs.functions.base import Builder, DiffFunction
from gradfuncs.utils.validation._core import Arity, _resolve_arity

F1 = TypeVar("F1", bound=DiffFunction)
F2 = TypeVar("F2", bound=DiffFunction)


class CombinedFunction(DiffFunction, Generic[F1, F2]):
    """
    Pointwise sum of two functions, `f1(x) + f2(x)`.

    The operands are kept as they are; arity is resolved on use so that a
    malformed regression table surfaces on the first call, not here.
    """

    _fields = ("first", "second")

    def __init__(self, first: F1, second: F2):
        super().__init__(dtype=None)
        self._first = first
        self._second = second

    @property
    def first(self) -> F1:
        return self._first

    @property
    def second(self) -> F2:
        return self._second

    @property
    def arity(self) -> Arity:
        return _resolve_arity(self._first.arity, self._second.arity)

    def apply(self, vars: npt.ArrayLike) -> float:
        vars_arr = self._check_vars(vars)
        return self._first.apply(vars_arr) + self._second.apply(vars_arr)

    def gradient(self, vars: npt.ArrayLike) -> npt.NDArray:
        vars_arr = self._check_vars(vars)
        return np.add(self._first.gradient(vars_arr), self._second.gradient(vars_arr))

    def apply_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        return np.add(self._first.apply_batch(rows_arr), self._second.apply_batch(rows_arr))

    def gradient_batch(self, rows: npt.ArrayLike) -> npt.NDArray:
        rows_arr = self._check_rows(rows)
        return np.add(self._first.gradient_batch(rows_arr), self._second.gradient_batch(rows_arr))


class FunctionPair(CombinedFunction[F1, F2]):
    """
    Two functions built from the same coefficient table.

    Unpacks and compares like the tuple `(first, second)`; evaluated as a
    function it is the sum of both members.
    """

    def __iter__(self) -> Iterator[DiffFunction]:
        yield self._first
        yield self._second

    def __len__(self) -> int:
        return 2

    def __getitem__(self, index: int) -> DiffFunction:
        return (self._first, self._second)[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, tuple):
            return len(other) == 2 and self._first == other[0] and self._second == other[1]
        return super().__eq__(other)

    def __hash__(self) -> int:
        # consistent with equality against the plain tuple
        return hash((self._first, self._second))


def sum_combine(first: F1, second: F2) -> CombinedFunction[F1, F2]:
    """Combine two functions into their pointwise sum"""
    return CombinedFunction(first, second)


def pair_builders(
        first: Builder[F1],
        second: Builder[F2],
) -> Callable[[np.ndarray], FunctionPair[F1, F2]]:
    """
    Join two builders into one that hands the same coefficient table to
    both and returns the resulting pair.
    """
    def build(coef: npt.NDArray) -> FunctionPair[F1, F2]:
        return FunctionPair(first(coef), second(coef))

    return build
