from typing import Optional

from gradfuncs.utils.validation._enum import ShapeCode


class GradFuncsError(Exception):
    """Base class for every error raised by gradfuncs"""

    def __init__(self, message: str, code: Optional[ShapeCode] = None):
        super().__init__(message)
        self.code = code


class DimensionMismatchError(GradFuncsError, ValueError):
    """
    Input vector or batch row does not match the fixed arity of a function,
    or an input has the wrong number of dimensions.
    """


class InvalidCoefficientTableError(GradFuncsError, ValueError):
    """Coefficient table cannot be interpreted by the builder that received it"""
