"""
#################################################
Mathematical functions (:mod:`dualdiff.function`)
#################################################

.. currentmodule:: dualdiff.function

This module provides the elementary functions understood by both differentiation
engines. Each function accepts a plain scalar, an eager
:class:`~dualdiff.autodiff.Dual`, or a lazy :class:`~dualdiff.autodiff.LazyDual` or
:class:`~dualdiff.autodiff.Expr`.

Trigonometric functions
=======================

.. autosummary::
    :toctree: generated/

    cos
    sin

Power, exponents, and logarithmic functions
===========================================

.. autosummary::
    :toctree: generated/

    abs
    exp
    log
    pow

Notes
-----
A type takes part in the dispatch by defining ``_dualdiff_overload_(fun, *args)``.
The hook receives the function being called and its arguments, and returns either
the result or ``NotImplemented``. mpmath numbers are computed with :mod:`mpmath`,
and every other scalar with :mod:`numpy`. Builtin floats and integers are therefore
evaluated as :class:`numpy.float64`. Domain errors give infinities and NaNs and
emit a :class:`RuntimeWarning`, which :func:`numpy.errstate` controls.
"""

import builtins
import numbers
from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python
import numpy as np


def _isscalar(value: object) -> bool:
    mpnumeric = mpmath.ctx_mp_python.mpnumeric
    return isinstance(value, numbers.Number | np.generic | mpnumeric)


@overload
def abs(x: float, /) -> float: ...


@overload
def abs(x: int, /) -> int: ...


@overload
def abs(x: Any, /) -> Any: ...


def abs(x, /):
    """Absolute value.

    The builtin :func:`abs` gives the same result for dual numbers and nodes.

    Examples
    --------
    >>> abs(-2.5)
    2.5
    >>> from dualdiff.autodiff import Dual
    >>> print(abs(Dual(-2.0, 1.0)))
    (2.0, -1.0)
    """
    if fun := getattr(type(x), "_dualdiff_overload_", None):
        if (res := fun(x, abs, x)) is not NotImplemented:
            return res

        raise TypeError

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.fabs(x)

        case np.generic():
            return np.abs(x)

        case float() | int():
            return builtins.abs(x)

        case _:
            raise TypeError


@overload
def cos(x: float | int, /) -> float: ...


@overload
def cos(x: Any, /) -> Any: ...


def cos(x, /):
    """Cosine.

    Examples
    --------
    >>> print(format(cos(1.0), ".6f"))
    0.540302
    """
    if fun := getattr(type(x), "_dualdiff_overload_", None):
        if (res := fun(x, cos, x)) is not NotImplemented:
            return res

        raise TypeError

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.cos(x)

        case np.generic() | float() | int():
            return np.cos(x)

        case _:
            raise TypeError


@overload
def exp(x: float | int, /) -> float: ...


@overload
def exp(x: Any, /) -> Any: ...


def exp(x, /):
    """Exponential.

    Examples
    --------
    >>> print(format(exp(2), ".6f"))
    7.389056
    >>> from dualdiff.autodiff import Dual
    >>> print(exp(Dual(0.0, 1.0)))
    (1.0, 1.0)
    """
    if fun := getattr(type(x), "_dualdiff_overload_", None):
        if (res := fun(x, exp, x)) is not NotImplemented:
            return res

        raise TypeError

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.exp(x)

        case np.generic() | float() | int():
            return np.exp(x)

        case _:
            raise TypeError


@overload
def log(x: float | int, /) -> float: ...


@overload
def log(x: Any, /) -> Any: ...


def log(x, /):
    """Natural logarithm.

    Examples
    --------
    >>> print(format(log(5), ".6f"))
    1.609438
    >>> from dualdiff.autodiff import Dual
    >>> print(log(Dual(1.0, 1.0)))
    (0.0, 1.0)
    """
    if fun := getattr(type(x), "_dualdiff_overload_", None):
        if (res := fun(x, log, x)) is not NotImplemented:
            return res

        raise TypeError

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.log(x)

        case np.generic() | float() | int():
            return np.log(x)

        case _:
            raise TypeError


@overload
def pow(x: float | int, k: float | int, /) -> float: ...


@overload
def pow(x: Any, k: Any, /) -> Any: ...


def pow(x, k, /):
    """`x` raised to the power `k`.

    The exponent `k` must be a plain scalar; it is never differentiated.

    Examples
    --------
    >>> print(format(pow(3.25, 1.25), ".6f"))
    4.363693
    >>> from dualdiff.autodiff import Dual
    >>> print(pow(Dual(3.0, 1.0), 2))
    (9.0, 6.0)
    """
    if not _isscalar(k):
        raise TypeError("exponent must be a scalar")

    if fun := getattr(type(x), "_dualdiff_overload_", None):
        if (res := fun(x, pow, x, k)) is not NotImplemented:
            return res

        raise TypeError

    mpnumeric = mpmath.ctx_mp_python.mpnumeric

    match x, k:
        case (mpnumeric(), _) | (_, mpnumeric()):
            return mpmath.power(x, k)

        case (np.generic(), _) | (_, np.generic()):
            return np.power(x, k)

        case (float() | int(), float() | int()):
            return np.power(np.float64(x), k)

        case _:
            raise TypeError


@overload
def sin(x: float | int, /) -> float: ...


@overload
def sin(x: Any, /) -> Any: ...


def sin(x, /):
    """Sine.

    Examples
    --------
    >>> print(format(sin(1.0), ".6f"))
    0.841471
    >>> from dualdiff.autodiff import Dual
    >>> print(sin(Dual(0.0, 1.0)))
    (0.0, 1.0)
    """
    if fun := getattr(type(x), "_dualdiff_overload_", None):
        if (res := fun(x, sin, x)) is not NotImplemented:
            return res

        raise TypeError

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.sin(x)

        case np.generic() | float() | int():
            return np.sin(x)

        case _:
            raise TypeError
