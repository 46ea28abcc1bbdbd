import logging
from collections.abc import Callable
from typing import Any

from dualdiff.autodiff._dual import _coerce, _zero
from dualdiff.autodiff.dual import Dual
from dualdiff.autodiff.expr import Expr, LazyDual, evaluate

_logger = logging.getLogger(__name__)


def deriv[T, **P](fun: Callable[P, T], *, lazy: bool = False) -> Callable[P, T]:
    """Return a function that evaluates the derivative of the scalar-valued function
    with respect to its first argument.

    Parameters
    ----------
    fun : Callable
        Differentiated function. Arguments after the first are passed through
        unchanged and treated as constants.
    lazy : bool, default=False
        If ``True``, `fun` receives a :class:`LazyDual` and builds an expression
        tree that is evaluated once at the end; otherwise it receives a
        :class:`Dual`.

    Returns
    -------
    Callable
        Derivative of `fun`.

    Warnings
    --------
    `fun` must not contain conditional branches depending on its argument, and
    must only use operators and the functions in :mod:`dualdiff.function`.

    Examples
    --------
    >>> from dualdiff import function as ddf
    >>> f = lambda x, a: a * x * ddf.exp(x)
    >>> df = deriv(f)
    >>> print(df(0.0, 3.0))
    3.0
    >>> print(deriv(f, lazy=True)(0.0, 3.0))
    3.0
    """

    def result(x, /, *args, **kwargs):
        _logger.debug("differentiating %r at %r (lazy=%s)", fun, x, lazy)

        if lazy:
            tmp: Any = fun(LazyDual.variable(x), *args, **kwargs)  # type: ignore

            if isinstance(tmp, Expr | LazyDual):
                return evaluate(tmp).derivative
        else:
            tmp = fun(Dual.variable(x), *args, **kwargs)  # type: ignore

            if isinstance(tmp, Dual):
                return tmp.derivative

        return _zero(_coerce(x))

    return result  # type: ignore
