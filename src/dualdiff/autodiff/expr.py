from abc import ABC, abstractmethod
from typing import Self, final

import numpy as np

from dualdiff import function as ddf
from dualdiff.autodiff._dual import DualBase
from dualdiff.function import _isscalar
from dualdiff.typing import Scalar


def _operand(value: object) -> "Expr | None":
    if isinstance(value, Expr):
        return value

    if isinstance(value, LazyDual):
        return Leaf(value)

    if _isscalar(value):
        return Leaf(LazyDual.constant(value))

    return None


class _Composable:
    """Operators that build expression nodes instead of computing."""

    __slots__ = ()

    @abstractmethod
    def _node(self) -> "Expr":
        raise NotImplementedError

    def _dualdiff_overload_(self, fun, *args):
        if fun is ddf.sin:
            return Sine(self._node())

        if fun is ddf.cos:
            return Cosine(self._node())

        if fun is ddf.exp:
            return Exponential(self._node())

        if fun is ddf.log:
            return Logarithm(self._node())

        if fun is ddf.pow:
            return Power(self._node(), args[1])

        if fun is ddf.abs:
            return Absolute(self._node())

        return NotImplemented

    def __add__(self, rhs) -> "Add":
        if (node := _operand(rhs)) is None:
            return NotImplemented

        return Add(self._node(), node)

    def __sub__(self, rhs) -> "Subtract":
        if (node := _operand(rhs)) is None:
            return NotImplemented

        return Subtract(self._node(), node)

    def __mul__(self, rhs) -> "Multiply":
        if (node := _operand(rhs)) is None:
            return NotImplemented

        return Multiply(self._node(), node)

    def __truediv__(self, rhs) -> "Divide":
        if (node := _operand(rhs)) is None:
            return NotImplemented

        return Divide(self._node(), node)

    def __pow__(self, rhs) -> "Power":
        if not _isscalar(rhs):
            return NotImplemented

        return Power(self._node(), rhs)

    def __abs__(self) -> "Absolute":
        return Absolute(self._node())

    def __neg__(self) -> "Negate":
        return Negate(self._node())

    def __pos__(self) -> "Expr":
        return self._node()

    def __radd__(self, lhs) -> "Add":
        if (node := _operand(lhs)) is None:
            return NotImplemented

        return Add(node, self._node())

    def __rsub__(self, lhs) -> "Subtract":
        if (node := _operand(lhs)) is None:
            return NotImplemented

        return Subtract(node, self._node())

    def __rmul__(self, lhs) -> "Multiply":
        if (node := _operand(lhs)) is None:
            return NotImplemented

        return Multiply(node, self._node())

    def __rtruediv__(self, lhs) -> "Divide":
        if (node := _operand(lhs)) is None:
            return NotImplemented

        return Divide(node, self._node())


@final
class LazyDual[T: Scalar = np.float64](DualBase[T], _Composable):
    r"""Dual number for the lazy differentiation engine.

    Operators and elementary functions applied to a :class:`LazyDual` compute
    nothing; they return an :class:`Expr` tree whose leaves refer to the operands.
    The tree is evaluated when it is assigned into a :class:`LazyDual` by
    :meth:`assign`, by :meth:`Expr.eval`, or by passing it to the constructor.

    Parameters
    ----------
    value : T | LazyDual | Expr, default=0.0
        Value, a dual number to copy, or an expression to materialize.
    derivative : T | None, default=None
        Derivative. Zero of the type of `value` if omitted.

    Attributes
    ----------
    value : T
    derivative : T

    See Also
    --------
    Dual, Expr

    Examples
    --------
    >>> x = LazyDual(5.0, 1.0)
    >>> f = LazyDual()
    >>> print(f.assign(x * x - 3))
    (22.0, 10.0)
    >>> print(LazyDual(2 / x))
    (0.4, -0.08)
    """

    __slots__ = ()

    def __init__(self, value: "T | Self | Expr[T]" = 0.0, derivative: T | None = None):  # type: ignore
        if isinstance(value, Expr):
            if derivative is not None:
                raise TypeError("derivative must be omitted when evaluating")

            self.assign(value)
            return

        super().__init__(value, derivative)  # type: ignore

    def _node(self) -> "Leaf[T]":
        return Leaf(self)

    def assign(self, expr: "Expr[T] | LazyDual[T]") -> Self:
        """Evaluate `expr` and store the result in this dual number.

        The value and the derivative of `expr` are each computed exactly once, and
        both are computed before either is stored, so `expr` may refer to `self`.

        Returns
        -------
        LazyDual
            `self`.
        """
        if isinstance(expr, LazyDual):
            expr = Leaf(expr)
        elif not isinstance(expr, Expr):
            raise TypeError("only expressions can be assigned")

        value = expr.value()
        derivative = expr.derivative()
        self.value = value
        self.derivative = derivative
        return self


class Expr[T: Scalar = np.float64](_Composable, ABC):
    """Abstract base class for nodes of a lazily evaluated expression.

    A node refers to its operands and computes its value and derivative on demand.
    Nothing is cached: every call of :meth:`value` or :meth:`derivative` evaluates
    the subtree again, so materialize with :meth:`eval` once and reuse the result if
    both quantities are needed repeatedly.

    See Also
    --------
    LazyDual
    """

    __slots__ = ()

    def _node(self) -> Self:
        return self

    @abstractmethod
    def value(self) -> T:
        """Compute the value of the expression."""
        raise NotImplementedError

    @abstractmethod
    def derivative(self) -> T:
        """Compute the derivative of the expression."""
        raise NotImplementedError

    def eval(self) -> LazyDual[T]:
        """Materialize the expression into a new :class:`LazyDual`."""
        return LazyDual(self.value(), self.derivative())


@final
class Leaf[T: Scalar](Expr[T]):
    """Node referring to a :class:`LazyDual`.

    The dual number is read when the node is evaluated, not when it is created.
    """

    __slots__ = ("source",)
    source: LazyDual[T]

    def __init__(self, source: LazyDual[T]):
        self.source = source

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.source!r})"

    def value(self) -> T:
        return self.source.value

    def derivative(self) -> T:
        return self.source.derivative


class _UnaryExpr[T: Scalar](Expr[T]):
    __slots__ = ("operand",)
    operand: Expr[T]

    def __init__(self, operand: Expr[T]):
        self.operand = operand

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.operand!r})"


class _BinaryExpr[T: Scalar](Expr[T]):
    __slots__ = ("lhs", "rhs")
    lhs: Expr[T]
    rhs: Expr[T]

    def __init__(self, lhs: Expr[T], rhs: Expr[T]):
        self.lhs = lhs
        self.rhs = rhs

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.lhs!r}, {self.rhs!r})"


@final
class Add[T: Scalar](_BinaryExpr[T]):
    """Sum of two nodes."""

    __slots__ = ()

    def value(self) -> T:
        return self.lhs.value() + self.rhs.value()

    def derivative(self) -> T:
        return self.lhs.derivative() + self.rhs.derivative()


@final
class Subtract[T: Scalar](_BinaryExpr[T]):
    """Difference of two nodes."""

    __slots__ = ()

    def value(self) -> T:
        return self.lhs.value() - self.rhs.value()

    def derivative(self) -> T:
        return self.lhs.derivative() - self.rhs.derivative()


@final
class Multiply[T: Scalar](_BinaryExpr[T]):
    """Product of two nodes."""

    __slots__ = ()

    def value(self) -> T:
        return self.lhs.value() * self.rhs.value()

    def derivative(self) -> T:
        lhs, rhs = self.lhs, self.rhs
        return lhs.value() * rhs.derivative() + lhs.derivative() * rhs.value()


@final
class Divide[T: Scalar](_BinaryExpr[T]):
    """Quotient of two nodes."""

    __slots__ = ()

    def value(self) -> T:
        return self.lhs.value() / self.rhs.value()

    def derivative(self) -> T:
        lhs, rhs = self.lhs, self.rhs
        s = rhs.value()
        return (lhs.derivative() * s - lhs.value() * rhs.derivative()) / (s * s)


@final
class Negate[T: Scalar](_UnaryExpr[T]):
    """Negation of a node."""

    __slots__ = ()

    def value(self) -> T:
        return -self.operand.value()

    def derivative(self) -> T:
        return -self.operand.derivative()


@final
class Sine[T: Scalar](_UnaryExpr[T]):
    __slots__ = ()

    def value(self) -> T:
        return ddf.sin(self.operand.value())

    def derivative(self) -> T:
        return self.operand.derivative() * ddf.cos(self.operand.value())


@final
class Cosine[T: Scalar](_UnaryExpr[T]):
    __slots__ = ()

    def value(self) -> T:
        return ddf.cos(self.operand.value())

    def derivative(self) -> T:
        return -self.operand.derivative() * ddf.sin(self.operand.value())


@final
class Exponential[T: Scalar](_UnaryExpr[T]):
    __slots__ = ()

    def value(self) -> T:
        return ddf.exp(self.operand.value())

    def derivative(self) -> T:
        return self.operand.derivative() * ddf.exp(self.operand.value())


@final
class Logarithm[T: Scalar](_UnaryExpr[T]):
    __slots__ = ()

    def value(self) -> T:
        return ddf.log(self.operand.value())

    def derivative(self) -> T:
        return self.operand.derivative() / self.operand.value()


@final
class Power[T: Scalar](_UnaryExpr[T]):
    """Node raised to a constant power.

    Parameters
    ----------
    operand : Expr[T]
    exponent : T | int | float
        Plain scalar. It is not differentiated.

    Notes
    -----
    The derivative is ``k * v ** (k - 1) * d`` for value ``v``, derivative ``d`` and
    exponent ``k``, which agrees with ``Dual.__pow__``.
    """

    __slots__ = ("exponent",)
    exponent: T | int | float

    def __init__(self, operand: Expr[T], exponent: T | int | float):
        if not _isscalar(exponent):
            raise TypeError("exponent must be a scalar")

        super().__init__(operand)
        self.exponent = exponent

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.operand!r}, {self.exponent!r})"

    def value(self) -> T:
        return ddf.pow(self.operand.value(), self.exponent)

    def derivative(self) -> T:
        k = self.exponent
        return k * ddf.pow(self.operand.value(), k - 1) * self.operand.derivative()


@final
class Absolute[T: Scalar](_UnaryExpr[T]):
    __slots__ = ()

    def value(self) -> T:
        return ddf.abs(self.operand.value())

    def derivative(self) -> T:
        v = self.operand.value()
        return self.operand.derivative() * v / ddf.abs(v)


def evaluate[T: Scalar](expr: Expr[T] | LazyDual[T]) -> LazyDual[T]:
    """Materialize an expression into a new :class:`LazyDual`.

    A :class:`LazyDual` passed as `expr` is copied.

    Examples
    --------
    >>> x = LazyDual(6.0, 10.0)
    >>> y = LazyDual(3.0, 2.0)
    >>> print(evaluate(x / y))
    (2.0, 2.0)
    """
    return LazyDual().assign(expr)
