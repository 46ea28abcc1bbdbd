from typing import Self, final

import numpy as np

from dualdiff import function as ddf
from dualdiff.autodiff._dual import DualBase
from dualdiff.function import _isscalar
from dualdiff.typing import Scalar


@final
class Dual[T: Scalar = np.float64](DualBase[T]):
    r"""Eagerly evaluated dual number.

    Every operation computes the value and the derivative at once and returns a new
    :class:`Dual`.

    Parameters
    ----------
    value : T | Dual, default=0.0
        Value, or a dual number to copy.
    derivative : T | None, default=None
        Derivative. Zero of the type of `value` if omitted.

    Attributes
    ----------
    value : T
    derivative : T

    See Also
    --------
    LazyDual

    Notes
    -----
    Instances behave like elements of :math:`T[\varepsilon]/(\varepsilon^2)`. A plain
    scalar :math:`c` appearing in an operation is promoted to ``Dual(c, 0)``, so
    operations with plain scalars follow exactly the same formulas as operations
    between dual numbers. Builtin floats and integers are stored as
    :class:`numpy.float64`. Domain errors are not detected: with the default
    coefficients they propagate as infinities and NaNs, and otherwise they are
    reported (or not) by the arithmetic of `T` itself.

    Examples
    --------
    >>> x = Dual(6.0, 10.0)
    >>> y = Dual(3.0, 5.0)
    >>> print(x * y)
    (18.0, 60.0)
    >>> x = Dual.variable(2.0)
    >>> print(x * x - 3 * x)
    (-2.0, 1.0)
    """

    __slots__ = ()

    def _is_acceptable(self, value: object) -> bool:
        return isinstance(value, Dual) or _isscalar(value)

    def _dualdiff_overload_(self, fun, *args):
        v, d = self.value, self.derivative

        if fun is ddf.sin:
            return self.__class__(ddf.sin(v), d * ddf.cos(v))

        if fun is ddf.cos:
            return self.__class__(ddf.cos(v), -d * ddf.sin(v))

        if fun is ddf.exp:
            tmp = ddf.exp(v)
            return self.__class__(tmp, d * tmp)

        if fun is ddf.log:
            return self.__class__(ddf.log(v), d / v)

        if fun is ddf.pow:
            return self.__pow__(args[1])

        if fun is ddf.abs:
            return self.__abs__()

        return NotImplemented

    def _operand(self, value: Self | T | int) -> Self:
        return value if isinstance(value, Dual) else self.constant(value)  # type: ignore

    def __add__(self, rhs: Self | T | int) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        rhs = self._operand(rhs)
        return self.__class__(
            self.value + rhs.value, self.derivative + rhs.derivative
        )

    def __sub__(self, rhs: Self | T | int) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        rhs = self._operand(rhs)
        return self.__class__(
            self.value - rhs.value, self.derivative - rhs.derivative
        )

    def __mul__(self, rhs: Self | T | int) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        rhs = self._operand(rhs)
        derivative = self.value * rhs.derivative + self.derivative * rhs.value
        return self.__class__(self.value * rhs.value, derivative)

    def __truediv__(self, rhs: Self | T | int) -> Self:
        if not self._is_acceptable(rhs):
            return NotImplemented

        rhs = self._operand(rhs)
        s = rhs.value
        derivative = (self.derivative * s - self.value * rhs.derivative) / (s * s)
        return self.__class__(self.value / s, derivative)

    def __pow__(self, rhs: T | int) -> Self:
        if not _isscalar(rhs):
            return NotImplemented

        v = self.value
        derivative = rhs * ddf.pow(v, rhs - 1) * self.derivative
        return self.__class__(ddf.pow(v, rhs), derivative)

    def __abs__(self) -> Self:
        v = self.value
        return self.__class__(ddf.abs(v), self.derivative * v / ddf.abs(v))

    def __neg__(self) -> Self:
        return self.__class__(-self.value, -self.derivative)

    def __pos__(self) -> Self:
        return self.__class__(+self.value, +self.derivative)

    def __radd__(self, lhs: T | int) -> Self:
        if not _isscalar(lhs):
            return NotImplemented

        return self.constant(lhs).__add__(self)

    def __rsub__(self, lhs: T | int) -> Self:
        if not _isscalar(lhs):
            return NotImplemented

        return self.constant(lhs).__sub__(self)

    def __rmul__(self, lhs: T | int) -> Self:
        if not _isscalar(lhs):
            return NotImplemented

        return self.constant(lhs).__mul__(self)

    def __rtruediv__(self, lhs: T | int) -> Self:
        if not _isscalar(lhs):
            return NotImplemented

        return self.constant(lhs).__truediv__(self)
