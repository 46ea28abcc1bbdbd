from typing import Self

import numpy as np

from dualdiff.typing import Scalar


def _coerce[T: Scalar](value: T) -> T:
    # builtin float and int are stored as float64
    if isinstance(value, float | int) and not isinstance(value, np.generic):
        return np.float64(value)  # type: ignore

    return value


def _zero[T: Scalar](value: T) -> T:
    return type(value)(0)  # type: ignore


def _one[T: Scalar](value: T) -> T:
    return type(value)(1)  # type: ignore


class DualBase[T: Scalar = np.float64]:
    """Storage shared by the eager and lazy dual numbers.

    Builtin :class:`float` and :class:`int` coefficients are stored as
    :class:`numpy.float64`, so division by zero, logarithms of non-positive values
    and overflow produce infinities and NaNs instead of exceptions. Other
    coefficient types are stored as given.

    Parameters
    ----------
    value : T | DualBase, default=0.0
        Value, or a dual number of the same class to copy.
    derivative : T | None, default=None
        Derivative. Zero of the type of `value` if omitted.
    """

    __slots__ = ("_value", "_derivative")
    _value: T
    _derivative: T

    def __init__(self, value: T | Self = 0.0, derivative: T | None = None):  # type: ignore
        if isinstance(value, DualBase):
            if derivative is not None:
                raise TypeError("derivative must be omitted when copying")

            if type(value) is not type(self):
                raise TypeError

            self._value = value._value
            self._derivative = value._derivative
            return

        self.value = value
        self.derivative = _zero(self._value) if derivative is None else derivative

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._value = _coerce(value)

    @property
    def derivative(self) -> T:
        return self._derivative

    @derivative.setter
    def derivative(self, value: T) -> None:
        self._derivative = _coerce(value)

    @classmethod
    def constant(cls, value: T) -> Self:
        """Return a dual number whose derivative is zero."""
        value = _coerce(value)
        return cls(value, _zero(value))

    @classmethod
    def variable(cls, value: T) -> Self:
        """Return a dual number seeded as the variable of differentiation, that is,
        whose derivative is one."""
        value = _coerce(value)
        return cls(value, _one(value))

    def copy(self) -> Self:
        return self.__class__(self._value, self._derivative)

    def __copy__(self) -> Self:
        return self.copy()

    def __repr__(self) -> str:
        name = type(self).__name__
        return f"{name}(value={self._value!r}, derivative={self._derivative!r})"

    def __str__(self) -> str:
        return f"({self._value}, {self._derivative})"

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return self.__str__()

        value = format(self._value, format_spec)
        derivative = format(self._derivative, format_spec)
        return f"({value}, {derivative})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return other._value == self._value and other._derivative == self._derivative  # type: ignore
