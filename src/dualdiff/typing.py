"""
###############################
Typing (:mod:`dualdiff.typing`)
###############################

This module describes what a coefficient of a dual number has to support.

.. autoclass:: Scalar
    :show-inheritance:
    :no-members:

"""

from abc import abstractmethod
from typing import Protocol, Self


class Scalar(Protocol):
    """Coefficient type of a dual number.

    The value and the derivative of a dual number are both of this type. The
    differentiation rules need arithmetic between coefficients and with integers,
    powers with plain real or integer exponents, and the absolute value.

    Builtin :class:`float` and :class:`int` are stored as :class:`numpy.float64`.
    :mod:`mpmath` numbers and NumPy scalars are kept as they are, and
    :mod:`dualdiff.function` picks the matching elementary functions for them.
    """

    __slots__ = ()

    @abstractmethod
    def __add__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __sub__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __mul__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __truediv__(self, rhs: Self | int) -> Self: ...

    @abstractmethod
    def __pow__(self, rhs: int) -> Self: ...

    @abstractmethod
    def __radd__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rsub__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rmul__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __rtruediv__(self, lhs: Self | int) -> Self: ...

    @abstractmethod
    def __neg__(self) -> Self: ...

    @abstractmethod
    def __pos__(self) -> Self: ...

    @abstractmethod
    def __abs__(self) -> Self: ...
