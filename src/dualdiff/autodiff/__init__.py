"""
####################################################
Automatic differentiation (:mod:`dualdiff.autodiff`)
####################################################

.. currentmodule:: dualdiff.autodiff

This module provides forward-mode automatic differentiation with respect to a
single variable, by an eager and by a lazy engine.

Differential operators
----------------------

.. autosummary::
    :toctree: generated/

    deriv

Eager dual numbers
------------------

.. autosummary::
    :toctree: generated/

    Dual

Lazy expressions
----------------

.. autosummary::
    :toctree: generated/

    LazyDual
    Expr
    evaluate
    Leaf
    Add
    Subtract
    Multiply
    Divide
    Negate
    Sine
    Cosine
    Exponential
    Logarithm
    Power
    Absolute

"""

from .autodiff import deriv
from .dual import Dual
from .expr import (
    Absolute,
    Add,
    Cosine,
    Divide,
    Exponential,
    Expr,
    LazyDual,
    Leaf,
    Logarithm,
    Multiply,
    Negate,
    Power,
    Sine,
    Subtract,
    evaluate,
)

__all__ = [
    "deriv",
    "Dual",
    "Absolute",
    "Add",
    "Cosine",
    "Divide",
    "Exponential",
    "Expr",
    "LazyDual",
    "Leaf",
    "Logarithm",
    "Multiply",
    "Negate",
    "Power",
    "Sine",
    "Subtract",
    "evaluate",
]
