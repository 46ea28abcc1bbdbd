from .function import cos, exp, log, pow, sin
from .autodiff import Dual, Expr, LazyDual, deriv, evaluate

__all__ = [
    "cos",
    "exp",
    "log",
    "pow",
    "sin",
    "Dual",
    "Expr",
    "LazyDual",
    "deriv",
    "evaluate",
]
