import math

import numpy as np
import pytest

from dualdiff import function as ddf
from dualdiff.autodiff import (
    Absolute,
    Add,
    Dual,
    Expr,
    LazyDual,
    Leaf,
    Multiply,
    Negate,
    Power,
    Sine,
    evaluate,
)


class CountingExpr(Expr):
    def __init__(self, value, derivative):
        self._value = value
        self._derivative = derivative
        self.calls = {"value": 0, "derivative": 0}

    def value(self):
        self.calls["value"] += 1
        return self._value

    def derivative(self):
        self.calls["derivative"] += 1
        return self._derivative


def test_constructors():
    x1 = LazyDual()
    assert x1.value == 0.0 and x1.derivative == 0.0

    x2 = LazyDual(4.56)
    assert x2.value == 4.56 and x2.derivative == 0.0

    x3 = LazyDual(7.53, 2.99)
    assert x3.value == 7.53 and x3.derivative == 2.99

    x4 = LazyDual(x3)
    assert x4 == x3 and x4 is not x3
    assert str(x3) == "(7.53, 2.99)"
    assert repr(x3) == f"LazyDual(value={x3.value!r}, derivative={x3.derivative!r})"
    assert isinstance(x3.value, np.float64)


def test_arithmetic():
    x1, x2 = LazyDual(1.2, 2.9), LazyDual(9.1, 7.5)
    x3 = (x1 + x2).eval()
    assert pytest.approx(x3.value) == 10.3
    assert pytest.approx(x3.derivative) == 10.4

    x3 = (x1 - x2).eval()
    assert pytest.approx(x3.value) == -7.9
    assert pytest.approx(x3.derivative) == -4.6

    x3 = (LazyDual(6.0, 10.0) * LazyDual(3.0, 5.0)).eval()
    assert x3 == LazyDual(18.0, 60.0)

    x3 = (LazyDual(6.0, 10.0) / LazyDual(3.0, 2.0)).eval()
    assert x3 == LazyDual(2.0, 2.0)

    x3 = (-LazyDual(2.0, 1.0)).eval()
    assert x3 == LazyDual(-2.0, -1.0)


def test_elementary_functions():
    x1 = LazyDual(5.32, 1.0)
    v = x1.value
    f = LazyDual()

    f.assign(ddf.sin(x1 * x1))
    assert pytest.approx(f.derivative) == 2 * v * math.cos(v * v)

    f.assign(ddf.cos(x1 * x1))
    assert pytest.approx(f.derivative) == -2 * v * math.sin(v * v)

    f.assign(ddf.exp(x1 * x1))
    assert pytest.approx(f.derivative) == 2 * v * math.exp(v * v)

    f.assign(ddf.log(x1 * x1))
    assert pytest.approx(f.derivative) == 2 * v / (v * v)

    f.assign(x1 * x1 * x1)
    assert pytest.approx(f.derivative) == 3 * v * v


def test_power():
    x = LazyDual(2.0, 3.0)
    assert evaluate(ddf.pow(x, 3)) == LazyDual(8.0, 36.0)
    assert evaluate(x**3) == LazyDual(8.0, 36.0)
    assert evaluate(x**3) == evaluate(x * x * x)

    x = LazyDual(4.0, 1.0)
    assert evaluate(ddf.pow(x, 0.5)) == LazyDual(2.0, 0.25)

    with pytest.raises(TypeError):
        ddf.pow(x, LazyDual(2.0))

    with pytest.raises(TypeError):
        Power(Leaf(x), x)


def test_absolute():
    x1 = LazyDual(-5.32, 1.0)
    v = x1.value
    f = LazyDual(abs(x1 * x1 - LazyDual(2.3, 0.0)))
    expected = 2 * v * (v * v - 2.3) / abs(v * v - 2.3)
    assert pytest.approx(f.derivative) == expected

    g = LazyDual(ddf.abs(x1 * x1 - 2.3))
    assert g == f


def test_composition():
    x, y = LazyDual(2.0, 1.0), LazyDual(3.0)
    expr = ddf.sin(x * y) + 1
    assert isinstance(expr, Add)
    assert isinstance(expr.lhs, Sine)
    assert isinstance(expr.lhs.operand, Multiply)
    assert expr.lhs.operand.lhs.source is x
    assert isinstance(-x, Negate)
    assert isinstance(abs(x), Absolute)
    assert isinstance(+x, Leaf)
    assert repr(x + 2) == f"Add(Leaf({x!r}), Leaf({LazyDual.constant(2.0)!r}))"


def test_deferred_evaluation():
    counter = CountingExpr(2.0, 1.0)
    expr = ddf.exp(ddf.sin(counter * counter) / (counter - 1))
    assert counter.calls == {"value": 0, "derivative": 0}

    f = expr.eval()
    assert counter.calls["value"] > 0
    assert pytest.approx(f.value) == math.exp(math.sin(4.0) / 1.0)


def test_assign_evaluates_once():
    counter = CountingExpr(2.0, 1.0)
    f = LazyDual()
    assert f.assign(counter) is f
    assert counter.calls == {"value": 1, "derivative": 1}
    assert f == LazyDual(2.0, 1.0)

    counter = CountingExpr(2.0, 1.0)
    LazyDual(counter)
    assert counter.calls == {"value": 1, "derivative": 1}


def test_assign_self_reference():
    x = LazyDual(3.0, 1.0)
    x.assign(x * x)
    assert x == LazyDual(9.0, 6.0)


def test_leaf_reads_at_evaluation():
    x = LazyDual(2.0, 1.0)
    expr = x * x
    x.value = 3.0
    assert expr.eval() == LazyDual(9.0, 6.0)


def test_expression_outlives_operands():
    def build():
        x = LazyDual(5.0, 1.0)
        y = LazyDual(2.0)
        return x * y + x

    assert evaluate(build()) == LazyDual(15.0, 3.0)


def test_floating_point_domain():
    x = LazyDual(0.0, 1.0)
    eager = Dual(0.0, 1.0)

    with np.errstate(divide="ignore", invalid="ignore"):
        f = LazyDual(LazyDual(1.0) / x)
        assert f.value == np.inf and f.derivative == -np.inf

        f = evaluate(ddf.log(x))
        assert f.value == -np.inf and f.derivative == np.inf

        f = evaluate(abs(x))
        assert f.value == 0.0 and np.isnan(f.derivative)

        f = evaluate(ddf.pow(x, -0.5))
        assert f.value == np.inf and f.derivative == -np.inf

        pairs = [
            (LazyDual(1.0) / x, Dual(1.0) / eager),
            (ddf.log(x), ddf.log(eager)),
            (abs(x), abs(eager)),
            (ddf.pow(x, -0.5), ddf.pow(eager, -0.5)),
        ]

        for lazy, expected in pairs:
            f = evaluate(lazy)
            assert f.value == pytest.approx(expected.value, nan_ok=True)
            assert f.derivative == pytest.approx(expected.derivative, nan_ok=True)


def test_invalid_operands():
    with pytest.raises(TypeError):
        LazyDual(1.0) + Dual(1.0)

    with pytest.raises(TypeError):
        LazyDual().assign(1.0)

    with pytest.raises(TypeError):
        LazyDual(LazyDual(1.0) + 1, 0.0)

    with pytest.raises(TypeError):
        ddf.sin(LazyDual(1.0) + "1")
