"""Built-in operators for the Pera runtime.

Builtins receive their operands already evaluated, left to right, and always
return a final value: they never continue the trampoline. Division and
modulo go through numpy so zero divisors follow IEEE-754 double semantics
(inf / nan) instead of raising.
"""
from __future__ import annotations

from typing import Callable

import numpy as np

from pera import Value
from pera.errors import PeraArityError, PeraTypeError
from pera.printer import render
from pera.types.environment import Environment
from pera.types.function import Function
from pera.types.nil import Nil
from pera.types.symbol import Symbol
from pera.types.table import Table
from pera.types.truth import is_truthy

BuiltinFn = Callable[[Environment, list[Value]], Value]


def _is_number(x: Value) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _numbers(op: str, expr: list[Value]) -> list[float]:
    if len(expr) != 2:
        raise PeraArityError(f"{op} requires exactly 2 arguments")
    for x in expr:
        if not _is_number(x):
            raise PeraTypeError(f"All arguments to {op} must be numbers, got {x!r}")
    return expr


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, expr: list[Value]) -> Value:
    a, b = _numbers("+", expr)
    return a + b


def sub(env: Environment, expr: list[Value]) -> Value:
    a, b = _numbers("-", expr)
    return a - b


def mul(env: Environment, expr: list[Value]) -> Value:
    a, b = _numbers("*", expr)
    return a * b


def div(env: Environment, expr: list[Value]) -> Value:
    """IEEE division: x/0 is +-inf, 0/0 is nan."""
    a, b = _numbers("/", expr)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        return float(np.divide(np.float64(a), np.float64(b)))


def mod(env: Environment, expr: list[Value]) -> Value:
    """Remainder with the sign of the dividend (C fmod); x%0 is nan."""
    a, b = _numbers("%", expr)
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        return float(np.fmod(np.float64(a), np.float64(b)))


# -------------------------------
# Comparison
# -------------------------------
def is_equal(a: Value, b: Value) -> bool:
    """Numbers compare by value, tables and functions by identity, the rest by type and value."""
    if a is b:
        return True
    if _is_number(a) and _is_number(b):
        return a == b
    if type(a) != type(b):
        return False
    if isinstance(a, (Table, Function)):
        return False
    return a == b


def equals(env: Environment, expr: list[Value]) -> bool:
    if len(expr) != 2:
        raise PeraArityError("= requires exactly 2 arguments")
    return is_equal(expr[0], expr[1])


def _ordered(op: str, expr: list[Value]) -> tuple[Value, Value]:
    if len(expr) != 2:
        raise PeraArityError(f"{op} requires exactly 2 arguments")
    a, b = expr
    if isinstance(a, str) and isinstance(b, str):
        return a, b
    _numbers(op, expr)
    return a, b


def lt(env: Environment, expr: list[Value]) -> bool:
    a, b = _ordered("<", expr)
    return a < b


def lte(env: Environment, expr: list[Value]) -> bool:
    a, b = _ordered("<=", expr)
    return a <= b


# -------------------------------
# Boolean logic
# -------------------------------
def logical_and(env: Environment, expr: list[Value]) -> bool:
    return all(is_truthy(x) for x in expr)


def logical_or(env: Environment, expr: list[Value]) -> bool:
    return any(is_truthy(x) for x in expr)


def logical_not(env: Environment, expr: list[Value]) -> bool:
    if len(expr) != 1:
        raise PeraArityError("not requires exactly 1 argument")
    return not is_truthy(expr[0])


# -------------------------------
# Strings and output
# -------------------------------
def concat(env: Environment, expr: list[Value]) -> str:
    """(.. a b) joins the printed forms of both operands."""
    return "".join(render(x) for x in expr)


def print_value(env: Environment, expr: list[Value]) -> Value:
    """Write the rendered operand on its own line and return it unchanged."""
    if len(expr) != 1:
        raise PeraArityError("print requires exactly 1 argument")
    print(render(expr[0]))
    return expr[0]


# -------------------------------
# Tables
# -------------------------------
def _table(op: str, value: Value) -> Table:
    if not isinstance(value, Table):
        raise PeraTypeError(f"{op} requires a table, got {value!r}")
    return value


def count(env: Environment, expr: list[Value]) -> float:
    """Positional entries plus named fields."""
    if len(expr) != 1:
        raise PeraArityError("# requires exactly 1 argument")
    return float(len(_table("#", expr[0])))


def push(env: Environment, expr: list[Value]) -> Value:
    if len(expr) != 2:
        raise PeraArityError("push requires a table and a value")
    return _table("push", expr[0]).push(expr[1])


def pop(env: Environment, expr: list[Value]) -> Value:
    """Remove the last positional entry; nil for an empty array or a non-table."""
    if len(expr) != 1:
        raise PeraArityError("pop requires exactly 1 argument")
    target = expr[0]
    if not isinstance(target, Table):
        return Nil
    return target.pop()


BUILTINS: dict[Symbol, BuiltinFn] = {
    Symbol("+"): add,
    Symbol("-"): sub,
    Symbol("*"): mul,
    Symbol("/"): div,
    Symbol("%"): mod,
    Symbol("="): equals,
    Symbol("<"): lt,
    Symbol("<="): lte,
    Symbol("and"): logical_and,
    Symbol("or"): logical_or,
    Symbol("not"): logical_not,
    Symbol(".."): concat,
    Symbol("print"): print_value,
    Symbol("#"): count,
    Symbol("push"): push,
    Symbol("pop"): pop,
}
