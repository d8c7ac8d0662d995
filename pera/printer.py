"""Render Pera values back to source-like text."""

from __future__ import annotations

import math

from pera import Value
from pera.config import get_number_format
from pera.types.nil import NilType
from pera.types.table import Table


def render_number(x: float) -> str:
    if math.isfinite(x) and float(x).is_integer() and abs(x) < 1e16:
        return str(int(x))
    fmt = get_number_format()
    if fmt is not None and math.isfinite(x):
        return format(x, fmt)
    return repr(float(x))


def render(value: Value, _seen: frozenset[int] = frozenset()) -> str:
    if isinstance(value, NilType):
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, (int, float)):
        return render_number(value)
    if isinstance(value, Table):
        if id(value) in _seen:
            return "( table ... )"
        seen = _seen | {id(value)}
        parts = ["(", "table"]
        for key, item in value:
            if key is not None:
                parts.extend([":", key])
            parts.append(render(item, seen))
        parts.append(")")
        return " ".join(parts)
    # Str, Symbol and Function values print as their own text
    return str(value)
