"""Table construction and field access.

Key operands of `.` and `put` follow one rule: an identifier bound in the
current environment yields its value, an unbound identifier is taken as its
own name, and any other form is evaluated. Field names after `:` inside
`table` are always taken literally.
"""

from pera import EvaluatorFn
from pera import Form, Value
from pera.errors import PeraArityError, PeraSyntaxError, PeraTypeError
from pera.types.environment import Environment
from pera.types.symbol import Symbol
from pera.types.table import Table

FIELD_MARKER = Symbol(":")


def resolve_key(form: Form, env: Environment, evaluate_fn: EvaluatorFn) -> Value:
    if isinstance(form, Symbol):
        return env.lookup(form) if env.is_bound(form) else form.id
    return evaluate_fn(form, env)


def get_field(target: Value, key: Value) -> Value:
    if not isinstance(target, Table):
        raise PeraTypeError(f"Cannot read field {key!r} of non-table {target!r}")
    return target.get(key)


def table_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Table:
    table = Table()
    for item in tail:
        if isinstance(item, list) and item and item[0] == FIELD_MARKER:
            _, key, val_expr = item
            table.put(key, evaluate_fn(val_expr, env))
        else:
            table.push(evaluate_fn(item, env))
    return table


def field_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """(. table key more-keys...) chained lookup."""
    if not tail:
        raise PeraArityError(". requires a table")
    value = evaluate_fn(tail[0], env)
    for key_form in tail[1:]:
        value = get_field(value, resolve_key(key_form, env, evaluate_fn))
    return value


def put_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    if len(tail) != 3:
        raise PeraArityError("put requires a table, a key and a value")
    target_expr, key_form, val_expr = tail
    target = evaluate_fn(target_expr, env)
    if not isinstance(target, Table):
        raise PeraTypeError(f"put requires a table, got {target!r}")
    key = resolve_key(key_form, env, evaluate_fn)
    return target.put(key, evaluate_fn(val_expr, env))


def field_marker_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    raise PeraSyntaxError(": names a field and is only valid inside table")
