from pera import EvaluatorFn
from pera import Form, Value
from pera.errors import PeraArityError, PeraNameError, PeraTypeError
from pera.reader.parser import is_operator_call
from pera.types.symbol import Symbol
from pera.types.environment import Environment
from pera.types.tail_call import TailCall


def to_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """
    to name value
    to (name value name value ...) body

    The first shape binds one name and returns the value. The second binds
    each pair in order, so later values see earlier names, then continues
    on `body` in the same environment.
    """
    if len(tail) != 2:
        raise PeraArityError("to requires exactly 2 arguments: to name value")
    target, expr = tail
    if isinstance(target, list) and not is_operator_call(target):
        return _bind_block(target, expr, env, evaluate_fn)
    if not isinstance(target, Symbol):
        raise PeraNameError(f"to first argument must be an identifier, got {target!r}")
    value = evaluate_fn(expr, env)
    env.define(target, value)
    return value


def _bind_block(
    pairs: list[Form],
    body: Form,
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> TailCall:
    if len(pairs) % 2:
        raise PeraArityError("to block requires name value pairs: to (name value ...) body")
    for i in range(0, len(pairs), 2):
        name, val_expr = pairs[i], pairs[i + 1]
        if not isinstance(name, Symbol):
            raise PeraNameError(f"to block names must be identifiers, got {name!r}")
        env.define(name, evaluate_fn(val_expr, env))
    return TailCall(body)


def _step(tail: list[Form], env: Environment, op: str, delta: float) -> Value:
    if len(tail) != 1:
        raise PeraArityError(f"{op} requires exactly 1 argument")
    name = tail[0]
    if not isinstance(name, Symbol):
        raise PeraNameError(f"{op} argument must be an identifier, got {name!r}")
    current = env.lookup(name)
    if isinstance(current, bool) or not isinstance(current, (int, float)):
        raise PeraTypeError(f"{op} requires {name} to hold a number, got {current!r}")
    env.vars[name] = current + delta
    # The value before the update, like a postfix ++/--
    return current


def inc_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    return _step(tail, env, "inc", 1.0)


def dec_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    return _step(tail, env, "dec", -1.0)
