from pera import EvaluatorFn
from pera import Form, Value
from pera.errors import PeraArityError, PeraNameError
from pera.types.environment import Environment
from pera.types.function import Function
from pera.types.symbol import Symbol


def on_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """
    (on (name params...) body)
    Binds a Function whose closure is a deep snapshot of the current
    environment. The body is not evaluated here.
    """
    if len(tail) != 2:
        raise PeraArityError("on requires a signature and a body")

    signature, body = tail
    if isinstance(signature, Symbol):
        name, params = signature, []
    elif isinstance(signature, list) and signature:
        name, *params = signature
    else:
        raise PeraArityError(f"on expects (name params...), got {signature!r}")

    for p in [name, *params]:
        if not isinstance(p, Symbol):
            raise PeraNameError(f"on: {p!r} is not an identifier")

    fn = Function(name, params, body, env.snapshot())
    env.define(name, fn)
    return fn
