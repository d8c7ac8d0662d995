from pera import EvaluatorFn
from pera import Form, Value
from pera.errors import PeraArityError
from pera.types.nil import Nil
from pera.types.environment import Environment
from pera.types.truth import is_truthy


def while_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """
    (while cond body)
    Loops on the host and returns the last body value (nil if the body never ran).
    Unlike `do` and `if` it always ends the trampoline with a value.
    """
    if len(tail) != 2:
        raise PeraArityError("while requires a condition and a body")

    cond, body = tail
    result: Value = Nil
    while is_truthy(evaluate_fn(cond, env)):
        result = evaluate_fn(body, env)
    return result
