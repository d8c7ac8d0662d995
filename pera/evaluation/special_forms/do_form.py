from pera import EvaluatorFn
from pera import Form, Value
from pera.types.nil import Nil
from pera.types.environment import Environment
from pera.types.tail_call import TailCall


def do_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value | TailCall:
    if not tail:
        return Nil
    for e in tail[:-1]:
        evaluate_fn(e, env)
    return TailCall(tail[-1])
