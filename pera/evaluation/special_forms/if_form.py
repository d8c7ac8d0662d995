from pera import EvaluatorFn
from pera import Form
from pera.errors import PeraArityError
from pera.types.environment import Environment
from pera.types.tail_call import TailCall
from pera.types.truth import is_truthy


def if_form(
    tail: list[Form],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> TailCall:
    if len(tail) != 3:
        raise PeraArityError("if requires a condition, a then-form and an else-form")

    cond, then_form, else_form = tail
    # The chosen branch is not evaluated here; the trampoline continues on it
    if is_truthy(evaluate_fn(cond, env)):
        return TailCall(then_form)
    return TailCall(else_form)
