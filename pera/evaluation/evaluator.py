"""Core evaluator and trampoline for the Pera interpreter.

`evaluate` keeps two loop variables, the current form and the current
environment, and reduces them in a loop instead of recursing:

- Tail-set special forms (`do`, `if`, the `to` block) hand back a
  TailCall; the loop continues on its form in the same environment.
  `while` loops on the host and returns its last body value.
- A call to a user Function merges the caller's bindings into the function's
  closure, binds the parameters there, and continues on the body with the
  closure as the new environment.
- Every other special form and every builtin returns a final value.

Self- and mutually tail-recursive calls therefore run in constant host stack.
"""

from __future__ import annotations

from pera import Form, Value
from pera.errors import PeraTypeError
from pera.builtin.core_builtin import BUILTINS
from pera.evaluation.special_forms import SPECIAL_FORMS
from pera.evaluation.special_forms.table_forms import get_field, resolve_key
from pera.types.environment import Environment
from pera.types.function import Function
from pera.types.nil import Nil
from pera.types.symbol import Symbol
from pera.types.table import Table
from pera.types.tail_call import TailCall


def evaluate(form: Form, env: Environment) -> Value:
    """
    Trampoline evaluator: reduce `form` in `env` to a value.
    """
    while isinstance(form, list):
        if not form:
            return Nil
        head = form[0]
        tail_args = form[1:]

        if isinstance(head, Symbol):
            # --- Special forms: operands unevaluated, may continue the loop ---
            special = SPECIAL_FORMS.get(head)
            if special is not None:
                result = special(tail_args, env, evaluate)
                if isinstance(result, TailCall):
                    form = result.form
                    continue
                return result

            # --- Builtins: eager, always terminal ---
            builtin = BUILTINS.get(head)
            if builtin is not None:
                return builtin(env, [evaluate(arg, env) for arg in tail_args])

        fn = evaluate(head, env)

        if isinstance(fn, Function):
            # The closure absorbs the caller's bindings and becomes the scope.
            fn.env.merge_from(env)
            args = [evaluate(arg, env) for arg in tail_args]
            for i, param in enumerate(fn.params):
                fn.env.vars[param] = args[i] if i < len(args) else Nil
            env = fn.env
            form = fn.body
            continue

        if not tail_args:
            # A parenthesized expression: (x) is x
            return fn

        if isinstance(fn, Table):
            value = fn
            for key_form in tail_args:
                value = get_field(value, resolve_key(key_form, env, evaluate))
            return value

        raise PeraTypeError(f"Cannot call {fn!r}: not a function")

    # --- Identifiers resolve in the environment, literals return as-is ---
    if isinstance(form, Symbol):
        return env.lookup(form)
    return form
