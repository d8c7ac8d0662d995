# Core type aliases for Pera's data model.
# Forms and values are plain Python objects:
#   - numbers -> float
#   - identifiers -> Symbol
#   - calls and groups -> list, head first
#   - nil -> Nil
# Runtime-only values (Table, Function) live in pera.types.
#
# Naming guidance:
# - Form:  Use in reader/parser code to denote parsed program structure.
# - Value: Use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

# Runtime value alias
Value = Any
# Parsed program alias
Form = Any

# Evaluator function type: passed into special forms and builtins
EvaluatorFn = Callable[..., Value]
