"""User-defined function values created by `on`."""

from __future__ import annotations

import copy

from pera import Form
from pera.types.environment import Environment
from pera.types.symbol import Symbol


class Function:
    """A first-class function with parameter names, body and closure env."""

    __slots__ = ("name", "params", "body", "env")

    def __init__(
        self, name: Symbol, params: list[Symbol], body: Form, env: Environment | None = None
    ):
        self.name: Symbol = name
        self.params: list[Symbol] = params
        self.body: Form = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def __deepcopy__(self, memo):
        # Parameters and body are never mutated; only the closure is cloned.
        clone = Function(self.name, self.params, self.body, None)
        memo[id(self)] = clone
        clone.env = copy.deepcopy(self.env, memo)
        return clone

    def __str__(self) -> str:
        return f"<fn {self.name}>"

    def __repr__(self) -> str:
        params = " ".join(str(p) for p in self.params)
        return f"<fn {self.name} ({params})>"
