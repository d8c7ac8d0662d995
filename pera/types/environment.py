"""Runtime environment for Pera.

The Environment is a single flat mapping from Symbols to values, used for
variables and function definitions alike. There is no `outer` chain: when a
function is called, the caller's bindings are merged into the function's own
closure environment, which then becomes the current environment.
"""

from __future__ import annotations

import copy
from io import StringIO
from typing import Optional

from pera import Value
from pera.errors import PeraNameError
from pera.types.nil import Nil
from pera.types.symbol import Symbol


class Environment:
    """Flat mapping from Symbols to Pera values."""

    __slots__ = ("vars",)

    def __init__(self, bindings: Optional[dict[Symbol, Value]] = None):
        self.vars: dict[Symbol, Value] = dict(bindings) if bindings else {}

    def define(self, name: Symbol, value: Value) -> None:
        """Bind `name` to `value`, overwriting any existing binding.

        Raises PeraNameError if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise PeraNameError(f"Cannot bind {name!r}: not an identifier")
        self.vars[name] = value

    def lookup(self, name: Symbol) -> Value:
        """Look up the value bound to `name`; unbound names resolve to Nil."""
        return self.vars.get(name, Nil)

    def is_bound(self, name: Symbol) -> bool:
        return name in self.vars

    def snapshot(self) -> Environment:
        """Deep copy of every binding, taken when a function is defined.

        Tables and nested functions are cloned too, so the snapshot shares no
        mutable state with this environment.
        """
        return Environment(copy.deepcopy(self.vars))

    def merge_from(self, caller: Environment) -> None:
        """Overlay every binding of `caller` onto this environment in place.

        Same-named bindings are overwritten by the caller's; bindings only
        present here survive. Repeated calls accumulate.
        """
        if caller is not self:
            self.vars.update(caller.vars)

    def __contains__(self, name: Symbol) -> bool:
        return name in self.vars

    def __len__(self) -> int:
        return len(self.vars)

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment ")
            buffer.write(" ".join(str(k) for k in self.vars))
            buffer.write(">")
            return buffer.getvalue()
