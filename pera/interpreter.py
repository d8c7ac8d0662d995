from __future__ import annotations

import sys

from pera import Value
from pera.config import get_recursion_limit
from pera.evaluation.evaluator import evaluate
from pera.printer import render
from pera.reader.parser import parse_program
from pera.types.environment import Environment


class Interpreter:
    """
    Parses and evaluates Pera programs.
    Keeps one top-level Environment across calls to `eval`.
    """

    def __init__(self, prelude: str | None = None):
        # Eager builtins still recurse on the host for nested operands
        limit = get_recursion_limit()
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)

        self.env: Environment = Environment()

        if prelude:
            self.eval(prelude)

    def eval(self, code: str) -> Value:
        """Evaluate a program; the result is the value of its last form."""
        return evaluate(parse_program(code), self.env)

    def run(self, code: str) -> Value:
        """Evaluate a program and print its rendered result."""
        result = self.eval(code)
        print(render(result))
        return result


#  Example use-age:
if __name__ == "__main__":
    programs = [
        """
        on (f n)
          if = n 0
            1
            * n (f - n 1)
        (f 5)
        """,
        """
        on (f n)
          (do
            to r 1
            to i 1
            while <= i n
              to r * r inc i
            r)
        (f 5)
        """,
        """
        on (sum n acc)
          if = n 0
            acc
            (sum - n 1 + n acc)
        (sum 1000000 0)
        """,
        """
        on (make_gen i)
          (do
            on (gen) (do (inc i) (print i))
            gen)
        to g (make_gen 0)
        (g)
        (g)
        """,
        """
        to t (table 1 2 3 : ten 10)
        print # t
        pop t
        pop t
        push t 10
        push t 20
        t
        """,
    ]

    for code in programs:
        Interpreter().run(code)
