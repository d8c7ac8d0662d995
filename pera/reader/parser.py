"""
  Pera Lexer and Parser

- A single regular rule splits the source: a maximal run of characters that
  are neither whitespace nor parentheses, or any other single non-space
  character. No comments, no string literals, no escapes.
- The whole program is wrapped as ``(do <source>)`` so a sequence of
  statements is one implicit `do` group.
- Operators in ARITY are prefix operators with a fixed number of operands
  and need no parentheses: ``+ 1 * 2 3`` reads as ``(+ 1 (* 2 3))``.
- Parenthesized groups read until the matching ``)``.

Emits Python primitives:

    - nil -> Nil
    - true / false -> bool
    - numbers -> float
    - identifiers -> Symbol
    - operator calls and groups -> list, head first
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from pera import Form
from pera.errors import PeraArityError, PeraSyntaxError
from pera.types.nil import Nil
from pera.types.symbol import Symbol


TOKEN_RE = re.compile(r"[^()\s]+|\S", re.DOTALL)

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

# Number of operand forms each prefix operator consumes.
ARITY: dict[str, int] = {
    "on": 2,
    "if": 3,
    "while": 2,
    "to": 2,
    "inc": 1,
    "dec": 1,
    "=": 2,
    "<": 2,
    "<=": 2,
    "+": 2,
    "-": 2,
    "*": 2,
    "/": 2,
    "%": 2,
    "..": 2,
    "and": 2,
    "or": 2,
    "not": 1,
    "print": 1,
    "#": 1,
    ":": 2,
    "put": 3,
    "push": 2,
    "pop": 1,
}

LITERALS: dict[str, Form] = {
    "nil": Nil,
    "true": True,
    "false": False,
}


def lex_spans(source: str) -> Iterator[tuple[str, int, int]]:
    """Token generator with offsets: yields (token, start, end) tuples."""
    for m in TOKEN_RE.finditer(source):
        yield m.group(0), m.start(), m.end()


def lex(source: str) -> Iterator[str]:
    """Token generator over the program wrapped as one implicit `do` group."""
    for m in TOKEN_RE.finditer(f"(do {source}\n)"):
        yield m.group(0)


def parse_atom(token: str) -> Form:
    if token in LITERALS:
        return LITERALS[token]
    if NUMBER_RE.fullmatch(token):
        return float(token)
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterable[str]):
        self.tokens = iter(token_iter)
        self.buffer: list[str] = []

    def peek(self) -> Optional[str]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[str]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def parse_expr(self) -> Form:
        token = self.advance()
        if token is None:
            raise PeraSyntaxError("Unexpected end of input")
        if token == ")":
            raise PeraSyntaxError("Unexpected ')'")
        if token == "(":
            return self._parse_group()
        if token in ARITY:
            return [Symbol(token)] + [self._parse_operand(token) for _ in range(ARITY[token])]
        return parse_atom(token)

    def _parse_operand(self, operator: str) -> Form:
        if self.peek() in (None, ")"):
            raise PeraArityError(f"{operator} requires {ARITY[operator]} operands")
        return self.parse_expr()

    def _parse_group(self) -> Form:
        items: list[Form] = []
        while True:
            token = self.peek()
            if token is None:
                raise PeraSyntaxError("Unmatched '('")
            if token == ")":
                self.advance()
                break
            items.append(self.parse_expr())
        # A parenthesized single operator call is the call itself
        if len(items) == 1 and is_operator_call(items[0]):
            return items[0]
        return items

    def at_end(self) -> bool:
        return self.peek() is None


def is_operator_call(form: Form) -> bool:
    return (
        isinstance(form, list)
        and bool(form)
        and isinstance(form[0], Symbol)
        and form[0].id in ARITY
    )


def parse_program(source: str) -> Form:
    """Parse a whole program into a single `do` group."""
    stream = TokenStream(lex(source))
    program = stream.parse_expr()
    if not stream.at_end():
        raise PeraSyntaxError("Unexpected ')'")
    return program
