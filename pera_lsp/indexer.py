from __future__ import annotations

"""
Lightweight indexer for Pera source without evaluating code.

We scan the token stream for definitions and build an index for:
- functions: on (name params...) body
- variables: to name value, to (name value ...) body
- paren balance, and the first error reported by the real parser

Tokens come from the language lexer so offsets match what the parser sees.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from pera.errors import PeraError
from pera.reader.parser import ARITY, lex_spans, parse_program


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int
    col: int
    params: List[str] = field(default_factory=list)


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    paren_balance: int = 0
    parse_error: Optional[str] = None


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _is_name(tok: str) -> bool:
    return tok not in ("(", ")") and tok not in ARITY


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(lex_spans(text))

    i = 0
    while i < len(tokens):
        tok, start, _ = tokens[i]
        if tok == '(':
            idx.paren_balance += 1
        elif tok == ')':
            idx.paren_balance -= 1
        elif tok == 'on' and i + 1 < len(tokens):
            nxt, s, _ = tokens[i + 1]
            if nxt == '(' and i + 2 < len(tokens) and _is_name(tokens[i + 2][0]):
                name, s, _ = tokens[i + 2]
                params = []
                j = i + 3
                while j < len(tokens) and tokens[j][0] != ')':
                    params.append(tokens[j][0])
                    j += 1
                line, col = _position_from_offset(text, s)
                idx.symbols[name] = SymbolDef(name, 'function', line, col, params)
            elif _is_name(nxt):
                line, col = _position_from_offset(text, s)
                idx.symbols[nxt] = SymbolDef(nxt, 'function', line, col)
        elif tok == 'to' and i + 1 < len(tokens):
            nxt, s, _ = tokens[i + 1]
            # functions keep their kind if later rebound
            if _is_name(nxt) and nxt not in idx.symbols:
                line, col = _position_from_offset(text, s)
                idx.symbols[nxt] = SymbolDef(nxt, 'var', line, col)
        i += 1

    try:
        parse_program(text)
    except PeraError as exc:
        idx.parse_error = str(exc)

    return idx


_VARIADIC_SIGNATURES: Dict[str, str] = {
    "do": "(do forms...)",
    "table": "(table items... : key value ...)",
    ".": "(. table key more-keys...)",
}

_OPERAND_NAMES: Dict[str, str] = {
    "on": "on (name params...) body",
    "if": "if cond then else",
    "while": "while cond body",
    "to": "to name value | to (name value ...) body",
    "inc": "inc name",
    "dec": "dec name",
    ":": ": key value",
    "put": "put table key value",
    "push": "push table value",
    "pop": "pop table",
    "#": "# table",
    "print": "print value",
    "not": "not x",
}


def _signature(op: str, arity: int) -> str:
    if op in _OPERAND_NAMES:
        return _OPERAND_NAMES[op]
    return " ".join([op] + ["x", "y", "z"][:arity])


# Builtin signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    **{op: _signature(op, n) for op, n in ARITY.items()},
    **_VARIADIC_SIGNATURES,
}
