import pytest
from hypothesis import given, strategies as st

from pera.errors import PeraArityError, PeraSyntaxError
from pera.reader.parser import ARITY, TokenStream, lex, lex_spans, parse_program
from pera.types.nil import Nil
from pera.types.symbol import Symbol

DO = Symbol("do")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("+ 1 2", ["(", "do", "+", "1", "2", ")"]),
        ("(f n)", ["(", "do", "(", "f", "n", ")", ")"]),
        ("a(b", ["(", "do", "a", "(", "b", ")"]),
        ("  print:x  ", ["(", "do", "print:x", ")"]),
        ("on\n(f)\tx", ["(", "do", "on", "(", "f", ")", "x", ")"]),
        ("", ["(", "do", ")"]),
    ]
)
def test_lexer_wraps_program_in_do(source, expected):
    assert list(lex(source)) == expected


def test_lex_spans_reports_offsets():
    assert list(lex_spans("on (f n)")) == [
        ("on", 0, 2),
        ("(", 3, 4),
        ("f", 4, 5),
        ("n", 6, 7),
        (")", 7, 8),
    ]


@given(st.text(alphabet="ab1+ ()\n\t.:", max_size=40))
def test_tokens_cover_every_non_space_character(text):
    tokens = [tok for tok, _, _ in lex_spans(text)]
    assert "".join(tokens) == "".join(text.split())
    for tok in tokens:
        assert tok in ("(", ")") or ("(" not in tok and ")" not in tok)


@pytest.mark.parametrize(
    "source, expected",
    [
        ("nil", [DO, Nil]),
        ("true false", [DO, True, False]),
        ("123", [DO, 123.0]),
        ("-45", [DO, -45.0]),
        ("3.14", [DO, 3.14]),
        ("1e3", [DO, 1000.0]),
        ("x", [DO, Symbol("x")]),
        ("+ 1 2", [DO, [Symbol("+"), 1.0, 2.0]]),
        ("+ 1 * 2 3", [DO, [Symbol("+"), 1.0, [Symbol("*"), 2.0, 3.0]]]),
        ("(+ 1 2)", [DO, [Symbol("+"), 1.0, 2.0]]),
        ("((+ 1 2))", [DO, [Symbol("+"), 1.0, 2.0]]),
        ("(f 5)", [DO, [Symbol("f"), 5.0]]),
        ("(x)", [DO, [Symbol("x")]]),
        ("()", [DO, []]),
        ("- n 1", [DO, [Symbol("-"), Symbol("n"), 1.0]]),
        ("not = a b", [DO, [Symbol("not"), [Symbol("="), Symbol("a"), Symbol("b")]]]),
    ]
)
def test_parser(source, expected):
    assert parse_program(source) == expected


def test_empty_program_is_empty_do():
    assert parse_program("") == [DO]


def test_operator_reads_operands_across_lines():
    source = """
    on (f n)
      if = n 0
        1
        * n (f - n 1)
    (f 5)
    """
    program = parse_program(source)
    assert len(program) == 3
    on_form = program[1]
    assert on_form[0] == Symbol("on")
    assert on_form[1] == [Symbol("f"), Symbol("n")]
    assert on_form[2] == [
        Symbol("if"),
        [Symbol("="), Symbol("n"), 0.0],
        1.0,
        [Symbol("*"), Symbol("n"), [Symbol("f"), [Symbol("-"), Symbol("n"), 1.0]]],
    ]
    assert program[2] == [Symbol("f"), 5.0]


def test_table_field_marker_parses_as_call():
    assert parse_program("(table 1 : ten 10)") == [
        DO,
        [Symbol("table"), 1.0, [Symbol(":"), Symbol("ten"), 10.0]],
    ]


def test_every_operator_consumes_its_arity():
    for op, n in ARITY.items():
        source = " ".join([op] + ["1"] * n)
        form = parse_program(source)[1]
        assert form[0] == Symbol(op)
        assert len(form) == n + 1


@pytest.mark.parametrize("source", ["+ 1", "(+ 1)", "if 1 2", "put t k", "not"])
def test_missing_operands_raise_arity_error(source):
    with pytest.raises(PeraArityError):
        parse_program(source)


@pytest.mark.parametrize("source", ["(+ 1 2", "((a b)", "+ 1 2)", "a ) b"])
def test_unbalanced_parens_raise_syntax_error(source):
    with pytest.raises(PeraSyntaxError):
        parse_program(source)


def test_token_stream_reads_forms_one_at_a_time():
    stream = TokenStream(iter(["+", "1", "2", "x"]))
    assert stream.parse_expr() == [Symbol("+"), 1.0, 2.0]
    assert stream.parse_expr() == Symbol("x")
    assert stream.at_end()
