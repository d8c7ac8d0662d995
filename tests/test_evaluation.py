import math

import pytest

from pera.errors import PeraArityError, PeraNameError, PeraSyntaxError, PeraTypeError
from pera.evaluation.evaluator import evaluate
from pera.types.function import Function
from pera.types.nil import Nil
from pera.types.symbol import Symbol

# -----------------------------------------------------
# Direct evaluation of forms
# -----------------------------------------------------

def test_self_evaluating_literals(env):
    assert evaluate(1.0, env) == 1.0
    assert evaluate(Nil, env) is Nil
    assert evaluate(True, env) is True


def test_symbol_lookup(env):
    env.define(Symbol("x"), 42.0)
    assert evaluate(Symbol("x"), env) == 42.0


def test_unbound_symbol_is_nil(env):
    assert evaluate(Symbol("nope"), env) is Nil


def test_builtin_call_form(env):
    assert evaluate([Symbol("+"), 1.0, [Symbol("*"), 2.0, 3.0]], env) == 7.0


def test_empty_group_is_nil(env):
    assert evaluate([], env) is Nil


def test_group_with_single_value_is_that_value(env):
    env.define(Symbol("x"), 5.0)
    assert evaluate([Symbol("x")], env) == 5.0
    assert evaluate([7.0], env) == 7.0


def test_calling_a_number_with_arguments_fails(env):
    with pytest.raises(PeraTypeError):
        evaluate([1.0, 2.0], env)


# -----------------------------------------------------
# Programs
# -----------------------------------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("+ 1 2", 3),
        ("- 10 4", 6),
        ("* 6 7", 42),
        ("+ 1 * 2 3", 7),
        ("(+ 1 2)", 3),
        ("1 2 3", 3),
        ("(do 1 2 3)", 3),
        ("to x 5 x", 5),
        ("to x 5 to y + x 1 y", 6),
        ("if < 1 2 10 20", 10),
        ("if < 2 1 10 20", 20),
        ("if nil 1 2", 2),
        ("if false 1 2", 2),
        ("if 0 1 2", 2),
        ("if (table) 1 2", 1),
        ("= 1 1", True),
        ("= 1 2", False),
        ("= nil nil", True),
        ("= 1 true", False),
        ("< 1 2", True),
        ("<= 2 2", True),
        ("and 1 nil", False),
        ("and 1 2", True),
        ("or nil 2", True),
        ("or nil false", False),
        ("not nil", True),
        ("not 0", True),
        ("not 1", False),
        (".. 1 2", "12"),
        (".. nil true", "niltrue"),
    ]
)
def test_programs(interp, source, expected):
    assert interp.eval(source) == expected


def test_empty_program_is_nil(interp):
    assert interp.eval("") is Nil
    assert interp.eval("(do)") is Nil


def test_unbound_identifier_is_nil(interp):
    assert interp.eval("missing") is Nil


def test_to_overwrites_and_returns_value(interp):
    assert interp.eval("to x 1") == 1
    assert interp.eval("to x 2") == 2
    assert interp.eval("x") == 2


def test_inc_and_dec_return_previous_value(interp):
    interp.eval("to x 5")
    assert interp.eval("inc x") == 5
    assert interp.eval("x") == 6
    assert interp.eval("dec x") == 6
    assert interp.eval("dec x") == 5
    assert interp.eval("x") == 4


def test_inc_requires_a_number(interp):
    with pytest.raises(PeraTypeError):
        interp.eval("inc missing")


def test_to_requires_an_identifier(interp):
    with pytest.raises(PeraNameError):
        interp.eval("to 1 2")


def test_to_block_binds_pairs_in_order_then_runs_body(interp):
    assert interp.eval("to (a 1 b + a 1) + a b") == 3
    assert interp.eval("a") == 1
    assert interp.eval("b") == 2


def test_to_block_with_no_pairs_is_its_body(interp):
    assert interp.eval("to () 5") == 5


def test_to_block_body_sees_rebound_names(interp, capsys):
    interp.eval("to x 1 to (x 10 y x) (do print x print y)")
    assert capsys.readouterr().out == "10\n10\n"


@pytest.mark.parametrize(
    "source, error",
    [
        ("to (a 1 b) 0", PeraArityError),
        ("to (1 2) 0", PeraNameError),
        ("to (+ 1 2) 0", PeraNameError),
    ]
)
def test_malformed_to_blocks(interp, source, error):
    with pytest.raises(error):
        interp.eval(source)


def test_while_returns_last_body_value(interp):
    # inc yields the value before incrementing: 0, 1, 2
    assert interp.eval("to i 0 while < i 3 inc i") == 2
    assert interp.eval("i") == 3


def test_while_that_never_runs_is_nil(interp):
    assert interp.eval("while false 1") is Nil


def test_while_factorial(interp):
    program = """
    on (f n)
      (do
        to r 1
        to i 1
        while <= i n
          to r * r inc i
        r)
    (f 5)
    """
    assert interp.eval(program) == 120


def test_define_and_call(interp):
    assert interp.eval("on (add a b) + a b (add 2 3)") == 5


def test_non_tail_recursion(interp):
    program = """
    on (f n)
      if = n 0
        1
        * n (f - n 1)
    (f 5)
    """
    assert interp.eval(program) == 120


def test_on_returns_function_without_running_body(interp, capsys):
    fn = interp.eval("on (loud) print 1")
    assert isinstance(fn, Function)
    assert fn.name == Symbol("loud")
    assert capsys.readouterr().out == ""


def test_missing_arguments_bind_nil(interp):
    assert interp.eval("on (g a b) b (g 1)") is Nil


def test_extra_arguments_are_evaluated_and_ignored(interp, capsys):
    assert interp.eval("on (one a) a (one 1 (print 2))") == 1
    assert capsys.readouterr().out == "2\n"


def test_arguments_evaluate_in_caller_scope_before_binding(interp):
    program = """
    on (swap a b) (table a b)
    to a 1
    to b 2
    (swap b a)
    """
    t = interp.eval(program)
    assert t.get(0.0) == 2
    assert t.get(1.0) == 1


def test_function_returned_from_expression_can_be_called(interp):
    program = """
    on (adder) (do on (add1 x) + x 1 add1)
    ((adder) 41)
    """
    assert interp.eval(program) == 42


def test_arithmetic_on_table_is_type_error(interp):
    with pytest.raises(PeraTypeError):
        interp.eval("+ (table) 1")


def test_field_marker_outside_table_fails(interp):
    with pytest.raises(PeraSyntaxError):
        interp.eval(": a 1")


def test_state_persists_between_eval_calls(interp):
    interp.eval("on (sq x) * x x")
    assert interp.eval("(sq 9)") == 81


def test_prelude_is_evaluated(capsys):
    from pera.interpreter import Interpreter
    itp = Interpreter(prelude="to base 10")
    assert itp.eval("+ base 1") == 11


def test_division_result_is_a_float(interp):
    result = interp.eval("/ 1 0")
    assert isinstance(result, float)
    assert math.isinf(result)
