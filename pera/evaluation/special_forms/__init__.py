"""Registry of special forms for the Pera evaluator.

Maps Symbols to handler functions that receive their operands unevaluated.
The evaluator consults this table before eager builtins and user functions.

Handlers in the tail set (`do`, `if` and the `to` block) may return a
TailCall instead of a value; the trampoline then continues on the carried
form in the same environment.
"""

from pera.types.symbol import Symbol
from pera.evaluation.special_forms.do_form import do_form
from pera.evaluation.special_forms.if_form import if_form
from pera.evaluation.special_forms.while_form import while_form
from pera.evaluation.special_forms.define_form import on_form
from pera.evaluation.special_forms.set_form import to_form, inc_form, dec_form
from pera.evaluation.special_forms.table_forms import table_form, field_form, put_form, field_marker_form

SPECIAL_FORMS = {
    Symbol("do"): do_form,
    Symbol("if"): if_form,
    Symbol("while"): while_form,
    Symbol("on"): on_form,
    Symbol("to"): to_form,
    Symbol("inc"): inc_form,
    Symbol("dec"): dec_form,
    Symbol("table"): table_form,
    Symbol("."): field_form,
    Symbol("put"): put_form,
    Symbol(":"): field_marker_form,
}
