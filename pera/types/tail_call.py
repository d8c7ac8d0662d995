from pera import Form


class TailCall:
    """Continuation handed back to the trampoline by a tail-set form.

    The trampoline replaces its current form with `form` and keeps the
    current environment.
    """

    __slots__ = ("form",)

    def __init__(self, form: Form):
        self.form = form

    def __repr__(self):
        return f"TailCall({self.form!r})"
