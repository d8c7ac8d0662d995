from pera import Value
from pera.types.nil import Nil


def is_truthy(value: Value) -> bool:
    """nil and false are false, a number is true when non-zero, anything else is true."""
    if value is Nil or value is False:
        return False
    if value is True:
        return True
    if isinstance(value, (int, float)):
        return value != 0
    return True
