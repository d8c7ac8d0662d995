class PeraError(Exception):
    """ Base class for all Pera errors"""
    pass

class PeraSyntaxError(PeraError):
    """ Raised when parentheses do not balance or a form is misplaced"""

class PeraArityError(PeraError):
    """ Raised when an operator is given fewer operands than it requires"""

class PeraTypeError(PeraError):
    """ Raised when an operation is applied to a value of the wrong type"""

class PeraNameError(PeraError):
    """ Raised when a binding form is given something other than a name"""
