from enum import Enum
import math
import operator

from .util import EvalError


_INT64_MIN = -2 ** 63
_INT64_MAX = 2 ** 63 - 1


class Operator(Enum):
    '''
    Infix operators, by symbol and precedence; higher binds tighter.

    The parentheses are sentinels: they only bound grouping while converting
    to postfix, and are never applied.
    '''
    ADD = '+', 4
    SUBTRACT = '-', 4
    MULTIPLY = '*', 5
    DIVIDE = '/', 5
    MODULO = '%', 5
    EXPONENT = '**', 6
    BIT_AND = '&', 3
    XOR = '^', 2
    BIT_OR = '|', 1

    LPAREN = '(', 0
    RPAREN = ')', 0

    def __init__(self, symbol, precedence):
        self.symbol = symbol
        self.precedence = precedence

    def __str__(self):
        return self.symbol

    def apply(self, a, b):
        '''
        Apply operator to a and b, as a OP b.
        '''
        try:
            semantics = SEMANTICS[self]
        except KeyError:
            raise EvalError('Cannot apply {}'.format(self.symbol)) from None
        return float(semantics(a, b))


def _int64(n):
    '''
    Truncate float toward zero into a signed 64-bit integer, saturating.
    '''
    if math.isnan(n):
        return 0
    if n <= _INT64_MIN:
        return _INT64_MIN
    if n >= _INT64_MAX:
        return _INT64_MAX
    return int(n)


def _odd(n):
    return math.isfinite(n) and n % 2 == 1


def divide(a, b):
    '''
    a / b, where dividing by zero gives a signed infinity, or NaN for 0 / 0.
    '''
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def remainder(a, b):
    '''
    Truncated remainder of a / b, with the sign of a.

    NaN where there is none: for a zero divisor, or an infinite dividend.
    '''
    if b == 0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def power(a, b):
    '''
    a raised to b, overflowing to infinity; NaN for a real-less result.
    '''
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.copysign(math.inf, a) if _odd(b) else math.inf
    except ValueError:
        # Zero to a negative power is a pole; a negative base to a
        # fractional power has no real value
        if a == 0:
            return math.copysign(math.inf, a) if _odd(b) else math.inf
        return math.nan


def _bitwise(f):
    def wrapped(a, b):
        return f(_int64(a), _int64(b))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


SEMANTICS = {
    # Arithmetic
    Operator.ADD: operator.__add__,
    Operator.SUBTRACT: operator.__sub__,
    Operator.MULTIPLY: operator.__mul__,
    Operator.DIVIDE: divide,
    Operator.MODULO: remainder,
    Operator.EXPONENT: power,

    # Bitwise
    Operator.BIT_AND: _bitwise(operator.__and__),
    Operator.XOR: _bitwise(operator.__xor__),
    Operator.BIT_OR: _bitwise(operator.__or__),
}
