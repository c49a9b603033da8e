'''
Built-in functions.

Every function is a callback taking the evaluator and its *unevaluated*
arguments, so that each decides how many arguments it takes, and in which
order they are evaluated.
'''

from functools import reduce
import math

from .operators import divide, remainder
from .util import EvalError


def _total(f, poles=None, odd=False):
    '''
    Extend f over every float, the way IEEE 754 functions are.

    Overflow gives infinity, signed like x when f is odd. Outside its domain
    f gives NaN, except at its poles, which give their own infinity.
    '''
    poles = poles or {}

    def wrapped(x):
        try:
            return f(x)
        except OverflowError:
            return math.copysign(math.inf, x) if odd else math.inf
        except ValueError:
            return poles.get(x, math.nan)
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


ln = _total(math.log, poles={0.0: -math.inf})


def log(x, base):
    '''
    Logarithm of x in any base, as ln(x) / ln(base).
    '''
    return divide(ln(x), ln(base))


def _finite(f):
    '''
    Leave infinities and NaN as they are, where f would choke on them.
    '''
    def wrapped(x):
        return float(f(x)) if math.isfinite(x) else x
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = f.__name__
    return wrapped


def _round(x):
    '''
    Round to the nearest integer, halves away from zero.
    '''
    whole = math.floor(abs(x))
    if abs(x) - whole >= 0.5:
        whole += 1
    return math.copysign(whole, x)


def _unary(name, f):
    '''
    Callback applying f to the value of its one and only argument.
    '''
    def wrapped(evaluator, arguments):
        if len(arguments) != 1:
            raise EvalError('Expected 1 argument, found {}. Usage: `{}(x)`'
                            .format(len(arguments), name))
        return float(f(evaluator.eval(arguments[0])))
    wrapped.__doc__ = f.__doc__
    wrapped.__name__ = name
    return wrapped


def gcd(a, b):
    '''
    Greatest common divisor of a and b, by Euclid's algorithm on floats.
    '''
    if a == 0:
        return b
    while b > 0:
        a, b = b, remainder(a, b)
    return a


def _gcd(evaluator, arguments):
    '''
    Greatest common divisor of all arguments, evaluated left to right.
    '''
    if not arguments:
        raise EvalError('Expected at least 1 argument, found 0. '
                        'Usage: `gcd(x, ...)`')
    return reduce(gcd, (evaluator.eval(argument) for argument in arguments))


# Functions of one number, by name
UNARY = {
    # Logarithms
    'ln': ln,
    'log': _total(math.log10, poles={0.0: -math.inf}),

    # Trigonometry
    'sin': _total(math.sin),
    'cos': _total(math.cos),
    'tan': _total(math.tan),
    'asin': _total(math.asin),
    'acos': _total(math.acos),
    'atan': math.atan,
    'sinh': _total(math.sinh, odd=True),
    'cosh': _total(math.cosh),
    'tanh': math.tanh,
    'asinh': math.asinh,
    'acosh': _total(math.acosh),
    'atanh': _total(math.atanh, poles={1.0: math.inf, -1.0: -math.inf}),

    # Miscellaneous
    'sqrt': _total(math.sqrt),
    'cbrt': math.cbrt,
    'floor': _finite(math.floor),
    'ceil': _finite(math.ceil),
    'round': _finite(_round),
    'abs': math.fabs,
}


def default_functions():
    '''
    Return a fresh mapping of every built-in function, by name.
    '''
    functions = {name: _unary(name, f) for name, f in UNARY.items()}
    functions['gcd'] = _gcd
    return functions
