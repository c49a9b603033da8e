'''
Infix calculator.

Evaluates short arithmetic expressions: decimal, hexadecimal and binary
numbers, the constants pi, e, inf, true and false, variables, the operators
+ - * / % ** ^ & | with the usual precedence and parentheses, and functions
such as sqrt(x), gcd(a, b, ...), log_2(x) or log_B(x, base).

    >>> from maths import Environment, parse, evaluate
    >>> evaluate(Environment(), parse('1 * (2 + 3)'))
    5.0

Hosting applications only need parse() and evaluate(); the environment they
pass the latter keeps variables from one evaluation to the next.
'''

from .evaluator import Environment, Evaluator, evaluate
from .lexer import Lexer
from .parser import Parser, parse
from .util import MathsError, ParseError, EvalError


__all__ = ('parse', 'evaluate', 'Environment', 'Evaluator', 'Parser',
           'Lexer', 'MathsError', 'ParseError', 'EvalError')
