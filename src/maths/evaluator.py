from types import MappingProxyType
import logging
import math

from .functions import default_functions, log
from .nodes import Number, Variable, FunctionCall, Sequence, is_operand
from .operators import Operator
from .util import EvalError, annotate


logger = logging.getLogger(__name__)


class Environment:
    '''
    Names an expression can refer to.

    Constants and functions are fixed once created. Variables belong to
    whoever owns the environment, and are only ever changed by them, between
    evaluations; never by evaluating.
    '''

    CONSTANTS = {
        'pi': math.pi,
        'e': math.e,
        'inf': math.inf,
        'true': 1.0,
        'false': 0.0,
    }

    def __init__(self, variables=None, functions=None):
        '''
        :param variables: initial variable values, copied.
        :param functions: callbacks by name; defaults to the built-ins.
        '''
        self.constants = MappingProxyType(dict(type(self).CONSTANTS))
        self.variables = dict(variables or {})
        if functions is None:
            functions = default_functions()
        self.functions = MappingProxyType(dict(functions))

    def lookup(self, name):
        '''
        Value of a constant or, failing that, a variable.
        '''
        if name in self.constants:
            return self.constants[name]
        try:
            return self.variables[name]
        except KeyError:
            raise EvalError("Undeclared variable or constant: '{}'"
                            .format(name)) from None


class Evaluator:
    '''
    Evaluates expressions against an environment.

    Each Sequence is converted from infix to postfix, then run on a stack,
    like a tiny RPN machine. Operands stay unevaluated on the stack until an
    operator needs them.
    '''

    LOG_PREFIX = 'log_'
    LOG_ANY_BASE = 'B'

    def __init__(self, environment=None):
        self.environment = environment if environment is not None \
            else Environment()

    def evaluate(self, expression):
        '''
        Evaluate expression to a float. Never changes the environment.
        '''
        return self.eval(expression)

    def eval(self, node):
        '''
        Evaluate any node: look up names, run functions, apply operators.
        '''
        if isinstance(node, Number):
            return node.value
        elif isinstance(node, Variable):
            return self.environment.lookup(node.name)
        elif isinstance(node, Sequence):
            return self._eval_sequence(node)
        elif isinstance(node, FunctionCall):
            return self._eval_call(node)
        elif isinstance(node, Operator):
            raise EvalError("Expected expression, found operator '{}'"
                            .format(node))
        raise TypeError('Not an expression node: {!r}'.format(node))

    @staticmethod
    def infix_to_postfix(elements):
        '''
        Reorder infix elements to postfix, by shunting-yard.

        Operators of equal precedence pop each other, so all of them,
        exponentiation too, associate to the left: 2 ** 3 ** 2 is 64.
        '''
        out = []
        operators = []
        for element in elements:
            if element is Operator.LPAREN:
                operators.append(element)
            elif element is Operator.RPAREN:
                while not operators or operators[-1] is not Operator.LPAREN:
                    if not operators:
                        raise EvalError("Unmatched ')': expected operator, "
                                        "found end of input")
                    out.append(operators.pop())
                operators.pop()
            elif isinstance(element, Operator):
                while operators and \
                      element.precedence <= operators[-1].precedence:
                    out.append(operators.pop())
                operators.append(element)
            else:
                out.append(element)
        if Operator.LPAREN in operators:
            raise EvalError("Unmatched '('")
        out.extend(reversed(operators))
        return out

    @annotate('while evaluating: `{1}`')
    def _eval_sequence(self, sequence):
        postfix = self.infix_to_postfix(sequence.elements)
        logger.debug('postfix of %s: %s',
                     sequence, ' '.join(map(str, postfix)))

        stack = []
        for element in postfix:
            if is_operand(element):
                stack.append(element)
                continue
            if len(stack) < 2:
                raise EvalError("Missing operand for '{}'".format(element))
            # Order matters: b is on top
            b = stack.pop()
            a = stack.pop()
            a = self._eval_operand(a)
            b = self._eval_operand(b)
            stack.append(Number(element.apply(a, b)))

        if len(stack) != 1:
            raise EvalError('Invalid expression')
        return self.eval(stack.pop())

    @annotate('while evaluating operand: `{1}`')
    def _eval_operand(self, node):
        return self.eval(node)

    @annotate('while evaluating: `{1}`')
    def _eval_call(self, call):
        '''
        Run a function by name.

        Besides the registered functions, two families of logarithms:
        - log_<BASE>(x) is the log of x in base BASE, written in decimal;
          log_2(x) is log base 2.
        - log_B(x, base) is the log of x in base base.
        '''
        name, arguments = call.name, call.arguments
        function = self.environment.functions.get(name)
        if function is not None:
            return function(self, arguments)

        if name.startswith(type(self).LOG_PREFIX):
            _, base = name.split('_', 1)
            if self._is_decimal(base):
                if len(arguments) != 1:
                    raise EvalError('Expected 1 argument, found {}. '
                                    'Usage: `log_{}(x)`'
                                    .format(len(arguments), base))
                return log(self.eval(arguments[0]), float(base))
            if base == type(self).LOG_ANY_BASE:
                if len(arguments) != 2:
                    raise EvalError('Expected 2 arguments, found {}. '
                                    'Usage: `log_B(x, base)`'
                                    .format(len(arguments)))
                x = self.eval(arguments[0])
                return log(x, self.eval(arguments[1]))
            raise EvalError('Invalid log base: {}, specify the base in '
                            'decimal, for example: `log_2(x)`'.format(base))

        raise EvalError("Unknown function: '{}'".format(name))

    @staticmethod
    def _is_decimal(text):
        # float() would also take digit group underscores
        if '_' in text:
            return False
        try:
            float(text)
        except ValueError:
            return False
        return True


def evaluate(environment, expression):
    '''
    Evaluate expression to a float against environment, without changing it.
    '''
    return Evaluator(environment).evaluate(expression)
