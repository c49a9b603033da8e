'''
Expression tree.

An expression is a Sequence: one flat infix run of operands and Operators,
parentheses included. Only function calls nest, through their arguments,
each of which is a Sequence of its own. Precedence is resolved when the
Sequence is evaluated, not here.
'''

from dataclasses import dataclass

from .formatting import format_number


__all__ = ('Number', 'Variable', 'FunctionCall', 'Sequence', 'is_operand')


@dataclass(frozen=True)
class Number:
    value: float

    def __str__(self):
        return format_number(self.value)


@dataclass(frozen=True)
class Variable:
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class FunctionCall:
    name: str
    arguments: tuple = ()

    def __str__(self):
        return '{}({})'.format(self.name, ', '.join(map(str, self.arguments)))


@dataclass(frozen=True)
class Sequence:
    elements: tuple = ()

    def __str__(self):
        return ' '.join(map(str, self.elements))


OPERANDS = Number, Variable, FunctionCall, Sequence


def is_operand(node):
    return isinstance(node, OPERANDS)

