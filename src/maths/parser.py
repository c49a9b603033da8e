import logging

from .lexer import Lexer, TokenKind
from .nodes import Number, Variable, FunctionCall, Sequence
from .operators import Operator
from .util import ParseError, annotate


logger = logging.getLogger(__name__)


class Parser:
    '''
    Builds flat expression sequences out of tokens.

    Only structure is recognized here: operands, operators, parentheses, and
    function calls, whose arguments are built recursively. Precedence is left
    to the evaluator.
    '''

    OPERATORS = {
        TokenKind.PLUS: Operator.ADD,
        TokenKind.MINUS: Operator.SUBTRACT,
        TokenKind.ASTERISK: Operator.MULTIPLY,
        TokenKind.SLASH: Operator.DIVIDE,
        TokenKind.PERCENT: Operator.MODULO,
        TokenKind.EXPONENT: Operator.EXPONENT,
        TokenKind.CARET: Operator.XOR,
        TokenKind.AMPERSAND: Operator.BIT_AND,
        TokenKind.PIPE: Operator.BIT_OR,
        TokenKind.LPAREN: Operator.LPAREN,
        TokenKind.RPAREN: Operator.RPAREN,
    }
    # Only meaningful inside a function call's parentheses, if at all
    UNEXPECTED = {
        TokenKind.COMMA,
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.LBRACKET,
        TokenKind.RBRACKET,
    }

    def __init__(self, line=''):
        '''
        :param line: source text of the tokens, quoted in error context.
        '''
        self.line = line

    def build(self, tokens):
        '''
        Build a Sequence out of tokens, up to EOF or the last of them.

        :param tokens: indexable sequence of Tokens.
        '''
        elements = []
        i = 0
        while i < len(tokens):
            token = tokens[i]
            kind = token.kind
            if kind is TokenKind.EOF:
                break
            elif kind is TokenKind.NEWLINE:
                pass
            elif kind is TokenKind.NUMBER:
                elements.append(Number(token.value))
            elif kind is TokenKind.IDENT:
                if i + 1 < len(tokens) and \
                   tokens[i + 1].kind is TokenKind.LPAREN:
                    # Skip the name and the parenthesis
                    call, i = self._consume_call(token.value, tokens, i + 2)
                    elements.append(call)
                else:
                    elements.append(Variable(token.value))
            elif kind in type(self).OPERATORS:
                elements.append(type(self).OPERATORS[kind])
            elif kind in type(self).UNEXPECTED:
                raise ParseError("Unexpected token: '{}'".format(kind.value),
                                 span=token.span)
            elif kind is TokenKind.LET:
                raise ParseError('`let` declarations are not supported',
                                 span=token.span)
            else:
                raise ParseError("Invalid token: '{}'".format(token.value),
                                 span=token.span)
            i += 1
        return Sequence(tuple(elements))

    @annotate('while parsing: `{1}(`')
    def _consume_call(self, name, tokens, i):
        '''
        Build the call to name whose arguments start at tokens[i].

        Return the FunctionCall, and the index of its closing parenthesis.
        '''
        arguments = []
        argument = []  # tokens of the argument being read
        depth = 0  # of parentheses, within the call's own
        while i < len(tokens):
            token = tokens[i]
            kind = token.kind
            if kind is TokenKind.RPAREN and depth == 0:
                # f() has no arguments, but f(1,) has an empty second one
                if arguments or argument:
                    arguments.append(self._argument(argument))
                return FunctionCall(name, tuple(arguments)), i
            elif kind is TokenKind.COMMA and depth == 0:
                arguments.append(self._argument(argument))
                argument = []
            elif kind is TokenKind.EOF:
                raise ParseError('Unterminated call: expected ), found end '
                                 'of input', span=token.span)
            else:
                if kind is TokenKind.LPAREN:
                    depth += 1
                elif kind is TokenKind.RPAREN:
                    depth -= 1
                argument.append(token)
            i += 1
        raise ParseError('Unterminated call: expected ), found end of input')

    def _argument(self, tokens):
        return self._build_argument(self.text(tokens), tokens)

    @annotate('while parsing: `{1}`')
    def _build_argument(self, text, tokens):
        return self.build(tokens)

    def text(self, tokens):
        '''
        Return the source text from the first to the last of tokens.
        '''
        if not tokens:
            return ''
        return self.line[tokens[0].span.start:tokens[-1].span.end]


@annotate('while parsing: `{0}`')
def parse(line):
    '''
    Parse a line of text into an expression.

    Pure: no I/O, and no state shared between calls.
    '''
    expression = Parser(line).build(list(Lexer(line)))
    logger.debug('parsed %r as %s', line, expression)
    return expression
