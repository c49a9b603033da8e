from enum import Enum, IntEnum
from functools import reduce
from typing import NamedTuple, Optional
import math
import operator

import regex


# Characters of context shown either side of a highlighted span
_HIGHLIGHT_CONTEXT = 20


class Radix(IntEnum):
    '''
    Numeral system of a literal, valued by its base.
    '''
    DECIMAL = 10
    HEXADECIMAL = 16
    BINARY = 2

    def parse(self, digits):
        '''
        Convert digits, with an optional fractional part, to a float.

        Fractional digits are read as a whole and scaled down by the radix
        once per digit, so 0x1.8 is 1.5 and 0x0.08 is 0.03125.
        '''
        if self is Radix.DECIMAL:
            return float(digits)
        whole, _, fraction = digits.partition('.')
        try:
            number = float(int(whole, self))
        except OverflowError:
            return math.inf
        if fraction:
            number += int(fraction, self) / self ** len(fraction)
        return number


class TokenKind(Enum):
    NUMBER = 'number'
    IDENT = 'identifier'

    PLUS = '+'
    MINUS = '-'
    ASTERISK = '*'
    SLASH = '/'
    PERCENT = '%'
    EXPONENT = '**'
    CARET = '^'
    AMPERSAND = '&'
    PIPE = '|'

    COMMA = ','

    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    LBRACKET = '['
    RBRACKET = ']'

    NEWLINE = '\n'
    LET = 'let'
    EOF = 'end of input'
    INVALID = 'invalid'


# Kinds lexed straight from their own symbol
SYMBOLS = (
    TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH,
    TokenKind.PERCENT, TokenKind.EXPONENT, TokenKind.CARET,
    TokenKind.AMPERSAND, TokenKind.PIPE, TokenKind.COMMA,
    TokenKind.LPAREN, TokenKind.RPAREN, TokenKind.LBRACE, TokenKind.RBRACE,
    TokenKind.LBRACKET, TokenKind.RBRACKET,
)

# A - right after one of these is subtraction, not a sign
_OPERAND_ENDS = {TokenKind.NUMBER, TokenKind.IDENT, TokenKind.RPAREN}


class Span(NamedTuple):
    '''
    Half-open [start, end) range of character offsets into a line.
    '''
    start: int
    end: int

    def highlight(self, line):
        '''
        Return the spanned part of line, with some context, underlined.
        '''
        begin = max(self.start - _HIGHLIGHT_CONTEXT, 0)
        excerpt = line[begin:self.end + _HIGHLIGHT_CONTEXT].rstrip('\n')
        return '{}\n{}{}'.format(excerpt,
                                 ' ' * (self.start - begin),
                                 '^' * (self.end - self.start))


class Token(NamedTuple):
    kind: TokenKind
    span: Span
    # Number value, identifier name, or the text of an invalid token
    value: object = None
    radix: Optional[Radix] = None


class Lexer:
    '''
    Lexer for the infix expression grammar.

    Iterating over a Lexer lexes its line from the start again, lazily, every
    time.
    '''
    HEXADECIMAL = r'0x(?<hex>[0-9a-fA-F]+(?:\.[0-9a-fA-F]*)?)'
    BINARY = r'0b(?<bin>[01]+(?:\.[01]*)?)'
    # 0x and 0b with no digit after them are not a zero followed by a name
    DECIMAL = r'''
               (?!0[xb])
               (?<dec>
                   # 1, 12, 1. (notice trailing dot), 1.3
                   [0-9]+(?:\.[0-9]*)?
                   |
                   # .5
                   \.[0-9]+
               )
               '''
    # Number, of any radix, possibly negative.
    # Whether the sign really belongs to it is decided in lex().
    NUMBER = r'''
              (?<sign>-)?
              (?:
                  {HEXADECIMAL}
                  |
                  {BINARY}
                  |
                  {DECIMAL}
              )
              '''.format(HEXADECIMAL=HEXADECIMAL,
                         BINARY=BINARY,
                         DECIMAL=DECIMAL)
    IDENT = r'[A-Za-z_][A-Za-z0-9_]*'
    # Longest first, so ** wins over *
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape,
                                      sorted((kind.value for kind in SYMBOLS),
                                             key=len,
                                             reverse=True))) + r')'
    SPACE = r'[^\S\n]+'
    # Anything else, one character at a time
    INVALID = r'0[xb]|.'

    # All possible lexemes.
    LEXEME = r'(?<space>' + SPACE + r')|' \
             r'(?<newline>\n)|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<ident>' + IDENT + r')|' \
             r'(?<operator>' + OPERATOR + r')|' \
             r'(?<invalid>' + INVALID + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)
    PATTERN = regex.compile(LEXEME, flags=FLAGS)

    RADIXES = {
        'hex': Radix.HEXADECIMAL,
        'bin': Radix.BINARY,
        'dec': Radix.DECIMAL,
    }

    def __init__(self, line):
        self.line = line

    def __iter__(self):
        return self.lex(self.line)

    def lex(self, line):
        '''
        Take a line and yield all its tokens, ending with exactly one EOF.

        Never fails: characters outside the grammar become INVALID tokens,
        left for the parser to reject.
        '''
        position = 0
        previous = None
        while position < len(line):
            match = type(self).PATTERN.match(line, position)
            groups = self.matchedgroups(match)
            start, end = match.span()
            if 'space' in groups:
                position = end
                continue
            if 'sign' in groups and previous is not None \
               and previous.kind in _OPERAND_ENDS:
                # 3-1 is a subtraction, not 3 followed by -1
                end = start + 1
                token = Token(TokenKind.MINUS, Span(start, end))
            else:
                token = self._token(groups, Span(start, end))
            yield token
            previous = token
            position = end
        yield Token(TokenKind.EOF, Span(len(line), len(line) + 1))

    def _token(self, groups, span):
        '''
        Build the token for one lexeme's matched groups.
        '''
        if 'number' in groups:
            for group, radix in type(self).RADIXES.items():
                if group in groups:
                    value = radix.parse(groups[group])
                    break
            if 'sign' in groups:
                value = -value
            return Token(TokenKind.NUMBER, span, value, radix)
        elif 'ident' in groups:
            if groups['ident'] == TokenKind.LET.value:
                return Token(TokenKind.LET, span)
            return Token(TokenKind.IDENT, span, groups['ident'])
        elif 'operator' in groups:
            return Token(TokenKind(groups['operator']), span)
        elif 'newline' in groups:
            return Token(TokenKind.NEWLINE, span)
        return Token(TokenKind.INVALID, span, groups['invalid'])

    def matchedgroups(self, match):
        '''
        Return the groups a lexeme match actually matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value is not None}
