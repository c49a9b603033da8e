'''
Lexer tests
'''

from maths.lexer import Lexer, Radix, Span, Token, TokenKind

from pytest import raises


def kinds(line):
    return [token.kind for token in Lexer(line)]


def test_tokens_and_spans():
    tokens = list(Lexer('1 12 0 0x3 let x **'))
    assert tokens == [
        Token(TokenKind.NUMBER, Span(0, 1), 1.0, Radix.DECIMAL),
        Token(TokenKind.NUMBER, Span(2, 4), 12.0, Radix.DECIMAL),
        Token(TokenKind.NUMBER, Span(5, 6), 0.0, Radix.DECIMAL),
        Token(TokenKind.NUMBER, Span(7, 10), 3.0, Radix.HEXADECIMAL),
        Token(TokenKind.LET, Span(11, 14)),
        Token(TokenKind.IDENT, Span(15, 16), 'x'),
        Token(TokenKind.EXPONENT, Span(17, 19)),
        Token(TokenKind.EOF, Span(19, 20)),
    ]


def test_radixes():
    def value(line):
        return list(Lexer(line))[0].value

    assert value('0x1A') == 26.0
    assert value('0b101') == 5.0
    assert value('0x1.8') == 1.5
    assert value('0b101.101') == 5.625
    assert value('0x0.08') == 0.03125
    assert value('123.5123') == 123.5123
    assert value('007') == 7.0
    assert value('1.') == 1.0
    assert value('.5') == 0.5


def test_single_operators():
    assert kinds('+-*/%^&|,(){}[]') == [
        TokenKind.PLUS, TokenKind.MINUS, TokenKind.ASTERISK, TokenKind.SLASH,
        TokenKind.PERCENT, TokenKind.CARET, TokenKind.AMPERSAND,
        TokenKind.PIPE, TokenKind.COMMA, TokenKind.LPAREN, TokenKind.RPAREN,
        TokenKind.LBRACE, TokenKind.RBRACE, TokenKind.LBRACKET,
        TokenKind.RBRACKET, TokenKind.EOF,
    ]


def test_exponent_over_multiply():
    assert kinds('2***3') == [TokenKind.NUMBER, TokenKind.EXPONENT,
                              TokenKind.ASTERISK, TokenKind.NUMBER,
                              TokenKind.EOF]


def test_negative_literal():
    tokens = list(Lexer('-5'))
    assert tokens[0] == Token(TokenKind.NUMBER, Span(0, 2), -5.0,
                              Radix.DECIMAL)
    assert list(Lexer('-0x10'))[0].value == -16.0


def test_minus_after_operand_is_subtraction():
    assert kinds('3-1') == [TokenKind.NUMBER, TokenKind.MINUS,
                            TokenKind.NUMBER, TokenKind.EOF]
    assert kinds('x -1') == [TokenKind.IDENT, TokenKind.MINUS,
                             TokenKind.NUMBER, TokenKind.EOF]
    assert kinds('(2)-1') == [TokenKind.LPAREN, TokenKind.NUMBER,
                              TokenKind.RPAREN, TokenKind.MINUS,
                              TokenKind.NUMBER, TokenKind.EOF]


def test_minus_after_operator_is_sign():
    tokens = list(Lexer('2*-3'))
    assert [token.kind for token in tokens] == [TokenKind.NUMBER,
                                               TokenKind.ASTERISK,
                                               TokenKind.NUMBER,
                                               TokenKind.EOF]
    assert tokens[2].value == -3.0
    assert list(Lexer('(-1)'))[1].value == -1.0


def test_lone_minus():
    assert kinds('- x') == [TokenKind.MINUS, TokenKind.IDENT, TokenKind.EOF]


def test_identifiers():
    tokens = list(Lexer('log_2 _x1 lets'))
    assert [token.value for token in tokens[:-1]] == ['log_2', '_x1', 'lets']
    assert all(token.kind is TokenKind.IDENT for token in tokens[:-1])


def test_whitespace_and_newlines():
    assert kinds('1\t+ \n2') == [TokenKind.NUMBER, TokenKind.PLUS,
                                 TokenKind.NEWLINE, TokenKind.NUMBER,
                                 TokenKind.EOF]


def test_invalid_characters():
    tokens = list(Lexer('1 $ 2'))
    assert tokens[1] == Token(TokenKind.INVALID, Span(2, 3), '$')
    assert list(Lexer('.'))[0].kind is TokenKind.INVALID


def test_radix_prefix_without_digits():
    tokens = list(Lexer('0x'))
    assert tokens[0] == Token(TokenKind.INVALID, Span(0, 2), '0x')
    assert list(Lexer('0b2'))[0].value == '0b'


def test_single_eof():
    tokens = iter(Lexer(''))
    assert next(tokens).kind is TokenKind.EOF
    with raises(StopIteration):
        next(tokens)


def test_restartable():
    lexer = Lexer('sin(pi) + 1')
    assert list(lexer) == list(lexer)


def test_highlight():
    assert Span(2, 3).highlight('1 $ 2') == '1 $ 2\n  ^'
    line = 'x' * 30 + '$$' + 'y' * 30
    assert Span(30, 32).highlight(line) == \
        'x' * 20 + '$$' + 'y' * 20 + '\n' + ' ' * 20 + '^^'
