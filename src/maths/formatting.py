'''
Rendering of results as text, in decimal, hexadecimal or binary.
'''

import math

from .lexer import Radix


_DIGITS = '0123456789abcdef'
_PREFIXES = {
    Radix.HEXADECIMAL: '0x',
    Radix.BINARY: '0b',
}


def format_number(n):
    '''
    Shortest text reading back as n, without the .0 on integral values.
    '''
    if math.isfinite(n) and int(n) == n:
        return repr(int(n))
    return repr(n)


def _in_radix(n, radix):
    '''
    Digits of n in radix, with a . before any fractional part.

    Every finite float has a finite expansion in base 2 and 16, so the
    fraction always runs out.
    '''
    if not math.isfinite(n):
        return repr(n)
    sign = '-' if n < 0 else ''
    n = abs(n)
    fraction, whole = math.modf(n)
    whole = int(whole)
    digits = []
    while whole:
        whole, digit = divmod(whole, radix)
        digits.append(_DIGITS[digit])
    text = ''.join(reversed(digits)) or '0'
    if fraction:
        text += '.'
        while fraction:
            fraction, digit = math.modf(fraction * radix)
            text += _DIGITS[int(digit)]
    return sign + text


def to_hex(n):
    '''
    Render n in hexadecimal: 12.1875 is c.3
    '''
    return _in_radix(n, Radix.HEXADECIMAL)


def to_bin(n):
    '''
    Render n in binary: 5.25 is 101.01
    '''
    return _in_radix(n, Radix.BINARY)


def render(n, radix=Radix.DECIMAL):
    '''
    Render a result for display, prefixed with 0x or 0b in those radixes.
    '''
    if radix is Radix.DECIMAL:
        return format_number(n)
    text = _in_radix(n, radix)
    if not math.isfinite(n):
        return text
    sign, digits = ('-', text[1:]) if text.startswith('-') else ('', text)
    return sign + _PREFIXES[radix] + digits
