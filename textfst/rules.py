"""
Transformation machines.

`case_digit_converter` is a one-state machine whose self-loops upper-case
letters, spell out digits and keep spaces.  `reversal` is built for one
particular string, since mirroring positions depends on the string's length.
"""
import string

from textfst.decode import decode
from textfst.fst import FST, SEPARATOR, SPACE_TOKEN, char_token
from textfst.symbols import SymbolTable


DIGIT_WORDS = (
    'zero', 'one', 'two', 'three', 'four',
    'five', 'six', 'seven', 'eight', 'nine',
)


def case_digit_converter(isymbols, osymbols):
    """
    Upper-case `a`-`z`, map each digit to its English name followed by
    `SEPARATOR` (one output token, e.g. `'seven '`), and copy the space
    placeholder.  Tokens are interned into `isymbols`/`osymbols` in that
    order: letters, digits, space.
    """
    m = FST(isymbols, osymbols)
    s = m.add_state()
    m.set_start(s)
    m.set_final(s)

    for c in string.ascii_lowercase:
        m.add_arc(s, isymbols.intern(c), osymbols.intern(c.upper()), s)

    for d, word in enumerate(DIGIT_WORDS):
        m.add_arc(s, isymbols.intern(str(d)), osymbols.intern(word + SEPARATOR), s)

    m.add_arc(s, isymbols.intern(SPACE_TOKEN), osymbols.intern(SPACE_TOKEN), s)
    return m


def reversal(xs, symbols):
    """
    Linear machine over `symbols` whose arc from state `i` to `i+1` reads
    `xs[i]` and writes `xs[n-1-i]`.  Missing tokens are interned.
    """
    codes = [symbols.intern(char_token(c)) for c in xs]
    n = len(codes)

    m = FST(symbols, symbols)
    m.set_start(m.add_state())
    for i in range(n):
        j = m.add_state()
        m.add_arc(i, codes[i], codes[n - 1 - i], j)
    m.set_final(n)
    return m


def reverse(xs):
    "Reverse `xs` by decoding its reversal machine."
    return decode(reversal(xs, SymbolTable('symbols')))
