"""Tests for textfst/decode.py."""
import pytest

from textfst.decode import shortest_path, output_tokens, render, decode, topological_order
from textfst.fst import FST, ONE
from textfst.symbols import SymbolTable, UnknownCode, EPSILON


def branching(symbols):
    "Two competing paths 0 → 1: `x` with weight 3, `y` with weight 2."
    m = FST(symbols, symbols)
    s, t = m.add_state(), m.add_state()
    m.set_start(s)
    m.set_final(t)
    m.add_arc(s, symbols.lookup('x'), symbols.lookup('x'), t, weight=3)
    m.add_arc(s, symbols.lookup('y'), symbols.lookup('y'), t, weight=2)
    return m


# ── Best path ─────────────────────────────────────────────────────────────────

def test_empty_machine():
    assert decode(FST()) == ''
    assert shortest_path(FST()).num_states() == 0


def test_shortest_path_prefers_lower_weight():
    t = SymbolTable(tokens=['x', 'y'])
    m = branching(t)
    p = shortest_path(m)
    assert p.is_linear()
    assert p.num_states() == 2
    assert decode(m) == 'y'


def test_shortest_path_counts_final_weights():
    t = SymbolTable(tokens=['x', 'y'])
    m = FST(t, t)
    s, u, v = m.add_state(), m.add_state(), m.add_state()
    m.set_start(s)
    m.add_arc(s, 1, 1, u, weight=1)
    m.add_arc(s, 2, 2, v, weight=2)
    m.set_final(u, 10)
    m.set_final(v, 1)
    assert output_tokens(m) == ['y']
    assert shortest_path(m).finals() == {1: 1.0}


def test_shortest_path_ties_go_to_first_arc():
    t = SymbolTable(tokens=['x', 'y'])
    m = FST(t, t)
    s, u = m.add_state(), m.add_state()
    m.set_start(s)
    m.set_final(u)
    m.add_arc(s, 1, 1, u)
    m.add_arc(s, 2, 2, u)
    assert decode(m) == 'x'


def test_sub_unit_weights_on_acyclic_machine():
    """`x/1` loses to `y/2 · y/0.1`, whose product is 0.2."""
    t = SymbolTable(tokens=['x', 'y'])
    m = FST(t, t)
    s, u, v = m.add_state(), m.add_state(), m.add_state()
    m.set_start(s)
    m.set_final(v)
    m.add_arc(s, 1, 1, v, weight=1)
    m.add_arc(s, 2, 2, u, weight=2)
    m.add_arc(u, 2, 2, v, weight=0.1)
    assert decode(m) == 'yy'
    assert shortest_path(m).num_states() == 3


def test_sub_unit_weights_on_cycle_are_rejected():
    t = SymbolTable(tokens=['x', 'y'])
    m = FST(t, t)
    s, u = m.add_state(), m.add_state()
    m.set_start(s)
    m.set_final(u)
    m.add_arc(s, 1, 1, s, weight=0.5)
    m.add_arc(s, 2, 2, u)
    with pytest.raises(ValueError, match='cycle'):
        shortest_path(m)


def test_topological_order():
    m = FST()
    for _ in range(4):
        m.add_state()
    m.set_start(0)
    m.add_arc(0, 1, 1, 2)
    m.add_arc(2, 1, 1, 1)
    m.add_arc(0, 1, 1, 1)
    m.add_arc(3, 1, 1, 0)       # unreachable
    assert topological_order(m) == [0, 2, 1]
    m.add_arc(1, 1, 1, 0)
    assert topological_order(m) is None


def test_no_accepting_path():
    t = SymbolTable(tokens=['x'])
    m = FST(t, t)
    s = m.add_state()
    m.set_start(s)
    m.add_arc(s, 1, 1, s)
    assert shortest_path(m).num_states() == 0
    assert decode(m) == ''


def test_cycle_is_not_followed():
    t = SymbolTable(tokens=['x', 'y'])
    m = FST(t, t)
    s, u = m.add_state(), m.add_state()
    m.set_start(s)
    m.set_final(u)
    m.add_arc(s, 1, 1, s, weight=2)
    m.add_arc(s, 2, 2, u)
    assert decode(m) == 'y'


# ── Output tokens ─────────────────────────────────────────────────────────────

def test_epsilon_and_empty_tokens_are_skipped():
    t = SymbolTable(tokens=['', 'a'])
    m = FST(t, t)
    m.set_start(m.add_state())
    for code in [1, EPSILON, 2, 1]:
        j = m.add_state()
        m.add_arc(j - 1, 2, code, j)
    m.set_final(m.num_states() - 1)
    assert output_tokens(m) == ['a']
    assert decode(m) == 'a'


def test_requires_output_symbols():
    m = FST()
    m.set_start(m.add_state())
    m.set_final(0, ONE)
    with pytest.raises(ValueError, match='no output symbols'):
        output_tokens(m)


def test_unknown_code():
    t = SymbolTable(tokens=['a'])
    m = FST(t, t)
    s, u = m.add_state(), m.add_state()
    m.set_start(s)
    m.set_final(u)
    m.add_arc(s, 1, 7, u)
    with pytest.raises(UnknownCode):
        decode(m)


# ── Rendering ─────────────────────────────────────────────────────────────────

@pytest.mark.parametrize('tokens, expected', [
    (['A', 'B'], 'AB'),
    (['A', '_space_', 'B'], 'A B'),
    (['A', '_space_', '_space_', 'B'], 'A  B'),
    (['zero ', 'seven '], 'zero seven'),
    (['A', 'one ', '_space_', 'B'], 'A one B'),
    (['one ', 'A'], 'one A'),
    (['X', 'nine '], 'X nine'),
    (['B', 'two ', 'B'], 'B two B'),
    (['one ', '_space_'], 'one '),
    (['_space_', 'one '], ' one'),
    ([], ''),
])
def test_render(tokens, expected):
    assert render(tokens) == expected
