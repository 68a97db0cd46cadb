"""Tests for textfst/compose.py."""
import pytest

from textfst.compose import compose, CompositionMismatch
from textfst.fst import FST, Arc, ONE
from textfst.rules import case_digit_converter
from textfst.symbols import SymbolTable, EPSILON


def chain(arcs, final_weight=ONE):
    "Linear machine over raw codes from a list of `(ilabel, olabel, weight)`."
    m = FST()
    m.set_start(m.add_state())
    for a, b, w in arcs:
        j = m.add_state()
        m.add_arc(j - 1, a, b, j, w)
    m.set_final(m.num_states() - 1, final_weight)
    return m


def labels(fst):
    return [(arc.ilabel, arc.olabel) for q in fst.states() for arc in fst.arcs(q)]


# ── Acceptor with the converter ───────────────────────────────────────────────

def test_acceptor_with_converter():
    isyms, osyms = SymbolTable('isymbols'), SymbolTable('osymbols')
    converter = case_digit_converter(isyms, osyms)
    acceptor = FST.from_string('ab', isyms)

    C = acceptor @ converter
    assert C.num_states() == 3
    assert C.is_linear()
    assert C.start == 0
    assert C.finals() == {2: ONE}
    assert labels(C) == [
        (isyms.lookup('a'), osyms.lookup('A')),
        (isyms.lookup('b'), osyms.lookup('B')),
    ]
    assert C.isymbols is isyms and C.osymbols is osyms
    assert C == compose(acceptor, converter)


def test_empty_string_with_converter():
    isyms, osyms = SymbolTable('isymbols'), SymbolTable('osymbols')
    C = FST.from_string('', isyms) @ case_digit_converter(isyms, osyms)
    assert C.num_states() == 1
    assert C.is_final(C.start)


def test_mismatch_gives_empty_machine():
    a = chain([(1, 1, ONE), (2, 2, ONE)])
    b = FST()
    s = b.add_state()
    b.set_start(s)
    b.set_final(s)
    b.add_arc(s, 1, 5, s)

    assert (a @ b).num_states() == 0


def test_mismatched_symbol_tables():
    isyms = SymbolTable('isymbols', tokens=['a'])
    other = SymbolTable('other', tokens=['b'])
    with pytest.raises(ValueError, match='Cannot compose'):
        FST.from_string('a', isyms) @ case_digit_converter(other, SymbolTable())


def test_missing_start_state():
    a = chain([(1, 1, ONE)])
    assert (a @ FST()).num_states() == 0


def test_composition_mismatch_message():
    e = CompositionMismatch('ab')
    assert isinstance(e, ValueError)
    assert 'No output' in str(e) and "'ab'" in str(e)


# ── Weights ───────────────────────────────────────────────────────────────────

def test_weights_multiply():
    a = chain([(1, 2, 2.0)])
    b = chain([(2, 3, 3.0)], final_weight=5.0)
    C = a @ b
    assert list(C.arcs(C.start)) == [Arc(1, 3, 6.0, 1)]
    assert C.finals() == {1: 5.0}


# ── Epsilons ──────────────────────────────────────────────────────────────────

def test_epsilon_output_on_left():
    a = chain([(1, EPSILON, ONE), (2, 2, ONE)])
    b = chain([(2, 3, ONE)])
    C = a @ b
    assert C.is_linear()
    assert labels(C) == [(1, EPSILON), (2, 3)]


def test_epsilon_input_on_right():
    a = chain([(1, 1, ONE)])
    b = chain([(EPSILON, 9, ONE), (1, 1, ONE)])
    C = a @ b
    assert C.is_linear()
    assert labels(C) == [(EPSILON, 9), (1, 1)]


def test_epsilon_filter_leaves_one_path():
    # `1:ε` against `ε:2` may interleave in three ways; the filter keeps one.
    a = chain([(1, EPSILON, ONE)])
    b = chain([(EPSILON, 2, ONE)])
    C = a @ b
    assert C.num_states() == 2
    assert labels(C) == [(1, 2)]
