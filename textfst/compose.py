"""
Weighted composition of two transducers.

The composed machine walks `a` and `b` in lockstep, matching the output label
of an arc in `a` against the input label of an arc in `b`.  Epsilons are
handled with the three-state epsilon filter of Mohri, "Weighted Automata
Algorithms" (Fig. 7, p. 17), carried as a third component of each composed
state instead of as a separate filter machine:

    filter 0  --  any move
    filter 1  --  reached by a move of `a` alone; `b` may not move alone next
    filter 2  --  reached by a move of `b` alone; `a` may not move alone next

so that each pair of paths through `a` and `b` yields exactly one path in the
result.
"""
from collections import defaultdict

from arsenal import Integerizer

from textfst.fst import FST, NO_STATE
from textfst.symbols import EPSILON


class CompositionMismatch(ValueError):
    "The transformation has no path for the input: composition is empty."

    def __init__(self, text=None):
        self.text = text
        msg = 'No output: composition produced an empty transducer'
        if text is not None:
            msg = f'{msg} for input {text!r}'
        super().__init__(msg)


def compose(a, b):
    """
    Compose `a` with `b`.  Arc weights multiply, as do the final weights of
    composed final states.  The result is connected (every state lies on a
    start → final path) and has zero states when no such path exists.
    """
    if a.osymbols is not None and b.isymbols is not None and a.osymbols != b.isymbols:
        raise ValueError('Cannot compose: output symbols of the left machine differ '
                         'from the input symbols of the right machine')

    C = FST(a.isymbols, b.osymbols)
    if a.start == NO_STATE or b.start == NO_STATE:
        return C

    # index arcs in `b` by input label so that matching is fast
    tmp = defaultdict(list)
    for q in b.states():
        for x, z, w, q2 in b.arcs(q):
            tmp[q, x].append((z, w, q2))

    f = Integerizer()
    start = (a.start, b.start, 0)
    C.add_state()
    C.set_start(f(start))
    worklist = [start]

    def arc(src, x, z, w, dst):
        if dst not in f:
            C.add_state()
            worklist.append(dst)
        C.add_arc(f(src), x, z, f(dst), w)

    # breadth-first, so that states are numbered in discovery order
    for PQ in worklist:
        P, Q, k = PQ

        # (P, Q) is simultaneously final in the respective machines
        if a.is_final(P) and b.is_final(Q):
            C.set_final(f(PQ), a.final(P) * b.final(Q))

        for x, y, w1, P2 in a.arcs(P):
            if y == EPSILON:
                # `a` moves alone
                if k != 2:
                    arc(PQ, x, EPSILON, w1, (P2, Q, 1))
                # both move on epsilon
                if k == 0:
                    for z, w2, Q2 in tmp[Q, EPSILON]:
                        arc(PQ, x, z, w1 * w2, (P2, Q2, 0))
            else:
                for z, w2, Q2 in tmp[Q, y]:
                    arc(PQ, x, z, w1 * w2, (P2, Q2, 0))

        # `b` moves alone
        if k != 1:
            for z, w2, Q2 in tmp[Q, EPSILON]:
                arc(PQ, EPSILON, z, w2, (P, Q2, 2))

    return C.connect()
