from collections import deque
from typing import NamedTuple

import html

from arsenal import Integerizer
from graphviz import Digraph

from textfst.symbols import EPSILON, EPSILON_TOKEN, NO_SYMBOL


# multiplicative identity for arc and final weights
ONE = 1.0

NO_STATE = -1

# ' ' is not a usable standalone token in a symbol file, so it is spelled out
SPACE_TOKEN = '_space_'

# trails each word an output token stands for, e.g. 'seven '
SEPARATOR = ' '


class UnsupportedSymbol(ValueError):
    "Input character with no code in the input symbol table."

    def __init__(self, char):
        self.char = char
        super().__init__(f'Unsupported symbol: {char!r}')


def char_token(c):
    "Token used in symbol tables for the character `c`."
    return SPACE_TOKEN if c == ' ' else c


class Arc(NamedTuple):
    ilabel: int
    olabel: int
    weight: float
    nextstate: int


class FST:
    """
    Weighted transducer over integer symbol codes.

    States are dense integers `0..num_states-1`; each state has an ordered
    list of outgoing arcs and, when final, a final weight.  Weights are
    non-negative reals combined by multiplication (identity `ONE`).  The
    symbol tables are optional references used for display and decoding;
    the graph does not own them.
    """

    def __init__(self, isymbols=None, osymbols=None):
        self.isymbols = isymbols
        self.osymbols = osymbols
        self._arcs = []
        self._final = {}
        self._start = NO_STATE

    def __repr__(self):
        return f'{__class__.__name__}({self.num_states()} states)'

    def __str__(self):
        output = []
        output.append('{')
        for p in self.states():
            output.append(f'  {p} \t\t({p == self._start}, {self.is_final(p)})')
            for a, b, w, q in self.arcs(p):
                output.append(f'    {self._fmt(a, b)} / {w:g}: {q}')
        output.append('}')
        return '\n'.join(output)

    def __eq__(self, other):
        return (
            isinstance(other, FST)
            and self._start == other._start
            and self._arcs == other._arcs
            and self._final == other._final
        )

    #___________________________________________________________________________
    # Construction

    def add_state(self):
        self._arcs.append([])
        return len(self._arcs) - 1

    def set_start(self, q):
        self._check_state(q)
        self._start = q

    def set_final(self, q, weight=ONE):
        self._check_state(q)
        self._final[q] = _check_weight(weight)

    def add_arc(self, i, a, b, j, weight=ONE):
        self._check_state(i)
        self._check_state(j)
        self._arcs[i].append(Arc(a, b, _check_weight(weight), j))

    def _check_state(self, q):
        if not isinstance(q, int) or not 0 <= q < len(self._arcs):
            raise ValueError(f'No state {q!r} in {self!r}')

    #___________________________________________________________________________
    # Queries

    @property
    def start(self):
        return self._start

    def num_states(self):
        return len(self._arcs)

    def states(self):
        return range(len(self._arcs))

    def arcs(self, i):
        return iter(self._arcs[i])

    def num_arcs(self, i=None):
        if i is None:
            return sum(len(x) for x in self._arcs)
        return len(self._arcs[i])

    def is_final(self, q):
        return q in self._final

    def final(self, q):
        "Final weight of `q`, or None when `q` is not final."
        return self._final.get(q)

    def finals(self):
        return dict(self._final)

    def is_linear(self):
        "No branching: at most one arc per state, and none leaving a final state."
        return all(
            len(self._arcs[q]) <= (0 if self.is_final(q) else 1)
            for q in self.states()
        )

    #___________________________________________________________________________
    # Builders

    @classmethod
    def from_string(cls, xs, symbols):
        """
        Linear acceptor for `xs`: state `i` reads and writes the code of
        `xs[i]` and moves to `i+1`; the last state is final.

        Raises `UnsupportedSymbol` for the first character whose token is not
        in `symbols`; no graph is built in that case.
        """
        codes = []
        for c in xs:
            code = symbols.lookup(char_token(c))
            if code == NO_SYMBOL:
                raise UnsupportedSymbol(c)
            codes.append(code)

        m = cls(symbols, symbols)
        m.set_start(m.add_state())
        for code in codes:
            j = m.add_state()
            m.add_arc(j - 1, code, code, j)
        m.set_final(m.num_states() - 1)
        return m

    def spawn(self):
        return self.__class__(self.isymbols, self.osymbols)

    def __matmul__(self, other):
        "Relation composition."
        from textfst.compose import compose
        return compose(self, other)

    #___________________________________________________________________________
    # Connection

    def reachable(self):
        if self._start == NO_STATE:
            return set()
        reachable = {self._start}
        dq = deque([self._start])
        while dq:
            s = dq.popleft()
            for _, _, _, t in self.arcs(s):
                if t not in reachable:
                    reachable.add(t)
                    dq.append(t)
        return reachable

    def coreachable(self):
        radj = [[] for _ in self.states()]
        for q in self.states():
            for _, _, _, dst in self.arcs(q):
                radj[dst].append(q)
        coreachable = set(self._final)
        dq = deque(self._final)
        while dq:
            s = dq.popleft()
            for t in radj[s]:
                if t not in coreachable:
                    coreachable.add(t)
                    dq.append(t)
        return coreachable

    def connect(self):
        """
        Return a copy holding only the states on some start → final path,
        renumbered in breadth-first order from the start state.  The result is
        empty (zero states) when no final state is reachable.
        """
        keep = self.reachable() & self.coreachable()
        m = self.spawn()
        if self._start not in keep:
            return m

        f = Integerizer()
        order = [self._start]
        f(self._start)
        for q in order:
            for _, _, _, t in self.arcs(q):
                if t in keep and t not in f:
                    f(t)
                    order.append(t)

        for _ in order:
            m.add_state()
        m.set_start(f(self._start))
        for q in order:
            for a, b, w, t in self.arcs(q):
                if t in keep:
                    m.add_arc(f(q), a, b, f(t), w)
            if self.is_final(q):
                m.set_final(f(q), self.final(q))
        return m

    #___________________________________________________________________________
    # Text serialization
    #
    #   start   <state>
    #   states  <count>
    #   arc     <src> <dst> <ilabel> <olabel> <weight>
    #   final   <state> <weight>
    #
    # fields are tab-separated; arcs are listed per state in their order.

    def write_text(self, path):
        with open(path, 'w', encoding='utf-8') as f:
            f.write(f'states\t{self.num_states()}\n')
            f.write(f'start\t{self._start}\n')
            for i in self.states():
                for a, b, w, j in self.arcs(i):
                    f.write(f'arc\t{i}\t{j}\t{a}\t{b}\t{w!r}\n')
            for q, w in sorted(self._final.items()):
                f.write(f'final\t{q}\t{w!r}\n')

    @classmethod
    def read_text(cls, path, isymbols=None, osymbols=None):
        m = cls(isymbols, osymbols)
        with open(path, encoding='utf-8') as f:
            for lineno, line in enumerate(f, 1):
                fields = line.split()
                if not fields:
                    continue
                try:
                    kind, *args = fields
                    if kind == 'states':
                        [n] = args
                        for _ in range(int(n)):
                            m.add_state()
                    elif kind == 'start':
                        [q] = args
                        if int(q) != NO_STATE:
                            m.set_start(int(q))
                    elif kind == 'arc':
                        i, j, a, b, w = args
                        m.add_arc(int(i), int(a), int(b), int(j), float(w))
                    elif kind == 'final':
                        q, w = args
                        m.set_final(int(q), float(w))
                    else:
                        raise ValueError(f'unknown record {kind!r}')
                except ValueError as e:
                    raise ValueError(f'{path}:{lineno}: {e}') from e
        return m

    #___________________________________________________________________________
    # Display

    def _fmt(self, a, b, isymbols=None, osymbols=None):
        isymbols = self.isymbols if isymbols is None else isymbols
        osymbols = self.osymbols if osymbols is None else osymbols
        x = _token(isymbols, a)
        y = _token(osymbols, b)
        return x if a == b and isymbols is osymbols else f'{x}:{y}'

    def _repr_mimebundle_(self, *args, **kwargs):
        if not self.num_states():
            return {'image/svg+xml': '<center>∅</center>'}
        return self.graphviz()._repr_mimebundle_(*args, **kwargs)

    def graphviz(self, isymbols=None, osymbols=None):
        "Render with labels from the given tables, defaulting to the machine's own."
        g = Digraph(
            graph_attr=dict(rankdir='LR'),
            node_attr=dict(
                fontname='Monospace',
                fontsize='8',
                height='.05', width='.05',
                margin="0.055,0.042",
                shape='box',
                style='rounded',
            ),
            edge_attr=dict(
                arrowsize='0.3',
                fontname='Monospace',
                fontsize='8'
            ),
        )

        if self._start != NO_STATE:
            g.node('<start>', label='', shape='point', height='0', width='0')
            g.edge('<start>', str(self._start), label='')

        for i in self.states():
            label = str(i) if self.final(i) in (None, ONE) else f'{i}/{self.final(i):g}'
            g.node(str(i), label=html.escape(label),
                   peripheries='2' if self.is_final(i) else '1')

        for i in self.states():
            for a, b, w, j in self.arcs(i):
                lbl = self._fmt(a, b, isymbols, osymbols)
                if w != ONE:
                    lbl = f'{lbl}/{w:g}'
                g.edge(str(i), str(j), label=html.escape(lbl))

        return g


def _token(symbols, code):
    if code == EPSILON:
        return 'ε'
    if symbols is None:
        return str(code)
    token = symbols.resolve(code)
    return 'ε' if token == EPSILON_TOKEN else token


def _check_weight(w):
    w = float(w)
    if not w >= 0:
        raise ValueError(f'Weights must be non-negative, got {w!r}')
    return w
