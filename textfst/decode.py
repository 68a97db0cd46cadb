"""
Single-best-path extraction and rendering of output strings.
"""
import heapq
from collections import deque

from textfst.fst import FST, NO_STATE, ONE, SEPARATOR, SPACE_TOKEN
from textfst.symbols import EPSILON, EPSILON_TOKEN


def shortest_path(fst):
    """
    The best accepting path of `fst` as a linear FST.

    The weight of a path is the product of its arc weights and the final
    weight of its last state; the best path has the smallest weight.  Acyclic
    machines are relaxed in topological order, which is exact for any
    non-negative weights.  Cyclic machines use Dijkstra's algorithm, which is
    only exact when no reachable arc weighs less than `ONE`; otherwise a
    `ValueError` is raised.  Among equally good paths, the one found first
    wins.  Returns an empty FST when there is no accepting path.
    """
    m = fst.spawn()
    if fst.start == NO_STATE:
        return m

    order = topological_order(fst)
    if order is not None:
        best, back = _relax(fst, order)
    else:
        for q in fst.reachable():
            for arc in fst.arcs(q):
                if arc.weight < ONE:
                    raise ValueError(f'Cannot find the best path: {fst!r} has a cycle '
                                     f'and an arc weight {arc.weight:g} below {ONE:g}')
        best, back, order = _dijkstra(fst)

    winner = None
    for q in order:
        if fst.is_final(q) and q in best:
            total = best[q] * fst.final(q)
            if winner is None or total < winner[0]:
                winner = (total, q)

    if winner is None:
        return m

    # follow back pointers from the winning final state to the start
    _, q = winner
    path = []
    while q != fst.start:
        q, arc = back[q]
        path.append(arc)
    path.reverse()

    m.set_start(m.add_state())
    for a, b, w, _ in path:
        j = m.add_state()
        m.add_arc(j - 1, a, b, j, w)
    m.set_final(m.num_states() - 1, fst.final(winner[1]))
    return m


def topological_order(fst):
    "States reachable from the start in topological order, or None if they contain a cycle."
    reachable = fst.reachable()
    indegree = dict.fromkeys(reachable, 0)
    for q in reachable:
        for arc in fst.arcs(q):
            indegree[arc.nextstate] += 1

    order = []
    dq = deque(q for q in sorted(reachable) if indegree[q] == 0)
    while dq:
        q = dq.popleft()
        order.append(q)
        for arc in fst.arcs(q):
            indegree[arc.nextstate] -= 1
            if indegree[arc.nextstate] == 0:
                dq.append(arc.nextstate)

    return order if len(order) == len(reachable) else None


def _relax(fst, order):
    best = {fst.start: ONE}
    back = {}
    for q in order:
        if q not in best:
            continue
        for arc in fst.arcs(q):
            j = arc.nextstate
            dj = best[q] * arc.weight
            if j not in best or dj < best[j]:
                best[j] = dj
                back[j] = (q, arc)
    return best, back


def _dijkstra(fst):
    best = {fst.start: ONE}
    back = {}
    done = set()
    order = []
    counter = 0
    heap = [(ONE, counter, fst.start)]

    while heap:
        d, _, q = heapq.heappop(heap)
        if q in done:
            continue
        done.add(q)
        order.append(q)
        for arc in fst.arcs(q):
            j = arc.nextstate
            dj = d * arc.weight
            if j not in best or dj < best[j]:
                best[j] = dj
                back[j] = (q, arc)
                counter += 1
                heapq.heappush(heap, (dj, counter, j))

    return best, back, order


def output_tokens(fst, symbols=None):
    """
    Output tokens along the best path of `fst`, skipping epsilons and empty
    tokens.  `symbols` defaults to the machine's output symbol table.
    """
    if symbols is None:
        symbols = fst.osymbols
    if symbols is None:
        raise ValueError(f'{fst!r} has no output symbols to decode with')

    path = shortest_path(fst)
    tokens = []
    q = path.start
    while q != NO_STATE and path.num_arcs(q) > 0:
        [arc] = path.arcs(q)
        if arc.olabel != EPSILON:
            token = symbols.resolve(arc.olabel)
            if token and token != EPSILON_TOKEN:
                tokens.append(token)
        q = arc.nextstate
    return tokens


def render(tokens, separator=SEPARATOR):
    """
    Join output tokens into a string.

    The space placeholder becomes a space.  A word token that carries its own
    trailing `separator` (a digit name such as `'seven '`) is set off from
    preceding text by a `separator`, absorbs a space placeholder right after
    it, and loses its separator when nothing follows.
    """
    out = []
    spaced = False
    for token in tokens:
        if token == SPACE_TOKEN:
            if not spaced:
                out.append(' ')
            spaced = False
            continue
        word = len(token) > len(separator) and token.endswith(separator)
        if word and out and not out[-1][-1:].isspace():
            out.append(separator)
        out.append(token)
        spaced = word
    if spaced:
        out[-1] = out[-1][:-len(separator)]
    return ''.join(out)


def decode(fst: FST, symbols=None) -> str:
    "Render the output side of the best path through `fst` as a string."
    if not fst.num_states():
        return ''
    return render(output_tokens(fst, symbols))
