"""Graph algorithms: strongly connected components and condensation."""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import TypeVar

from .models import DependencyGraph, ModuleId, StronglyConnectedComponent

NodeT = TypeVar("NodeT", bound=Hashable)


def tarjan_scc(
    nodes: Iterable[NodeT],
    successors: Callable[[NodeT], Iterable[NodeT]],
) -> list[set[NodeT]]:
    """Tarjan's algorithm for strongly connected components (iterative).

    Generic over any hashable node id and successor lookup, so the same
    routine serves module graphs and entity-relation graphs alike. Uses an
    explicit call stack to avoid Python recursion limits on deep dependency
    chains. Successors outside ``nodes`` are ignored.

    Components come out in reverse topological order of the condensation
    graph: a component is emitted only after every component it can reach.
    """
    node_list = list(nodes)
    members = set(node_list)

    counter = 0
    scc_stack: list[NodeT] = []
    on_stack: set[NodeT] = set()
    index: dict[NodeT, int] = {}
    lowlink: dict[NodeT, int] = {}
    result: list[set[NodeT]] = []

    def neighbors_of(v: NodeT) -> list[NodeT]:
        return [w for w in successors(v) if w in members]

    for root in node_list:
        if root in index:
            continue

        # Explicit call stack: each frame is (node, neighbor_iterator)
        index[root] = lowlink[root] = counter
        counter += 1
        scc_stack.append(root)
        on_stack.add(root)
        call_stack = [(root, iter(neighbors_of(root)))]

        while call_stack:
            v, it = call_stack[-1]
            pushed = False
            for w in it:
                if w not in index:
                    # "Recurse" into w
                    index[w] = lowlink[w] = counter
                    counter += 1
                    scc_stack.append(w)
                    on_stack.add(w)
                    call_stack.append((w, iter(neighbors_of(w))))
                    pushed = True
                    break
                elif w in on_stack:
                    lowlink[v] = min(lowlink[v], index[w])

            if pushed:
                continue

            # All neighbors processed: "return" from v
            call_stack.pop()
            if call_stack:
                caller = call_stack[-1][0]
                lowlink[caller] = min(lowlink[caller], lowlink[v])

            if lowlink[v] == index[v]:
                component: set[NodeT] = set()
                while True:
                    w = scc_stack.pop()
                    on_stack.discard(w)
                    component.add(w)
                    if w == v:
                        break
                result.append(component)

    return result


def find_components(graph: DependencyGraph) -> list[StronglyConnectedComponent]:
    """All strongly connected components of a dependency graph.

    Roots and successors are both visited in sorted module order, so the
    output depends only on the edge set, never on the order edges arrived in.
    Order is Tarjan's: dependencies before the modules that depend on them.
    """
    components = []
    for scc in tarjan_scc(graph.nodes(), lambda n: sorted(graph.outgoing(n))):
        internal_edges = sum(1 for n in scc for dep in graph.outgoing(n) if dep in scc)
        components.append(
            StronglyConnectedComponent(nodes=frozenset(scc), internal_edge_count=internal_edges)
        )
    return components


def cycles(components: Iterable[StronglyConnectedComponent]) -> list[StronglyConnectedComponent]:
    """Only the components that are real cycles (size >= 2 or a self-import)."""
    return [c for c in components if c.is_cycle]


@dataclass(frozen=True)
class Condensation:
    """Graph with each strongly connected component contracted to one node.

    Super-node ids are positions in ``components``. ``successors[i]`` holds
    the super-nodes that component ``i`` depends on, de-duplicated and with
    intra-component edges removed.
    """

    components: tuple[StronglyConnectedComponent, ...]
    membership: dict[ModuleId, int]
    successors: tuple[tuple[int, ...], ...]
    predecessors: tuple[tuple[int, ...], ...]


def condense(
    graph: DependencyGraph, components: Iterable[StronglyConnectedComponent]
) -> Condensation:
    """Contract ``components`` into super-nodes of a DAG."""
    comps = tuple(components)
    membership: dict[ModuleId, int] = {}
    for i, comp in enumerate(comps):
        for node in comp.nodes:
            membership[node] = i

    succ: list[list[int]] = [[] for _ in comps]
    pred: list[list[int]] = [[] for _ in comps]
    for i, comp in enumerate(comps):
        seen: set[int] = set()
        for node in sorted(comp.nodes):
            for dep in graph.outgoing(node):
                j = membership.get(dep)
                if j is None or j == i or j in seen:
                    continue
                seen.add(j)
                succ[i].append(j)
                pred[j].append(i)

    return Condensation(
        components=comps,
        membership=membership,
        successors=tuple(tuple(s) for s in succ),
        predecessors=tuple(tuple(p) for p in pred),
    )


def dependency_levels(condensation: Condensation) -> list[list[int]]:
    """Kahn peeling over the condensation, dependencies first.

    Level 0 holds super-nodes that depend on nothing; each later level holds
    super-nodes whose dependencies all sit in earlier levels. Within a level,
    super-nodes keep their component order.
    """
    remaining = [len(s) for s in condensation.successors]
    current = [i for i, count in enumerate(remaining) if count == 0]
    levels: list[list[int]] = []

    while current:
        levels.append(current)
        ready: set[int] = set()
        for i in current:
            for dependent in condensation.predecessors[i]:
                remaining[dependent] -= 1
                if remaining[dependent] == 0:
                    ready.add(dependent)
        current = sorted(ready)

    return levels
