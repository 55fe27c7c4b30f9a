"""Data models for the module dependency graph.

Two levels:
  Relationships: module -> module dependency edges (the graph itself)
  Derived structures: strongly connected components found on that graph
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping

ModuleId = str

# ── Relationships (the dependency graph) ───────────────────────────


@dataclass(frozen=True)
class DependencyGraph:
    """Read-only directed dependency graph.

    Edges are directed: ``outgoing(A)`` contains B means A imports/depends on B.
    The reverse index is derived once at build time, so ``incoming(B)``
    contains A iff ``outgoing(A)`` contains B. Use
    :func:`modrank.graph.builder.build_dependency_graph` to construct one.
    """

    adjacency: Mapping[ModuleId, tuple[ModuleId, ...]] = field(default_factory=dict)
    reverse: Mapping[ModuleId, tuple[ModuleId, ...]] = field(default_factory=dict)
    edge_count: int = 0

    def nodes(self) -> tuple[ModuleId, ...]:
        """All module ids in sorted order."""
        return tuple(sorted(self.adjacency))

    def outgoing(self, module: ModuleId) -> tuple[ModuleId, ...]:
        """Modules that ``module`` depends on, in first-seen order."""
        return self.adjacency.get(module, ())

    def incoming(self, module: ModuleId) -> tuple[ModuleId, ...]:
        """Modules that depend on ``module``."""
        return self.reverse.get(module, ())

    def out_degree(self, module: ModuleId) -> int:
        return len(self.adjacency.get(module, ()))

    def in_degree(self, module: ModuleId) -> int:
        return len(self.reverse.get(module, ()))

    def has_self_loop(self, module: ModuleId) -> bool:
        return module in self.adjacency.get(module, ())

    @property
    def node_count(self) -> int:
        return len(self.adjacency)

    def __contains__(self, module: object) -> bool:
        return module in self.adjacency

    def __iter__(self) -> Iterator[ModuleId]:
        return iter(self.nodes())

    def __len__(self) -> int:
        return len(self.adjacency)


# ── Derived structures ──────────────────────────────────────────────


@dataclass(frozen=True)
class StronglyConnectedComponent:
    """A maximal set of mutually reachable modules.

    Every module belongs to exactly one component. Only components with more
    than one member, or a single member that imports itself, are cycles.
    """

    nodes: frozenset[ModuleId]
    internal_edge_count: int = 0

    @property
    def is_cycle(self) -> bool:
        return len(self.nodes) > 1 or self.internal_edge_count > 0

    @property
    def size(self) -> int:
        return len(self.nodes)

    def sorted_nodes(self) -> list[ModuleId]:
        return sorted(self.nodes)
