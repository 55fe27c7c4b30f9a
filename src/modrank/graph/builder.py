"""Dependency graph construction from resolved import edges."""

from collections.abc import Iterable, Mapping
from typing import Any

from ..exceptions import InvalidEdgeError
from ..logging_config import get_logger
from .models import DependencyGraph, ModuleId

logger = get_logger(__name__)


def build_dependency_graph(
    edges: Iterable[tuple[ModuleId, ModuleId]],
    nodes: Iterable[ModuleId] = (),
) -> DependencyGraph:
    """Build a read-only dependency graph from ``(source, target)`` edges.

    Targets that never appear as a source become nodes with no outgoing
    edges. ``nodes`` registers modules that have no edges at all. Duplicate
    edges collapse to one; self-loops are kept.

    Raises:
        InvalidEdgeError: If any id is not a string or is blank.
    """
    adjacency: dict[ModuleId, list[ModuleId]] = {}
    seen: dict[ModuleId, set[ModuleId]] = {}

    for node in nodes:
        _check_id(node, node, None, "isolated module id")
        if node not in adjacency:
            adjacency[node] = []
            seen[node] = set()

    edge_count = 0
    for edge in edges:
        if isinstance(edge, str):
            raise InvalidEdgeError(edge, None, "edge must be a (source, target) pair, not a string")
        try:
            source, target = edge
        except (TypeError, ValueError) as e:
            raise InvalidEdgeError(edge, None, "edge must be a (source, target) pair") from e
        _check_id(source, source, target)
        _check_id(target, source, target)

        for node in (source, target):
            if node not in adjacency:
                adjacency[node] = []
                seen[node] = set()

        if target in seen[source]:
            continue
        seen[source].add(target)
        adjacency[source].append(target)
        edge_count += 1

    reverse: dict[ModuleId, list[ModuleId]] = {node: [] for node in adjacency}
    for source in sorted(adjacency):
        for target in adjacency[source]:
            reverse[target].append(source)

    graph = DependencyGraph(
        adjacency={node: tuple(targets) for node, targets in adjacency.items()},
        reverse={node: tuple(sources) for node, sources in reverse.items()},
        edge_count=edge_count,
    )
    logger.debug(f"Built dependency graph: {graph.node_count} nodes, {edge_count} edges")
    return graph


def from_adjacency(dependencies: Mapping[ModuleId, Iterable[ModuleId]]) -> DependencyGraph:
    """Build a graph from a ``{module: [dependencies]}`` mapping.

    Every key becomes a node even when its dependency list is empty.
    """
    edges = [(module, dep) for module, deps in dependencies.items() for dep in deps]
    return build_dependency_graph(edges, nodes=dependencies.keys())


def _check_id(value: Any, source: Any, target: Any, what: str = "module id") -> None:
    if not isinstance(value, str):
        raise InvalidEdgeError(source, target, f"{what} must be a string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidEdgeError(source, target, f"{what} is empty or blank")
