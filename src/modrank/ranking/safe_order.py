"""Safe refactoring order from dependency topology.

Contracts strongly connected components into super-nodes, peels the
resulting DAG dependencies-first (Kahn) and turns every peeling round into
refactoring phases:

- Leaf modules (depend on nothing) come first: nothing breaks when they change
- Cycles get a phase of their own and must be refactored as one unit
- Core modules (many dependents) end up late: their changes ripple widest
"""

from __future__ import annotations

import heapq
from collections.abc import Mapping, Sequence
from typing import Literal, Optional

from ..config import DEFAULT_CONFIG, RankingConfig
from ..graph.algorithms import condense, dependency_levels, find_components
from ..graph.models import DependencyGraph, ModuleId, StronglyConnectedComponent
from ..logging_config import get_logger
from ..math.statistics import Statistics
from .coupling import analyze_coupling
from .models import CouplingMetrics, RefactoringPhase, RiskLevel, SafeRefactoringOrder

logger = get_logger(__name__)

NodeCategory = Literal["leaf", "intermediate", "core"]

# Percentile cutoffs for per-module classification
LEAF_PERCENTILE = 20
CORE_PERCENTILE = 80


def plan_safe_order(
    graph: DependencyGraph,
    components: Sequence[StronglyConnectedComponent],
    coupling: Optional[Mapping[ModuleId, CouplingMetrics]] = None,
    config: Optional[RankingConfig] = None,
) -> SafeRefactoringOrder:
    """Generate a phased refactoring plan.

    Algorithm:
    1. Contract each SCC into a super-node (intra-SCC edges vanish)
    2. Peel super-nodes whose dependencies are all placed, round by round
    3. Per round, ready acyclic super-nodes share one phase; every ready
       cycle follows in a phase of its own
    4. Annotate phases with risk (from coupling, at least HIGH for cycles),
       parallelizability and prerequisite phases

    Args:
        graph: The dependency graph
        components: SCCs of ``graph`` in Tarjan order (see find_components)
        coupling: Precomputed coupling metrics; computed from ``graph`` if omitted
        config: Risk cutoffs and core quantile
    """
    config = config or DEFAULT_CONFIG
    nodes = graph.nodes()
    if not nodes:
        return SafeRefactoringOrder()

    if coupling is None:
        coupling = analyze_coupling(graph)

    leaf_nodes = tuple(node for node in nodes if coupling[node].efferent == 0)
    core_nodes = _core_nodes(nodes, coupling, config.core_quantile)
    leaf_set, core_set = set(leaf_nodes), set(core_nodes)

    condensation = condense(graph, components)
    comps = condensation.components
    phase_of: dict[int, int] = {}
    phases: list[RefactoringPhase] = []
    cycle_groups: list[tuple[ModuleId, ...]] = []

    for level in dependency_levels(condensation):
        acyclic = [i for i in level if not comps[i].is_cycle]
        groups = ([acyclic] if acyclic else []) + [[i] for i in level if comps[i].is_cycle]

        for group in groups:
            order = len(phases) + 1
            modules = tuple(sorted(node for i in group for node in comps[i].nodes))
            is_cycle = len(group) == 1 and comps[group[0]].is_cycle
            prerequisites = tuple(
                sorted({phase_of[j] for i in group for j in condensation.successors[i]})
            )

            risk = phase_risk_level(
                max(coupling[m].risk_score for m in modules), config
            )
            if is_cycle:
                risk = risk.at_least(RiskLevel.HIGH)
                cycle_groups.append(modules)

            if is_cycle:
                category = "cycle"
            elif all(m in leaf_set for m in modules):
                category = "leaf"
            elif all(m in core_set for m in modules):
                category = "core"
            else:
                category = "intermediate"

            phases.append(
                RefactoringPhase(
                    order=order,
                    modules=modules,
                    risk_level=risk,
                    can_parallelize=len(group) > 1,
                    prerequisite_phases=prerequisites,
                    is_cycle=is_cycle,
                    category=category,
                )
            )
            for i in group:
                phase_of[i] = order

    if cycle_groups:
        logger.info(f"Found {len(cycle_groups)} dependency cycle(s) to refactor as units")

    return SafeRefactoringOrder(
        phases=tuple(phases),
        cycles=tuple(cycle_groups),
        leaf_nodes=leaf_nodes,
        core_nodes=core_nodes,
        total_modules=len(nodes),
        estimated_risk=RiskLevel.highest(p.risk_level for p in phases),
    )


def phase_risk_level(risk_score: float, config: Optional[RankingConfig] = None) -> RiskLevel:
    """Map a coupling risk score in [0, 1] to a risk level."""
    config = config or DEFAULT_CONFIG
    if risk_score >= config.phase_critical_risk:
        return RiskLevel.CRITICAL
    if risk_score >= config.phase_high_risk:
        return RiskLevel.HIGH
    if risk_score >= config.phase_medium_risk:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def _core_nodes(
    nodes: Sequence[ModuleId],
    coupling: Mapping[ModuleId, CouplingMetrics],
    quantile: float,
) -> tuple[ModuleId, ...]:
    """Modules whose afferent coupling sits in the top of the distribution."""
    afferents = [coupling[node].afferent for node in nodes]
    cutoff = Statistics.quantile(afferents, quantile)
    return tuple(
        node for node in nodes if coupling[node].afferent > 0 and coupling[node].afferent >= cutoff
    )


def topological_order(
    graph: DependencyGraph,
    page_rank: Optional[Mapping[ModuleId, float]] = None,
    components: Optional[Sequence[StronglyConnectedComponent]] = None,
) -> list[ModuleId]:
    """Flat dependencies-first order over the condensation graph.

    Among ready components the least central goes first (lowest PageRank,
    the safest to touch), then the lowest module id. Members of one SCC are
    emitted together in sorted order.
    """
    if components is None:
        components = find_components(graph)
    condensation = condense(graph, components)
    comps = condensation.components
    page_rank = page_rank or {}

    def sort_key(i: int) -> tuple[float, ModuleId]:
        members = comps[i].sorted_nodes()
        return (min(page_rank.get(m, 0.0) for m in members), members[0])

    remaining = [len(s) for s in condensation.successors]
    heap = [(sort_key(i), i) for i, count in enumerate(remaining) if count == 0]
    heapq.heapify(heap)

    result: list[ModuleId] = []
    while heap:
        _, i = heapq.heappop(heap)
        result.extend(comps[i].sorted_nodes())
        for dependent in condensation.predecessors[i]:
            remaining[dependent] -= 1
            if remaining[dependent] == 0:
                heapq.heappush(heap, (sort_key(dependent), dependent))

    return result


def classify_node(
    module: ModuleId,
    coupling: Mapping[ModuleId, CouplingMetrics],
    page_rank: Mapping[ModuleId, float],
) -> NodeCategory:
    """Classify a module as leaf, intermediate or core.

    Leaf: nothing depends on it, or both its afferent coupling and PageRank
    sit in the bottom fifth. Core: either sits in the top fifth.
    """
    metrics = coupling.get(module)
    if metrics is None:
        return "intermediate"

    ca_percentile = Statistics.percentile_below(
        metrics.afferent, [m.afferent for m in coupling.values()]
    )
    pr_percentile = Statistics.percentile_below(
        page_rank.get(module, 0.0), list(page_rank.values())
    )

    if metrics.afferent == 0 or (
        ca_percentile < LEAF_PERCENTILE and pr_percentile < LEAF_PERCENTILE
    ):
        return "leaf"
    if ca_percentile >= CORE_PERCENTILE or pr_percentile >= CORE_PERCENTILE:
        return "core"
    return "intermediate"
