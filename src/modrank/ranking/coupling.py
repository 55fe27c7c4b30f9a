"""Afferent/efferent coupling and instability per module.

Martin metrics on a module dependency graph:
- Afferent Coupling (Ca): number of modules that depend on this one
- Efferent Coupling (Ce): number of modules this one depends on
- Instability (I): Ce / (Ca + Ce), 0.0 if isolated
- Risk score: I * 0.5 + (Ca / max Ca) * 0.5
"""

from ..graph.models import DependencyGraph, ModuleId
from .models import CouplingMetrics

INSTABILITY_WEIGHT = 0.5
AFFERENT_WEIGHT = 0.5


def compute_instability(afferent: int, efferent: int) -> float:
    """Ce / (Ca + Ce); a module with no connections is maximally stable."""
    total = afferent + efferent
    if total == 0:
        return 0.0
    return efferent / total


def analyze_coupling(graph: DependencyGraph) -> dict[ModuleId, CouplingMetrics]:
    """Compute coupling metrics for every module, keyed in sorted module order."""
    nodes = graph.nodes()
    if not nodes:
        return {}

    max_afferent = max(graph.in_degree(node) for node in nodes)
    normalize = len(nodes) > 1 and max_afferent > 0

    result: dict[ModuleId, CouplingMetrics] = {}
    for node in nodes:
        ca = graph.in_degree(node)
        ce = graph.out_degree(node)
        instability = compute_instability(ca, ce)
        normalized_ca = ca / max_afferent if normalize else 0.0
        result[node] = CouplingMetrics(
            module=node,
            afferent=ca,
            efferent=ce,
            instability=instability,
            risk_score=instability * INSTABILITY_WEIGHT + normalized_ca * AFFERENT_WEIGHT,
        )
    return result


def rank_by_risk(coupling: dict[ModuleId, CouplingMetrics]) -> list[CouplingMetrics]:
    """Coupling metrics sorted by risk score (highest first), ties by module id."""
    return sorted(coupling.values(), key=lambda m: (-m.risk_score, m.module))
