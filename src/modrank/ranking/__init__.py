"""PageRank-based dependency ranking.

Features:
- Dependency hotspots: highly central modules, by PageRank percentile
- Coupling metrics: Ca, Ce, instability and risk score per module
- Safe refactoring order: dependency-first phases with cycles isolated
- Priority enrichment: pull forward work that touches central modules

Usage:
    >>> from modrank.graph import build_dependency_graph
    >>> from modrank.ranking import analyze_ranking
    >>> graph = build_dependency_graph([("app", "core"), ("cli", "core")])
    >>> ranking = analyze_ranking(graph)
    >>> ranking.hotspots[0].module
    'core'
"""

from .centrality import rank_centrality
from .coupling import analyze_coupling, compute_instability, rank_by_risk
from .engine import analyze_ranking
from .hotspots import classify_hotspots, hotspot_reason, hotspot_risk_level
from .models import (
    CentralityResult,
    CentralityScore,
    CouplingMetrics,
    DependencyHotspot,
    RankingAnalysis,
    RankingStats,
    RefactoringPhase,
    RiskLevel,
    SafeRefactoringOrder,
)
from .priority import PriorityEnrichment, enrich_priority, match_module
from .safe_order import classify_node, phase_risk_level, plan_safe_order, topological_order

__all__ = [
    "CentralityResult",
    "CentralityScore",
    "CouplingMetrics",
    "DependencyHotspot",
    "PriorityEnrichment",
    "RankingAnalysis",
    "RankingStats",
    "RefactoringPhase",
    "RiskLevel",
    "SafeRefactoringOrder",
    "analyze_coupling",
    "analyze_ranking",
    "classify_hotspots",
    "classify_node",
    "compute_instability",
    "enrich_priority",
    "hotspot_reason",
    "hotspot_risk_level",
    "match_module",
    "phase_risk_level",
    "plan_safe_order",
    "rank_by_risk",
    "rank_centrality",
    "topological_order",
]
