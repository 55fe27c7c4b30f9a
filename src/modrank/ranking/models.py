"""Result models for ranking analysis.

Everything here is plain data produced fresh per run from an immutable
DependencyGraph. Downstream formatters serialize these with
``dataclasses.asdict``; the core never renders them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..graph.models import ModuleId


class RiskLevel(str, Enum):
    """Ordered risk scale: low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _RISK_ORDER[self]

    @classmethod
    def highest(cls, levels) -> RiskLevel:
        """Most severe of ``levels``; LOW when empty."""
        return max(levels, key=lambda level: level.rank, default=cls.LOW)

    def at_least(self, floor: RiskLevel) -> RiskLevel:
        return self if self.rank >= floor.rank else floor


_RISK_ORDER = {RiskLevel.LOW: 0, RiskLevel.MEDIUM: 1, RiskLevel.HIGH: 2, RiskLevel.CRITICAL: 3}


# ── Coupling ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class CouplingMetrics:
    """Martin coupling metrics for one module."""

    module: ModuleId
    afferent: int  # Ca: modules depending on this one
    efferent: int  # Ce: modules this one depends on
    instability: float  # Ce / (Ca + Ce), 0.0 when isolated
    risk_score: float  # instability * 0.5 + normalized Ca * 0.5


# ── Centrality ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class CentralityScore:
    """PageRank score and its rank-based percentile (100 = most central)."""

    module: ModuleId
    page_rank: float
    percentile: int


@dataclass(frozen=True)
class CentralityResult:
    """Centrality for every module plus convergence bookkeeping."""

    scores: dict[ModuleId, CentralityScore] = field(default_factory=dict)
    iterations: int = 0
    converged: bool = True
    final_delta: float = 0.0

    def page_ranks(self) -> dict[ModuleId, float]:
        return {module: score.page_rank for module, score in self.scores.items()}


# ── Hotspots ───────────────────────────────────────────────────────


@dataclass(frozen=True)
class DependencyHotspot:
    """A module's combined centrality and coupling risk."""

    module: ModuleId
    page_rank: float
    percentile: int
    risk_level: RiskLevel
    reason: str
    dependent_count: int
    dependency_count: int
    coupling: CouplingMetrics


# ── Safe refactoring order ─────────────────────────────────────────


@dataclass(frozen=True)
class RefactoringPhase:
    """One step of the refactoring plan.

    Modules in a phase only depend on modules from earlier phases (or, for
    a cycle phase, on each other).
    """

    order: int
    modules: tuple[ModuleId, ...]
    risk_level: RiskLevel
    can_parallelize: bool
    prerequisite_phases: tuple[int, ...] = ()
    is_cycle: bool = False
    category: str = "intermediate"  # leaf | intermediate | core | cycle


@dataclass(frozen=True)
class SafeRefactoringOrder:
    """Phased plan: dependencies first, cycles isolated, core modules last."""

    phases: tuple[RefactoringPhase, ...] = ()
    cycles: tuple[tuple[ModuleId, ...], ...] = ()
    leaf_nodes: tuple[ModuleId, ...] = ()
    core_nodes: tuple[ModuleId, ...] = ()
    total_modules: int = 0
    estimated_risk: RiskLevel = RiskLevel.LOW


# ── Full result ────────────────────────────────────────────────────


@dataclass(frozen=True)
class RankingStats:
    node_count: int = 0
    edge_count: int = 0
    cycle_count: int = 0
    iterations: int = 0
    converged: bool = True


@dataclass(frozen=True)
class RankingAnalysis:
    """Complete ranking result. Queryable, not rendered."""

    hotspots: tuple[DependencyHotspot, ...] = ()
    coupling: dict[ModuleId, CouplingMetrics] = field(default_factory=dict)
    centrality: CentralityResult = field(default_factory=CentralityResult)
    safe_order: SafeRefactoringOrder = field(default_factory=SafeRefactoringOrder)
    stats: RankingStats = field(default_factory=RankingStats)

    def top_hotspots(self, count: int) -> list[DependencyHotspot]:
        return list(self.hotspots[:count])
