"""Dependency hotspots: centrality percentile combined with coupling.

Risk levels follow fixed percentile cutoffs (configurable) so the same graph
always yields the same classification.
"""

from collections.abc import Mapping
from typing import Optional

from ..config import DEFAULT_CONFIG, RankingConfig
from ..graph.models import ModuleId
from .models import CentralityResult, CouplingMetrics, DependencyHotspot, RiskLevel

# Reason cutoffs
TOP_DECILE = 90
TOP_QUARTILE = 75
HIGH_AFFERENT_SHARE = 0.5
STABLE_INSTABILITY = 0.3
UNSTABLE_INSTABILITY = 0.7


def hotspot_risk_level(percentile: int, config: Optional[RankingConfig] = None) -> RiskLevel:
    """Map a centrality percentile to a risk level."""
    config = config or DEFAULT_CONFIG
    if percentile >= config.critical_percentile:
        return RiskLevel.CRITICAL
    if percentile >= config.high_percentile:
        return RiskLevel.HIGH
    if percentile >= config.medium_percentile:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def hotspot_reason(percentile: int, coupling: CouplingMetrics, max_afferent: int) -> str:
    """Short description naming the factors that make a module risky."""
    parts: list[str] = []

    if percentile >= TOP_DECILE:
        parts.append("top-decile centrality")
    elif percentile >= TOP_QUARTILE:
        parts.append("top-quartile centrality")

    if max_afferent > 0 and coupling.afferent / max_afferent >= HIGH_AFFERENT_SHARE:
        parts.append("high afferent coupling")

    if coupling.afferent > 0 and coupling.instability < STABLE_INSTABILITY:
        parts.append("stable core module")
    elif coupling.efferent > 0 and coupling.instability >= UNSTABLE_INSTABILITY:
        noun = "module" if coupling.efferent == 1 else "modules"
        parts.append(f"unstable, depends on {coupling.efferent} {noun}")

    if not parts:
        return "central in dependency graph" if percentile >= 50 else "peripheral module"
    return " + ".join(parts)


def classify_hotspots(
    coupling: Mapping[ModuleId, CouplingMetrics],
    centrality: CentralityResult,
    config: Optional[RankingConfig] = None,
) -> list[DependencyHotspot]:
    """One hotspot per module, most central first (ties by module id)."""
    config = config or DEFAULT_CONFIG
    if not centrality.scores:
        return []

    max_afferent = max((m.afferent for m in coupling.values()), default=0)
    ordered = sorted(centrality.scores.values(), key=lambda s: (-s.page_rank, s.module))

    hotspots = []
    for score in ordered:
        metrics = coupling.get(score.module) or CouplingMetrics(
            module=score.module, afferent=0, efferent=0, instability=0.0, risk_score=0.0
        )
        hotspots.append(
            DependencyHotspot(
                module=score.module,
                page_rank=score.page_rank,
                percentile=score.percentile,
                risk_level=hotspot_risk_level(score.percentile, config),
                reason=hotspot_reason(score.percentile, metrics, max_afferent),
                dependent_count=metrics.afferent,
                dependency_count=metrics.efferent,
                coupling=metrics,
            )
        )
    return hotspots
