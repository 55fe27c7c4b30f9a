"""Boost recommendation priorities for changes touching central modules."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Optional

from ..graph.models import ModuleId
from .models import CouplingMetrics

PAGE_RANK_SCALE = 5.0
COUPLING_SCALE = 0.3
PAGE_RANK_REASON_CUTOFF = -1.0
COUPLING_REASON_CUTOFF = -0.5


@dataclass(frozen=True)
class PriorityEnrichment:
    final_priority: float
    page_rank_boost: float
    coupling_boost: float
    reason: str


def enrich_priority(
    original_priority: float,
    affected_files: Sequence[str],
    page_rank: Mapping[ModuleId, float],
    coupling: Mapping[ModuleId, CouplingMetrics],
) -> PriorityEnrichment:
    """Pull a recommendation forward when it touches central, depended-on modules.

    Lower priority numbers mean "do sooner", so boosts are negative. The
    result never drops below 1.
    """
    if not affected_files:
        return PriorityEnrichment(original_priority, 0.0, 0.0, "no affected files")

    # Scores sum to the node count; work with each module's share of the total
    node_count = max(len(page_rank), 1)
    total_page_rank = 0.0
    total_afferent = 0
    matched = 0
    for path in affected_files:
        module = match_module(path, page_rank)
        if module is None:
            continue
        total_page_rank += page_rank[module] / node_count
        metrics = coupling.get(module)
        if metrics is not None:
            total_afferent += metrics.afferent
        matched += 1

    if matched == 0:
        return PriorityEnrichment(original_priority, 0.0, 0.0, "no matching modules")

    page_rank_boost = -round(total_page_rank / matched * PAGE_RANK_SCALE, 2)
    coupling_boost = -round(total_afferent / matched * COUPLING_SCALE, 2)
    final = max(1.0, original_priority + page_rank_boost + coupling_boost)

    reasons = []
    if page_rank_boost < PAGE_RANK_REASON_CUTOFF:
        reasons.append(f"high centrality (PR boost: {page_rank_boost})")
    if coupling_boost < COUPLING_REASON_CUTOFF:
        reasons.append(f"high coupling (Ca boost: {coupling_boost})")

    return PriorityEnrichment(
        final_priority=round(final, 1),
        page_rank_boost=page_rank_boost,
        coupling_boost=coupling_boost,
        reason=", ".join(reasons) if reasons else "standard priority",
    )


def match_module(path: str, modules: Mapping[ModuleId, object]) -> Optional[ModuleId]:
    """Find the module a file path belongs to.

    Tries the exact id, then each path segment from the right, bare or
    with an ``@`` prefix (scoped package directories).
    """
    if path in modules:
        return path
    for segment in reversed(path.split("/")):
        if not segment:
            continue
        if segment in modules:
            return segment
        if f"@{segment}" in modules:
            return f"@{segment}"
    return None
