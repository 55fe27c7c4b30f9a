"""Ranking pipeline: coupling, cycles, centrality, hotspots, safe order.

Stages consume the immutable graph left to right and never call back into
an earlier stage. Coupling, cycle detection and PageRank share nothing but
the read-only graph, so they may run concurrently.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ..config import DEFAULT_CONFIG, RankingConfig
from ..graph.algorithms import cycles, find_components
from ..graph.models import DependencyGraph
from ..logging_config import get_logger, stage_timer
from .centrality import rank_centrality
from .coupling import analyze_coupling
from .hotspots import classify_hotspots
from .models import RankingAnalysis, RankingStats
from .safe_order import plan_safe_order

logger = get_logger(__name__)


def analyze_ranking(
    graph: DependencyGraph, config: Optional[RankingConfig] = None
) -> RankingAnalysis:
    """Run the full ranking analysis on a dependency graph.

    Combines:
    - Coupling metrics (Ca, Ce, instability, risk score)
    - Strongly connected components (dependency cycles)
    - PageRank centrality with percentiles
    - Hotspot classification
    - Safe refactoring order

    An empty graph is not an error: every collection comes back empty and
    the stats report zeroes.
    """
    config = config or DEFAULT_CONFIG

    if graph.node_count == 0:
        logger.debug("Empty dependency graph; nothing to rank")
        return RankingAnalysis()

    with stage_timer(logger, "Ranking"):
        # Independent read-only stages; everything below waits on all three
        with stage_timer(logger, "Graph metrics"):
            if config.parallel:
                with ThreadPoolExecutor(max_workers=config.workers) as executor:
                    coupling_future = executor.submit(analyze_coupling, graph)
                    components_future = executor.submit(find_components, graph)
                    centrality_future = executor.submit(rank_centrality, graph, config)
                    coupling = coupling_future.result()
                    components = components_future.result()
                    centrality = centrality_future.result()
            else:
                coupling = analyze_coupling(graph)
                components = find_components(graph)
                centrality = rank_centrality(graph, config)

        with stage_timer(logger, "Safe order"):
            safe_order = plan_safe_order(graph, components, coupling=coupling, config=config)

        hotspots = classify_hotspots(coupling, centrality, config)
        if config.hotspot_limit is not None:
            hotspots = hotspots[: config.hotspot_limit]

        stats = RankingStats(
            node_count=graph.node_count,
            edge_count=graph.edge_count,
            cycle_count=len(cycles(components)),
            iterations=centrality.iterations,
            converged=centrality.converged,
        )
        logger.debug(
            f"Ranked {stats.node_count} modules ({stats.edge_count} edges, "
            f"{stats.cycle_count} cycles)"
        )

    return RankingAnalysis(
        hotspots=tuple(hotspots),
        coupling=coupling,
        centrality=centrality,
        safe_order=safe_order,
        stats=stats,
    )
