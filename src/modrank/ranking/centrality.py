"""PageRank centrality with rank-based percentiles."""

from typing import Mapping, Optional

from ..config import DEFAULT_CONFIG, RankingConfig
from ..graph.models import DependencyGraph
from ..logging_config import get_logger
from ..math.graph import GraphMetrics
from .models import CentralityResult, CentralityScore

logger = get_logger(__name__)


def rank_centrality(
    graph: DependencyGraph,
    config: Optional[RankingConfig] = None,
    personalization: Optional[Mapping[str, float]] = None,
) -> CentralityResult:
    """Run PageRank on ``graph`` and attach a percentile to every score.

    Hitting the iteration cap is not an error: the best-effort ranking is
    returned with ``converged=False`` and a warning is logged.
    """
    config = config or DEFAULT_CONFIG

    run = GraphMetrics.pagerank(
        graph,
        damping=config.pagerank_damping,
        iterations=config.pagerank_iterations,
        tolerance=config.pagerank_tolerance,
        personalization=personalization,
    )

    if run.converged:
        logger.debug(f"PageRank converged after {run.iterations} iterations")
    else:
        logger.warning(
            f"PageRank did not converge within {run.iterations} iterations "
            f"(delta={run.final_delta:.2e}, tolerance={config.pagerank_tolerance:.0e}); "
            "using best-effort scores"
        )

    percentiles = GraphMetrics.percentile_ranks(run.scores)
    scores = {
        node: CentralityScore(module=node, page_rank=run.scores[node], percentile=percentiles[node])
        for node in graph.nodes()
    }
    return CentralityResult(
        scores=scores,
        iterations=run.iterations,
        converged=run.converged,
        final_delta=run.final_delta,
    )
