"""Public API for modrank.

Example:
    >>> from modrank import analyze
    >>>
    >>> result = analyze([("app", "core"), ("core", "util")])
    >>> [phase.modules for phase in result.safe_order.phases]
    [('util',), ('core',), ('app',)]
    >>>
    >>> # With customization
    >>> result = analyze(edges, pagerank_damping=0.9, hotspot_limit=10)
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional

from .config import load_config
from .graph.builder import build_dependency_graph
from .logging_config import get_logger
from .ranking.engine import analyze_ranking
from .ranking.models import RankingAnalysis

logger = get_logger(__name__)


def analyze(
    edges: Iterable[tuple[str, str]],
    nodes: Iterable[str] = (),
    config_file: Optional[Path] = None,
    **overrides: Any,
) -> RankingAnalysis:
    """Build the dependency graph and run the full ranking analysis.

    Args:
        edges: ``(source, target)`` pairs, meaning source depends on target
        nodes: Extra module ids to include even if they have no edges
        config_file: Optional TOML config file
        **overrides: RankingConfig field overrides

    Returns:
        RankingAnalysis with hotspots, coupling, centrality, safe order and stats

    Raises:
        InvalidEdgeError: If an edge references a blank or non-string module id
        InvalidConfigError: If the configuration is invalid
    """
    config = load_config(config_file=config_file, **overrides)
    graph = build_dependency_graph(edges, nodes=nodes)
    return analyze_ranking(graph, config)
