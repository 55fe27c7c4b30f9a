"""Graph theory: PageRank power iteration and rank-based percentiles."""

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

import numpy as np

from ..graph.models import DependencyGraph


@dataclass(frozen=True)
class PageRankRun:
    """Raw output of one PageRank computation."""

    scores: Dict[str, float]
    iterations: int
    converged: bool
    final_delta: float


class GraphMetrics:
    """Graph theory calculations for dependency graphs."""

    @staticmethod
    def pagerank(
        graph: DependencyGraph,
        damping: float = 0.85,
        iterations: int = 100,
        tolerance: float = 1e-6,
        personalization: Optional[Mapping[str, float]] = None,
    ) -> PageRankRun:
        """
        Compute PageRank using power iteration.

        PR(A) = (1 - d) * t(A) + d * D * t(A) / N + d * Σ (PR(Ti) / C(Ti))

        Scores start at 1.0 and stay normalized so that Σ PR = N. The rank
        mass sitting on dangling nodes (no outgoing edges), D, is spread
        across all nodes each pass so nothing leaks out of the system.
        t is the teleport weight: 1.0 everywhere unless a personalization
        vector biases it (rescaled so Σ t = N).

        Every pass reads only the previous snapshot, and nodes are visited
        in sorted order, so results are bit-reproducible.

        Args:
            graph: Dependency graph (edge A -> B means A depends on B)
            damping: Damping factor (0.85 is standard)
            iterations: Maximum iterations
            tolerance: Stop once the L1 norm of the score delta drops below this
            personalization: Optional non-negative teleport bias per node

        Returns:
            PageRankRun with scores, iterations performed and convergence flag
        """
        nodes = graph.nodes()
        if not nodes:
            return PageRankRun(scores={}, iterations=0, converged=True, final_delta=0.0)

        N = len(nodes)
        teleport = GraphMetrics._teleport_vector(nodes, personalization)

        out_degree = {node: graph.out_degree(node) for node in nodes}
        dangling = [node for node in nodes if out_degree[node] == 0]

        rank = dict.fromkeys(nodes, 1.0)
        converged = False
        delta = 0.0
        performed = 0

        for _ in range(iterations):
            dangling_sum = sum(rank[node] for node in dangling)
            new_rank: Dict[str, float] = {}
            delta = 0.0

            for node in nodes:
                score = (1 - damping) * teleport[node]
                score += damping * dangling_sum * teleport[node] / N
                for src in graph.incoming(node):
                    score += damping * rank[src] / out_degree[src]
                new_rank[node] = score
                delta += abs(score - rank[node])

            rank = new_rank
            performed += 1

            if delta < tolerance:
                converged = True
                break

        return PageRankRun(scores=rank, iterations=performed, converged=converged, final_delta=delta)

    @staticmethod
    def _teleport_vector(
        nodes: tuple, personalization: Optional[Mapping[str, float]]
    ) -> Dict[str, float]:
        """Teleport weight per node, summing to len(nodes)."""
        n = len(nodes)
        if personalization:
            weights = {node: max(0.0, float(personalization.get(node, 0.0))) for node in nodes}
            total = sum(weights.values())
            if total > 0:
                return {node: weights[node] * n / total for node in nodes}
        return dict.fromkeys(nodes, 1.0)

    @staticmethod
    def percentile_ranks(scores: Mapping[str, float]) -> Dict[str, int]:
        """
        Rank-based percentile per node (100 = most central).

        Scores are stable-sorted descending; ties keep sorted node-id order.
        Rank position r (0-based) maps to floor(100 * (1 - r / N)), computed
        in integers to avoid float truncation.

        Args:
            scores: Node -> score

        Returns:
            Node -> percentile in [0, 100]
        """
        if not scores:
            return {}

        ids: List[str] = sorted(scores)
        values = np.array([scores[i] for i in ids], dtype=float)
        order = np.argsort(-values, kind="stable")

        n = len(ids)
        return {ids[idx]: (100 * (n - rank)) // n for rank, idx in enumerate(order.tolist())}
