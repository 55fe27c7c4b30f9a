"""Numeric kernels: PageRank and distribution statistics."""

from .graph import GraphMetrics, PageRankRun
from .statistics import Statistics

__all__ = ["GraphMetrics", "PageRankRun", "Statistics"]
