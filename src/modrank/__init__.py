"""
modrank - Module Dependency Ranking

Structural analysis of a codebase's module-import graph: which modules are
central (PageRank), which form circular dependencies (Tarjan SCC), and in
what order they can be refactored without breaking dependents.
"""

__version__ = "0.1.0"

from .api import analyze
from .config import RankingConfig, load_config
from .graph import DependencyGraph, StronglyConnectedComponent, build_dependency_graph
from .ranking import RankingAnalysis, RiskLevel, SafeRefactoringOrder, analyze_ranking

__all__ = [
    "analyze",  # Main entry point
    "analyze_ranking",  # Advanced usage (prebuilt graph)
    "build_dependency_graph",
    "load_config",
    "DependencyGraph",
    "RankingAnalysis",
    "RankingConfig",
    "RiskLevel",
    "SafeRefactoringOrder",
    "StronglyConnectedComponent",
]
