"""Dependency graph model and structural algorithms."""

from .algorithms import (
    Condensation,
    condense,
    cycles,
    dependency_levels,
    find_components,
    tarjan_scc,
)
from .builder import build_dependency_graph, from_adjacency
from .models import DependencyGraph, ModuleId, StronglyConnectedComponent

__all__ = [
    "Condensation",
    "DependencyGraph",
    "ModuleId",
    "StronglyConnectedComponent",
    "build_dependency_graph",
    "condense",
    "cycles",
    "dependency_levels",
    "find_components",
    "from_adjacency",
    "tarjan_scc",
]
