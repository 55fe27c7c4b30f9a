"""Entity-relation analysis for data schemas."""

from .relation_graph import (
    EntityModel,
    ModelCluster,
    RelationGraphResult,
    RelationNode,
    analyze_relation_graph,
    build_relation_graph,
    model_domain,
)

__all__ = [
    "EntityModel",
    "ModelCluster",
    "RelationGraphResult",
    "RelationNode",
    "analyze_relation_graph",
    "build_relation_graph",
    "model_domain",
]
