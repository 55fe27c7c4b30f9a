"""Cluster data-schema entities into domains via their relation graph.

Entities that reference each other in a cycle (strongly connected
component) usually belong to one domain. Clusters are named from a common
name prefix, a dominant core entity, or the file they live in. Clusters
whose name cannot be inferred confidently are left unclustered rather than
guessed.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Literal, Optional

from ..graph.algorithms import tarjan_scc

ClusterSource = Literal["prefix", "core-entity", "filename"]

MIN_CONFIDENCE = 60
MIN_CLUSTER_SIZE = 2
SIGNIFICANT_DEGREE = 3
CORE_MIN_IN_DEGREE = 2
PREFIX_MIN_LENGTH = 3
PREFIX_MIN_SHARE = 0.6
FALLBACK_CONFIDENCE = 30

_CAMEL_SPLIT = re.compile(r"(?=[A-Z])")


@dataclass(frozen=True)
class EntityModel:
    """A schema entity and the entities its fields reference."""

    name: str
    file: str = ""
    relations: tuple[str, ...] = ()


@dataclass
class RelationNode:
    model: str
    file: str
    relations: list[str] = field(default_factory=list)
    referenced_by: list[str] = field(default_factory=list)
    in_degree: int = 0
    out_degree: int = 0


@dataclass(frozen=True)
class ModelCluster:
    name: str
    core: Optional[str]
    models: tuple[str, ...]
    confidence: int
    source: ClusterSource


@dataclass(frozen=True)
class RelationGraphResult:
    nodes: tuple[RelationNode, ...] = ()
    clusters: tuple[ModelCluster, ...] = ()
    unclustered: tuple[str, ...] = ()


def build_relation_graph(models: Sequence[EntityModel]) -> dict[str, RelationNode]:
    """Relation nodes keyed by model name, with reverse references filled in."""
    nodes = {
        m.name: RelationNode(
            model=m.name, file=m.file, relations=list(m.relations), out_degree=len(m.relations)
        )
        for m in models
    }
    for m in models:
        for target in m.relations:
            node = nodes.get(target)
            if node is not None:
                node.referenced_by.append(m.name)
                node.in_degree += 1
    return nodes


def analyze_relation_graph(models: Sequence[EntityModel]) -> RelationGraphResult:
    """Detect domain clusters among schema entities.

    Only clusters with confidence >= MIN_CONFIDENCE are returned; everything
    else lands in ``unclustered``. Clusters are sorted largest first.
    """
    nodes = build_relation_graph(models)
    sccs = tarjan_scc(nodes, lambda name: nodes[name].relations)

    clusters: list[ModelCluster] = []
    unclustered: list[str] = []

    for scc in sccs:
        members = sorted(scc)
        if len(members) < MIN_CLUSTER_SIZE:
            node = nodes[members[0]]
            if node.in_degree < SIGNIFICANT_DEGREE and node.out_degree < SIGNIFICANT_DEGREE:
                unclustered.extend(members)
                continue

        name, confidence, source = infer_cluster_name(members, nodes)
        if confidence < MIN_CONFIDENCE:
            unclustered.extend(members)
            continue

        clusters.append(
            ModelCluster(
                name=name,
                core=find_core_entity(members, nodes),
                models=tuple(members),
                confidence=confidence,
                source=source,
            )
        )

    clusters.sort(key=lambda c: -len(c.models))
    return RelationGraphResult(
        nodes=tuple(nodes.values()),
        clusters=tuple(clusters),
        unclustered=tuple(sorted(unclustered)),
    )


def find_common_prefix(models: Sequence[str]) -> Optional[str]:
    """CamelCase head shared by at least 60% of the models, if any.

    BookingSlot, BookingReminder -> "Booking".
    """
    if len(models) < 2:
        return None

    counts: dict[str, int] = {}
    for model in models:
        parts = [p for p in _CAMEL_SPLIT.split(model) if p]
        if len(parts) >= 2 and len(parts[0]) >= PREFIX_MIN_LENGTH:
            counts[parts[0]] = counts.get(parts[0], 0) + 1

    for prefix, count in counts.items():
        if count / len(models) >= PREFIX_MIN_SHARE:
            return prefix
    return None


def find_core_entity(models: Sequence[str], nodes: dict[str, RelationNode]) -> Optional[str]:
    """Most referenced model, if it is referenced at least twice."""
    core = None
    max_in_degree = 0
    for model in models:
        node = nodes.get(model)
        if node is not None and node.in_degree > max_in_degree:
            max_in_degree = node.in_degree
            core = model
    return core if max_in_degree >= CORE_MIN_IN_DEGREE else None


def infer_cluster_name(
    models: Sequence[str], nodes: dict[str, RelationNode]
) -> tuple[str, int, ClusterSource]:
    """Name, confidence (0-100) and naming strategy for a cluster."""
    prefix = find_common_prefix(models)
    if prefix:
        return _pluralize(prefix), 85, "prefix"

    core = find_core_entity(models, nodes)
    if core and len(models) >= 2:
        return _pluralize(core), 75, "core-entity"

    files = {nodes[m].file for m in models if m in nodes}
    if len(files) == 1:
        stem = PurePosixPath(files.pop()).stem
        if stem and stem != "schema":
            return stem[:1].upper() + stem[1:], 50, "filename"

    return "", 0, "filename"


def model_domain(
    model: str, clusters: Sequence[ModelCluster], fallback: str
) -> tuple[str, int]:
    """Domain name and confidence for a model, or the fallback domain."""
    for cluster in clusters:
        if model in cluster.models:
            return cluster.name, cluster.confidence
    return fallback, FALLBACK_CONFIDENCE


def _pluralize(name: str) -> str:
    return name if name.endswith("s") else f"{name}s"
