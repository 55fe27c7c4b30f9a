"""Tests for dependency hotspot classification."""

import pytest

from modrank.config import RankingConfig
from modrank.ranking import (
    CentralityResult,
    CouplingMetrics,
    RiskLevel,
    analyze_coupling,
    classify_hotspots,
    hotspot_reason,
    hotspot_risk_level,
    rank_centrality,
)


def _metrics(afferent, efferent, instability):
    return CouplingMetrics(
        module="m",
        afferent=afferent,
        efferent=efferent,
        instability=instability,
        risk_score=0.0,
    )


class TestHotspotRiskLevel:
    @pytest.mark.parametrize(
        "percentile,expected",
        [
            (100, RiskLevel.CRITICAL),
            (90, RiskLevel.CRITICAL),
            (89, RiskLevel.HIGH),
            (75, RiskLevel.HIGH),
            (74, RiskLevel.MEDIUM),
            (50, RiskLevel.MEDIUM),
            (49, RiskLevel.LOW),
            (0, RiskLevel.LOW),
        ],
    )
    def test_default_cutoffs(self, percentile, expected):
        assert hotspot_risk_level(percentile) == expected

    def test_custom_cutoffs(self):
        config = RankingConfig(critical_percentile=99, high_percentile=95, medium_percentile=90)
        assert hotspot_risk_level(92, config) == RiskLevel.MEDIUM
        assert hotspot_risk_level(80, config) == RiskLevel.LOW


class TestHotspotReason:
    def test_all_factors(self):
        reason = hotspot_reason(100, _metrics(4, 0, 0.0), max_afferent=4)
        assert reason == "top-decile centrality + high afferent coupling + stable core module"

    def test_top_quartile(self):
        reason = hotspot_reason(80, _metrics(0, 0, 0.0), max_afferent=4)
        assert reason == "top-quartile centrality"

    def test_unstable(self):
        assert hotspot_reason(60, _metrics(0, 3, 1.0), max_afferent=4) == (
            "unstable, depends on 3 modules"
        )
        assert hotspot_reason(60, _metrics(0, 1, 1.0), max_afferent=4) == (
            "unstable, depends on 1 module"
        )

    def test_central_fallback(self):
        assert hotspot_reason(60, _metrics(1, 1, 0.5), max_afferent=4) == (
            "central in dependency graph"
        )

    def test_peripheral_fallback(self):
        assert hotspot_reason(20, _metrics(0, 0, 0.0), max_afferent=0) == "peripheral module"


class TestClassifyHotspots:
    """Hotspots on the example graph: A <- D, A -> B -> C -> A, plus E."""

    @pytest.fixture
    def hotspots(self, cycle_graph_with_isolated):
        coupling = analyze_coupling(cycle_graph_with_isolated)
        centrality = rank_centrality(cycle_graph_with_isolated)
        return classify_hotspots(coupling, centrality)

    def test_most_central_first(self, hotspots):
        assert [h.module for h in hotspots] == ["A", "B", "C", "D", "E"]
        ranks = [h.page_rank for h in hotspots]
        assert ranks == sorted(ranks, reverse=True)

    def test_percentiles_and_levels(self, hotspots):
        assert [h.percentile for h in hotspots] == [100, 80, 60, 40, 20]
        assert [h.risk_level for h in hotspots] == [
            RiskLevel.CRITICAL,
            RiskLevel.HIGH,
            RiskLevel.MEDIUM,
            RiskLevel.LOW,
            RiskLevel.LOW,
        ]

    def test_counts_and_reason(self, hotspots):
        top = hotspots[0]
        assert top.dependent_count == 2
        assert top.dependency_count == 1
        assert top.coupling.afferent == 2
        assert top.reason == "top-decile centrality + high afferent coupling"

    def test_empty(self):
        assert classify_hotspots({}, CentralityResult()) == []
