"""Tests for coupling metrics."""

import pytest

from modrank.graph import build_dependency_graph
from modrank.ranking import analyze_coupling, compute_instability, rank_by_risk


class TestComputeInstability:
    def test_isolated_is_stable(self):
        assert compute_instability(0, 0) == 0.0

    def test_only_outgoing_is_unstable(self):
        assert compute_instability(0, 3) == 1.0

    def test_only_incoming_is_stable(self):
        assert compute_instability(4, 0) == 0.0

    def test_mixed(self):
        assert compute_instability(1, 3) == pytest.approx(0.75)


class TestAnalyzeCoupling:
    """Test Ca/Ce/instability/risk on known graphs."""

    def test_example_graph(self, cycle_graph_with_isolated):
        coupling = analyze_coupling(cycle_graph_with_isolated)

        a = coupling["A"]
        assert (a.afferent, a.efferent) == (2, 1)
        assert a.instability == pytest.approx(1 / 3)
        assert a.risk_score == pytest.approx(2 / 3)

        assert coupling["B"].risk_score == pytest.approx(0.5)
        assert coupling["C"].risk_score == pytest.approx(0.5)

        d = coupling["D"]
        assert (d.afferent, d.efferent) == (0, 1)
        assert d.instability == 1.0
        assert d.risk_score == pytest.approx(0.5)

        e = coupling["E"]
        assert (e.afferent, e.efferent, e.instability, e.risk_score) == (0, 0, 0.0, 0.0)

    def test_keys_sorted_and_complete(self, diamond_graph):
        coupling = analyze_coupling(diamond_graph)
        assert list(coupling) == list(diamond_graph.nodes())
        assert all(coupling[m].module == m for m in coupling)

    def test_afferent_matches_in_degree(self, diamond_graph):
        coupling = analyze_coupling(diamond_graph)
        for module in diamond_graph:
            assert coupling[module].afferent == diamond_graph.in_degree(module)
            assert coupling[module].efferent == diamond_graph.out_degree(module)

    def test_scores_bounded(self, star_graph):
        for metrics in analyze_coupling(star_graph).values():
            assert 0.0 <= metrics.instability <= 1.0
            assert 0.0 <= metrics.risk_score <= 1.0

    def test_single_node_not_normalized(self, single_node_graph):
        coupling = analyze_coupling(single_node_graph)
        assert coupling["a"].risk_score == 0.0

    def test_self_loop_counts_both_ways(self):
        coupling = analyze_coupling(build_dependency_graph([("a", "a")]))
        assert coupling["a"].afferent == 1
        assert coupling["a"].efferent == 1
        assert coupling["a"].instability == 0.5

    def test_empty(self, empty_graph):
        assert analyze_coupling(empty_graph) == {}


class TestRankByRisk:
    def test_highest_first_ties_by_id(self, chain_graph):
        ranked = rank_by_risk(analyze_coupling(chain_graph))
        assert [m.module for m in ranked] == ["b", "c", "a", "d"]
