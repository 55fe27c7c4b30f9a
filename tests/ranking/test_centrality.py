"""Tests for PageRank centrality ranking."""

import logging

import pytest

from modrank.config import RankingConfig
from modrank.ranking import rank_centrality


class TestRankCentrality:
    def test_every_module_scored(self, diamond_graph):
        result = rank_centrality(diamond_graph)
        assert set(result.scores) == set(diamond_graph.nodes())
        assert result.converged

    def test_most_depended_on_is_top_percentile(self, star_graph):
        result = rank_centrality(star_graph)
        assert result.scores["hub"].percentile == 100
        assert result.scores["hub"].page_rank == max(result.page_ranks().values())

    def test_example_graph_cycle_outranks_d(self, cycle_graph_with_isolated):
        ranks = rank_centrality(cycle_graph_with_isolated).page_ranks()
        assert ranks["A"] > ranks["D"]
        assert ranks["D"] == pytest.approx(ranks["E"])
        assert sum(ranks.values()) == pytest.approx(5.0, abs=1e-5)

    def test_non_convergence_is_reported_not_raised(self, chain_graph, caplog):
        config = RankingConfig(pagerank_iterations=1)
        with caplog.at_level(logging.WARNING, logger="modrank"):
            result = rank_centrality(chain_graph, config)
        assert not result.converged
        assert result.iterations == 1
        assert result.final_delta > config.pagerank_tolerance
        assert len(result.scores) == 4
        assert "did not converge" in caplog.text

    def test_empty(self, empty_graph):
        result = rank_centrality(empty_graph)
        assert result.scores == {}
        assert result.converged

    def test_personalization(self, chain_graph):
        plain = rank_centrality(chain_graph).page_ranks()
        biased = rank_centrality(chain_graph, personalization={"a": 1.0}).page_ranks()
        assert biased["a"] > plain["a"]
