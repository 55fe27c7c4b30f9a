"""Tests for dependency graph construction."""

import pytest

from modrank.exceptions import InvalidEdgeError
from modrank.graph import build_dependency_graph, from_adjacency


class TestBuildDependencyGraph:
    """Test graph construction from edge lists."""

    def test_adjacency_and_reverse(self, cycle_graph):
        assert cycle_graph.outgoing("A") == ("B",)
        assert set(cycle_graph.incoming("A")) == {"C", "D"}
        assert cycle_graph.incoming("D") == ()

    def test_reverse_index_mirrors_adjacency(self, diamond_graph):
        for source in diamond_graph.nodes():
            for target in diamond_graph.outgoing(source):
                assert source in diamond_graph.incoming(target)
        for target in diamond_graph.nodes():
            for source in diamond_graph.incoming(target):
                assert target in diamond_graph.outgoing(source)

    def test_target_only_nodes_are_created(self):
        graph = build_dependency_graph([("app", "lib")])
        assert "lib" in graph
        assert graph.outgoing("lib") == ()
        assert graph.node_count == 2

    def test_nodes_are_sorted(self):
        graph = build_dependency_graph([("zeta", "alpha"), ("mid", "alpha")])
        assert graph.nodes() == ("alpha", "mid", "zeta")
        assert list(graph) == ["alpha", "mid", "zeta"]

    def test_duplicate_edges_collapse(self):
        graph = build_dependency_graph([("a", "b"), ("a", "b"), ("a", "c")])
        assert graph.outgoing("a") == ("b", "c")
        assert graph.edge_count == 2
        assert graph.in_degree("b") == 1

    def test_outgoing_keeps_first_seen_order(self):
        graph = build_dependency_graph([("a", "z"), ("a", "b"), ("a", "m")])
        assert graph.outgoing("a") == ("z", "b", "m")

    def test_self_loop_kept(self):
        graph = build_dependency_graph([("a", "a")])
        assert graph.has_self_loop("a")
        assert graph.out_degree("a") == 1
        assert graph.in_degree("a") == 1
        assert graph.edge_count == 1

    def test_isolated_nodes(self):
        graph = build_dependency_graph([("a", "b")], nodes=["c", "a"])
        assert graph.nodes() == ("a", "b", "c")
        assert graph.out_degree("c") == 0
        assert graph.in_degree("c") == 0

    def test_empty(self, empty_graph):
        assert empty_graph.node_count == 0
        assert empty_graph.edge_count == 0
        assert empty_graph.nodes() == ()

    def test_unknown_node_lookups(self, chain_graph):
        assert chain_graph.outgoing("missing") == ()
        assert chain_graph.incoming("missing") == ()
        assert "missing" not in chain_graph


class TestInvalidEdges:
    """Blank or non-string ids are rejected, never dropped."""

    @pytest.mark.parametrize("edge", [("", "b"), ("a", ""), ("   ", "b"), ("a", "\t")])
    def test_blank_id_rejected(self, edge):
        with pytest.raises(InvalidEdgeError) as exc_info:
            build_dependency_graph([edge])
        assert "blank" in exc_info.value.reason

    def test_non_string_id_rejected(self):
        with pytest.raises(InvalidEdgeError) as exc_info:
            build_dependency_graph([("a", None)])
        assert "string" in exc_info.value.reason

    def test_malformed_edge_rejected(self):
        with pytest.raises(InvalidEdgeError):
            build_dependency_graph([("a", "b", "c")])

    def test_blank_isolated_node_rejected(self):
        with pytest.raises(InvalidEdgeError) as exc_info:
            build_dependency_graph([], nodes=[""])
        assert exc_info.value.target is None
        assert exc_info.value.reason == "isolated module id is empty or blank"
        assert exc_info.value.message == "Invalid edge: '' -> None"

    def test_string_edge_rejected(self):
        with pytest.raises(InvalidEdgeError) as exc_info:
            build_dependency_graph(["ab"])
        assert exc_info.value.source == "ab"
        assert "not a string" in exc_info.value.reason


class TestFromAdjacency:
    """Test construction from {module: [deps]} mappings."""

    def test_keys_become_nodes(self):
        graph = from_adjacency({"a": ["b"], "c": []})
        assert graph.nodes() == ("a", "b", "c")
        assert graph.edge_count == 1

    def test_matches_edge_list_build(self, chain_graph):
        rebuilt = build_dependency_graph([("a", "b"), ("b", "c"), ("c", "d")])
        assert rebuilt == chain_graph
