"""Shared test fixtures for modrank."""

import pytest

from modrank.graph import build_dependency_graph, from_adjacency


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def cycle_graph():
    """3-cycle A -> B -> C -> A plus D -> A."""
    return build_dependency_graph([("A", "B"), ("B", "C"), ("C", "A"), ("D", "A")])


@pytest.fixture
def cycle_graph_with_isolated():
    """The 3-cycle graph plus an isolated module E."""
    return build_dependency_graph(
        [("A", "B"), ("B", "C"), ("C", "A"), ("D", "A")], nodes=["E"]
    )


@pytest.fixture
def star_graph():
    """Four leaves that all depend on one hub."""
    return from_adjacency(
        {
            "hub": [],
            "a": ["hub"],
            "b": ["hub"],
            "c": ["hub"],
            "d": ["hub"],
        }
    )


@pytest.fixture
def chain_graph():
    """Chain graph: a -> b -> c -> d."""
    return from_adjacency({"a": ["b"], "b": ["c"], "c": ["d"], "d": []})


@pytest.fixture
def diamond_graph():
    """app -> (api, cli) -> core -> util."""
    return from_adjacency(
        {
            "app": ["api", "cli"],
            "api": ["core"],
            "cli": ["core"],
            "core": ["util"],
            "util": [],
        }
    )


@pytest.fixture
def empty_graph():
    """Empty graph with no nodes."""
    return build_dependency_graph([])


@pytest.fixture
def single_node_graph():
    """Graph with a single isolated node."""
    return build_dependency_graph([], nodes=["a"])
