"""Exception hierarchy for modrank."""

from .base import ModRankError
from .config import ConfigurationError, InvalidConfigError
from .graph import GraphError, InvalidEdgeError

__all__ = [
    "ModRankError",
    "GraphError",
    "InvalidEdgeError",
    "ConfigurationError",
    "InvalidConfigError",
]
