"""Graph-related exceptions: malformed edges and node identifiers."""

from typing import Any

from .base import ModRankError


class GraphError(ModRankError):
    """Base class for dependency graph errors."""

    pass


class InvalidEdgeError(GraphError):
    """Raised when an edge references an empty, blank or non-string module id."""

    def __init__(self, source: Any, target: Any, reason: str):
        super().__init__(
            f"Invalid edge: {source!r} -> {target!r}",
            details={"source": repr(source), "target": repr(target), "reason": reason},
        )
        self.source = source
        self.target = target
        self.reason = reason
