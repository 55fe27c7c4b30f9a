"""Base exception for modrank."""

from typing import Any, Dict, Optional


class ModRankError(Exception):
    """Root of every error modrank raises.

    ``details`` holds the offending inputs as strings so callers can log or
    serialize them without knowing the concrete error type.
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = {key: str(value) for key, value in (details or {}).items()}

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{key}={value}" for key, value in self.details.items())
        return f"{self.message} ({rendered})"
