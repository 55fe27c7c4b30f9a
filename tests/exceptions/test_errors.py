"""Tests for the modrank exception hierarchy."""

import pytest

from modrank.exceptions import (
    ConfigurationError,
    GraphError,
    InvalidConfigError,
    InvalidEdgeError,
    ModRankError,
)


class TestModRankError:
    """Test the base error."""

    def test_message_only(self):
        err = ModRankError("boom")
        assert str(err) == "boom"
        assert err.details == {}

    def test_details_rendered(self):
        err = ModRankError("boom", details={"a": "1", "b": "2"})
        assert str(err) == "boom (a=1, b=2)"


class TestInvalidEdgeError:
    """Test graph input errors."""

    def test_hierarchy(self):
        err = InvalidEdgeError("a", "", "module id is empty or blank")
        assert isinstance(err, GraphError)
        assert isinstance(err, ModRankError)

    def test_attributes(self):
        err = InvalidEdgeError("a", "", "module id is empty or blank")
        assert err.source == "a"
        assert err.target == ""
        assert err.message == "Invalid edge: 'a' -> ''"
        assert err.details["reason"] == "module id is empty or blank"

    def test_catchable_as_base(self):
        with pytest.raises(ModRankError):
            raise InvalidEdgeError(None, "b", "module id must be a string, got NoneType")


class TestInvalidConfigError:
    """Test configuration errors."""

    def test_hierarchy(self):
        err = InvalidConfigError("workers", 0, "must be at least 1")
        assert isinstance(err, ConfigurationError)
        assert isinstance(err, ModRankError)

    def test_message(self):
        err = InvalidConfigError("workers", 0, "must be at least 1")
        assert err.message == "Invalid configuration for workers: 0"
        assert err.details == {"key": "workers", "value": "0", "reason": "must be at least 1"}
