"""Configuration loading and management for modrank.

Configuration sources are merged in priority order:
    1. Defaults (defined in RankingConfig)
    2. Global config (~/.modrank.toml)
    3. Project config (./modrank.toml)
    4. Explicit config file
    5. Environment variables (MODRANK_* prefix)
    6. Keyword overrides

Example:
    >>> config = load_config(pagerank_damping=0.9)
    >>> config.pagerank_damping
    0.9
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional, get_type_hints

from .exceptions import InvalidConfigError


@dataclass(frozen=True)
class RankingConfig:
    """Algorithm parameters and risk cutoffs for a ranking run.

    None of the defaults are derived from production measurements; they are
    an explicit, testable policy that callers are free to tune.

    Attributes:
        PageRank:
            pagerank_damping: Probability of following an edge vs teleporting
            pagerank_tolerance: L1 delta below which iteration stops
            pagerank_iterations: Hard cap on power iterations

        Hotspot risk (centrality percentile cutoffs, 0-100):
            critical_percentile: At or above -> critical
            high_percentile: At or above -> high
            medium_percentile: At or above -> medium

        Safe order:
            core_quantile: Afferent-coupling quantile that marks core modules
            phase_critical_risk: Coupling risk score at or above -> critical phase
            phase_high_risk: Coupling risk score at or above -> high phase
            phase_medium_risk: Coupling risk score at or above -> medium phase

        Output and execution:
            hotspot_limit: Keep only the N most central hotspots (None = all)
            parallel: Run coupling, cycle detection and PageRank concurrently
            workers: Thread count for parallel runs (None = executor default)
    """

    # PageRank
    pagerank_damping: float = 0.85
    pagerank_tolerance: float = 1e-6
    pagerank_iterations: int = 100

    # Hotspot risk
    critical_percentile: int = 90
    high_percentile: int = 75
    medium_percentile: int = 50

    # Safe order
    core_quantile: float = 0.9
    phase_critical_risk: float = 0.8
    phase_high_risk: float = 0.6
    phase_medium_risk: float = 0.4

    # Output and execution
    hotspot_limit: Optional[int] = None
    parallel: bool = False
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not 0.0 < self.pagerank_damping < 1.0:
            raise InvalidConfigError(
                "pagerank_damping", self.pagerank_damping, "must be between 0.0 and 1.0 (exclusive)"
            )
        if self.pagerank_tolerance <= 0:
            raise InvalidConfigError(
                "pagerank_tolerance", self.pagerank_tolerance, "must be positive"
            )
        if self.pagerank_iterations < 1:
            raise InvalidConfigError(
                "pagerank_iterations", self.pagerank_iterations, "must be at least 1"
            )

        for name in ("critical_percentile", "high_percentile", "medium_percentile"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise InvalidConfigError(name, value, "must be between 0 and 100")
        if not self.critical_percentile >= self.high_percentile >= self.medium_percentile:
            raise InvalidConfigError(
                "critical_percentile",
                self.critical_percentile,
                "percentile cutoffs must satisfy critical >= high >= medium",
            )

        if not 0.0 <= self.core_quantile <= 1.0:
            raise InvalidConfigError(
                "core_quantile", self.core_quantile, "must be between 0.0 and 1.0"
            )
        for name in ("phase_critical_risk", "phase_high_risk", "phase_medium_risk"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise InvalidConfigError(name, value, "must be between 0.0 and 1.0")
        if not self.phase_critical_risk >= self.phase_high_risk >= self.phase_medium_risk:
            raise InvalidConfigError(
                "phase_critical_risk",
                self.phase_critical_risk,
                "phase risk cutoffs must satisfy critical >= high >= medium",
            )

        if self.hotspot_limit is not None and self.hotspot_limit < 1:
            raise InvalidConfigError("hotspot_limit", self.hotspot_limit, "must be at least 1")
        if self.workers is not None and self.workers < 1:
            raise InvalidConfigError("workers", self.workers, "must be at least 1")


DEFAULT_CONFIG = RankingConfig()


def load_config(config_file: Optional[Path] = None, **overrides: Any) -> RankingConfig:
    """Load configuration with auto-discovery and merging.

    Configuration sources are merged in priority order (lowest to highest):
        1. Defaults (RankingConfig field defaults)
        2. Global config (~/.modrank.toml)
        3. Project config (./modrank.toml)
        4. Explicit config file (if config_file provided)
        5. Environment variables (MODRANK_* prefix)
        6. Keyword overrides

    A TOML file may hold the keys at top level or under a ``[ranking]`` table.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides

    Returns:
        Validated RankingConfig instance

    Raises:
        InvalidConfigError: If a config file is missing, unreadable or holds
            unknown keys, or if any value fails validation
    """
    merged: dict[str, Any] = {}

    global_config = Path.home() / ".modrank.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "modrank.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise InvalidConfigError("config_file", config_file, "file not found")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(RankingConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise InvalidConfigError(unknown[0], merged[unknown[0]], "unknown configuration key")

    return RankingConfig(**merged)


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from MODRANK_* environment variables.

    Every RankingConfig field can be set as MODRANK_<FIELD_NAME>, e.g.
    MODRANK_PAGERANK_DAMPING=0.9 or MODRANK_PARALLEL=true.

    Returns:
        Dict of field_name -> parsed_value for any MODRANK_* vars found.
    """
    type_hints = get_type_hints(RankingConfig)

    result: dict[str, Any] = {}

    for field_name in RankingConfig.__dataclass_fields__:
        env_key = f"MODRANK_{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
        except ValueError as e:
            raise InvalidConfigError(field_name, env_value, f"{env_key}: {e}") from e
        if parsed is not None:
            result[field_name] = parsed

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse an environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    # Optional[X] is Union[X, None]; unwrap to X
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str:
        return value

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its ranking settings.

    Raises:
        InvalidConfigError: If the file cannot be read or parsed
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise InvalidConfigError("config_file", path, str(e)) from e

    section = data.get("ranking", data)
    if not isinstance(section, dict):
        raise InvalidConfigError("ranking", section, "expected a table")
    return dict(section)
