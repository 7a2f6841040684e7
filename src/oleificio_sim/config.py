"""
Simulation configuration.

SimulationConfig holds the knobs of one season run. Defaults reproduce the
2024/25 Bitonto season; a YAML file can override any field:

    seed: 42
    season_start: 2024-10-01
    season_end: 2025-01-31
    max_daily_batches: 2
"""

from dataclasses import dataclass, fields
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from .constants import CERTIFICATION_BODY, DOP_ORIGIN, MONTHLY_PROFILES


class ConfigError(ValueError):
    """Raised when a configuration is unreadable or inconsistent."""

    pass


@dataclass
class SimulationConfig:
    """Configuration for one season of generation."""

    # Random state (None = fresh OS entropy on every run)
    seed: int | None = None

    # Season window, inclusive on both ends
    season_start: date = date(2024, 10, 1)
    season_end: date = date(2025, 1, 31)

    # Batch arrivals
    min_daily_batches: int = 1
    max_daily_batches: int = 2
    min_batch_weight: int = 500  # kg
    max_batch_weight: int = 2000  # kg
    organic_probability: float = 0.2
    origin: str = DOP_ORIGIN

    certification_body: str = CERTIFICATION_BODY

    def validate(self) -> None:
        """
        Check the configuration is consistent.

        Raises:
            ConfigError: On the first inconsistency found
        """
        if self.season_end < self.season_start:
            raise ConfigError(
                f"season_end {self.season_end} is before season_start {self.season_start}"
            )
        missing = sorted({d.month for d in self.season_days()} - set(MONTHLY_PROFILES))
        if missing:
            raise ConfigError(
                f"No climate profile for month(s) {missing}; "
                f"supported months are {sorted(MONTHLY_PROFILES)}"
            )
        if not 1 <= self.min_daily_batches <= self.max_daily_batches:
            raise ConfigError(
                f"Daily batch bounds must satisfy 1 <= min <= max, "
                f"got {self.min_daily_batches}..{self.max_daily_batches}"
            )
        if not 0 < self.min_batch_weight <= self.max_batch_weight:
            raise ConfigError(
                f"Batch weight bounds must satisfy 0 < min <= max, "
                f"got {self.min_batch_weight}..{self.max_batch_weight}"
            )
        if not 0.0 <= self.organic_probability <= 1.0:
            raise ConfigError(
                f"organic_probability must be in [0, 1], got {self.organic_probability}"
            )

    def season_days(self) -> list[date]:
        """Every calendar day of the season, in order."""
        return [
            date.fromordinal(ordinal)
            for ordinal in range(self.season_start.toordinal(), self.season_end.toordinal() + 1)
        ]

    @property
    def season_length(self) -> int:
        return max(0, (self.season_end - self.season_start).days + 1)

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> "SimulationConfig":
        """
        Build a config from a mapping, coercing ISO date strings.

        Raises:
            ConfigError: On unknown keys or unparseable dates
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration key(s): {unknown}")

        kwargs = dict(values)
        for key in ("season_start", "season_end"):
            if key in kwargs and isinstance(kwargs[key], str):
                try:
                    kwargs[key] = date.fromisoformat(kwargs[key])
                except ValueError as e:
                    raise ConfigError(f"Invalid date for {key}: {kwargs[key]!r}") from e
        config = cls(**kwargs)
        config.validate()
        return config


def load_config(path: Path | str) -> SimulationConfig:
    """
    Load a SimulationConfig from a YAML file.

    Args:
        path: YAML file holding a mapping of SimulationConfig fields

    Returns:
        Validated SimulationConfig

    Raises:
        ConfigError: If the file is missing, malformed, or inconsistent
    """
    try:
        with open(path) as f:
            values = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if values is None:
        values = {}
    if not isinstance(values, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return SimulationConfig.from_dict(values)
