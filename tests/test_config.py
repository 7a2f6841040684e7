"""
Tests for SimulationConfig and YAML loading.
"""

from datetime import date
from pathlib import Path

import pytest

from oleificio_sim import ConfigError, SimulationConfig, load_config

REPO_CONFIG = Path(__file__).parent.parent / "config" / "season_2024.yaml"


class TestSimulationConfig:
    def test_defaults(self):
        config = SimulationConfig()
        config.validate()
        assert config.seed is None
        assert config.season_start == date(2024, 10, 1)
        assert config.season_end == date(2025, 1, 31)
        assert config.season_length == 123
        assert config.origin == "Bitonto"

    def test_season_days(self):
        config = SimulationConfig(season_start=date(2024, 12, 30), season_end=date(2025, 1, 2))
        assert config.season_days() == [
            date(2024, 12, 30),
            date(2024, 12, 31),
            date(2025, 1, 1),
            date(2025, 1, 2),
        ]

    def test_inverted_season(self):
        config = SimulationConfig(season_start=date(2025, 1, 1), season_end=date(2024, 12, 1))
        assert config.season_length == 0
        with pytest.raises(ConfigError, match="before season_start"):
            config.validate()

    def test_month_without_climate_profile(self):
        config = SimulationConfig(season_start=date(2024, 9, 20), season_end=date(2024, 10, 10))
        with pytest.raises(ConfigError, match="No climate profile"):
            config.validate()

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"min_daily_batches": 0},
            {"min_daily_batches": 3, "max_daily_batches": 2},
            {"min_batch_weight": 0},
            {"min_batch_weight": 3000},
            {"organic_probability": 1.5},
            {"organic_probability": -0.1},
        ],
    )
    def test_invalid_bounds(self, kwargs):
        with pytest.raises(ConfigError):
            SimulationConfig(**kwargs).validate()


class TestFromDict:
    def test_iso_strings(self):
        config = SimulationConfig.from_dict(
            {"seed": 5, "season_start": "2024-11-01", "season_end": "2024-11-30"}
        )
        assert config.seed == 5
        assert config.season_start == date(2024, 11, 1)
        assert config.season_length == 30

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="batch_count"):
            SimulationConfig.from_dict({"batch_count": 3})

    def test_bad_date(self):
        with pytest.raises(ConfigError, match="season_start"):
            SimulationConfig.from_dict({"season_start": "2024-13-01"})

    def test_validates(self):
        with pytest.raises(ConfigError):
            SimulationConfig.from_dict({"max_daily_batches": 0})


class TestLoadConfig:
    def test_repo_config(self):
        config = load_config(REPO_CONFIG)
        assert config.seed == 42
        assert config.season_start == date(2024, 10, 1)
        assert config.season_end == date(2025, 1, 31)

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == SimulationConfig()

    def test_partial_override(self, tmp_path):
        path = tmp_path / "season.yaml"
        path.write_text("seed: 9\nmax_daily_batches: 3\n")
        config = load_config(path)
        assert config.seed == 9
        assert config.max_daily_batches == 3
        assert config.min_daily_batches == 1

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("seed: [1, 2\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Cannot read"):
            load_config(tmp_path / "missing.yaml")
