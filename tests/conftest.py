"""
Pytest fixtures for the olive mill simulator tests.

Provides:
- Seeded configuration and generator context
- A full default season, generated once per session
- Hand-built records for deterministic unit tests
"""

from datetime import date, datetime, timedelta

import pytest

from oleificio_sim import OliveMillSimulator, SimulationConfig
from oleificio_sim.generators import GeneratorContext
from oleificio_sim.models import BatchId, EnvironmentalData, OlivesBatch

SEED = 42


@pytest.fixture
def config() -> SimulationConfig:
    """Default season with a fixed seed."""
    return SimulationConfig(seed=SEED)


@pytest.fixture
def ctx(config) -> GeneratorContext:
    """Seeded generator context."""
    return GeneratorContext.create(config)


@pytest.fixture(scope="session")
def season():
    """A full default season (seeded), shared across tests."""
    simulator = OliveMillSimulator(SimulationConfig(seed=SEED))
    return simulator.generate_season_data()


@pytest.fixture
def mild_day() -> EnvironmentalData:
    """Typical November weather."""
    return EnvironmentalData(
        timestamp=date(2024, 11, 15),
        temperature=15.0,
        humidity=70.0,
        wind_speed=8.0,
        precipitation=0.0,
    )


def _make_batch(
    variety: str = "Coratina",
    quality: str = "Premium",
    weight: int = 1000,
    is_organic: bool = False,
    origin: str = "Bitonto",
    arrival: datetime = datetime(2024, 11, 15, 10, 30),
    harvest_hours_before: float = 24,
) -> OlivesBatch:
    """Hand-built batch for deterministic tests."""
    return OlivesBatch(
        id=BatchId(f"{arrival.date().isoformat()}-1"),
        arrival_timestamp=arrival,
        weight=weight,
        variety=variety,
        quality=quality,
        origin=origin,
        harvest_date=arrival - timedelta(hours=harvest_hours_before),
        is_organic=is_organic,
    )


@pytest.fixture
def make_batch():
    """Factory for hand-built batches."""
    return _make_batch
