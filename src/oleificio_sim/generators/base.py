"""
Base classes for the season sub-generators.

This module provides:
- GeneratorContext: Shared random state and configuration for one simulator
- BaseGenerator: Base class giving generators convenient access to it

Design Principles:
- The context owns the random state; every draw goes through ctx.rng
- Generators read configuration from the context and never share records
- Only MachineStateTracker keeps state across days
"""

from dataclasses import dataclass

import numpy as np
from faker import Faker

from ..config import SimulationConfig
from ..queries import clamp_probability


@dataclass
class GeneratorContext:
    """
    Shared state for all sub-generators of one simulator.

    Attributes:
        config: Season configuration
        rng: NumPy random generator (seeded from config.seed)
        fake: Faker instance, seeded from rng so it follows the same seed
    """

    config: SimulationConfig
    rng: np.random.Generator
    fake: Faker

    @classmethod
    def create(cls, config: SimulationConfig | None = None) -> "GeneratorContext":
        """
        Build a context from a configuration.

        Args:
            config: Season configuration (defaults to SimulationConfig())

        Returns:
            Context with rng and Faker seeded from config.seed
        """
        config = config or SimulationConfig()
        rng = np.random.default_rng(config.seed)
        fake = Faker()
        fake.seed_instance(int(rng.integers(0, 2**32 - 1)))
        return cls(config=config, rng=rng, fake=fake)


class BaseGenerator:
    """
    Base class for sub-generators.

    Subclasses draw randomness only through self.rng so a seeded context
    reproduces the whole season.
    """

    def __init__(self, ctx: GeneratorContext) -> None:
        """
        Initialize generator with shared context.

        Args:
            ctx: Shared GeneratorContext instance
        """
        self.ctx = ctx

    @property
    def rng(self) -> np.random.Generator:
        """Convenience accessor for NumPy random generator."""
        return self.ctx.rng

    @property
    def fake(self) -> Faker:
        """Convenience accessor for Faker instance."""
        return self.ctx.fake

    @property
    def config(self) -> SimulationConfig:
        """Convenience accessor for the season configuration."""
        return self.ctx.config

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        """Single uniform draw in [low, high)."""
        return float(self.rng.uniform(low, high))

    def chance(self, probability: float) -> bool:
        """Bernoulli draw; probability is clamped to [0, 1] first."""
        return bool(self.rng.random() < clamp_probability(probability))

    def randint(self, low: int, high: int) -> int:
        """Uniform integer in [low, high], both inclusive."""
        return int(self.rng.integers(low, high, endpoint=True))
