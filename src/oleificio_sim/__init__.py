"""
Oleificio Simulator - Synthetic season data for an olive-oil mill.

This package generates one full production season (October-January) of
internally consistent data: weather, olive batch arrivals, process
parameters, yields, oil analyses with certifications, and machine health.
"""

from .config import ConfigError, SimulationConfig, load_config
from .models import Dataset
from .season import DatasetProvider, OliveMillSimulator

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Dataset",
    "DatasetProvider",
    "OliveMillSimulator",
    "SimulationConfig",
    "load_config",
]
