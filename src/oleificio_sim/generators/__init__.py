"""
Generators Package - Sub-models of the olive mill season.

Base Classes:
- GeneratorContext: Shared random state and configuration
- BaseGenerator: Base class for sub-generators

Generators (in daily call order):
- EnvironmentalGenerator: Daily weather
- BatchGenerator: Olive deliveries
- ProcessingGenerator: Process parameters and production output
- QualityGenerator: Oil analysis and certification
- MachineStateTracker: Fleet state, alerts and storage
"""

from .base import BaseGenerator, GeneratorContext
from .batches import BatchGenerator
from .environmental import EnvironmentalGenerator
from .machines import MachineState, MachineStateTracker
from .processing import ProcessingGenerator
from .quality import QualityGenerator

__all__ = [
    # Base classes
    "GeneratorContext",
    "BaseGenerator",
    # Generators
    "EnvironmentalGenerator",
    "BatchGenerator",
    "ProcessingGenerator",
    "QualityGenerator",
    "MachineStateTracker",
    "MachineState",
]
