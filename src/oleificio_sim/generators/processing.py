"""
Processing generator: process parameters and production output per batch.

Process parameters follow the weather:
- Grinding temperature tracks ambient temperature (+5 C), capped at 27 C
  to stay within cold extraction
- Malaxation (mixing) time grows with humidity around a 35 minute optimum
- Centrifuge speed depends on the olive quality tier

Yield starts from a variety base and is adjusted by quality, extraction
temperature and mixing time modifiers. Energy and water follow from the
batch weight and the process parameters.
"""

from dataclasses import dataclass

from ..constants import (
    BASE_MINUTES_PER_TONNE,
    CENTRIFUGE_JITTER,
    CENTRIFUGE_REFERENCE_SPEED,
    CENTRIFUGE_SPEED,
    ENERGY_KWH_PER_KG,
    GRINDING_AMBIENT_OFFSET,
    MAX_PROCESSING_TEMP,
    MAX_YIELD_PCT,
    MIXING_REFERENCE_HUMIDITY,
    MIXING_TIME,
    MIXING_TOLERANCE,
    QUALITY_YIELD_MODIFIER,
    WATER_L_PER_KG,
    YIELD_RATES,
)
from ..models import EnvironmentalData, OlivesBatch, ProcessingParameters, ProductionData
from ..queries import clamp
from .base import BaseGenerator

MIN_YIELD = 0.01


@dataclass(frozen=True)
class YieldModifiers:
    """Multiplicative yield adjustments."""

    quality: float
    temperature: float
    mixing: float

    @property
    def total(self) -> float:
        return self.quality * self.temperature * self.mixing


def yield_cap(variety: str) -> float:
    """
    Highest yield a variety can reach.

    The top of the base range under the Premium modifier with no penalties,
    at most MAX_YIELD_PCT. Rounded to 2 decimals like the yields it bounds.
    """
    rates = YIELD_RATES[variety]
    reachable = (rates["base"] + rates["variation"] / 2) * max(QUALITY_YIELD_MODIFIER.values())
    return round(min(reachable, MAX_YIELD_PCT), 2)


def mixing_duration(humidity: float) -> float:
    """Malaxation minutes for the ambient humidity, clamped to 30-45."""
    duration = MIXING_TIME["optimal"] * (humidity / MIXING_REFERENCE_HUMIDITY)
    return round(clamp(duration, MIXING_TIME["min"], MIXING_TIME["max"]), 1)


def mixing_modifier(duration: float) -> float:
    """Yield modifier for a mixing duration."""
    if duration < MIXING_TIME["min"]:
        return 0.9
    if duration > MIXING_TIME["max"]:
        return 0.95
    distance = abs(duration - MIXING_TIME["optimal"])
    if distance <= MIXING_TOLERANCE:
        return 1.0
    return 1.0 - (distance / MIXING_TIME["optimal"]) * 0.1


def base_processing_minutes(weight: float) -> float:
    """Processing time without mixing: 45 minutes per tonne."""
    return BASE_MINUTES_PER_TONNE * (weight / 1000)


class ProcessingGenerator(BaseGenerator):
    """Convert a batch and the day's weather into process and production records."""

    def generate_processing_data(
        self, batch: OlivesBatch, environmental: EnvironmentalData
    ) -> tuple[ProcessingParameters, ProductionData]:
        """
        Generate processing parameters, then the production they yield.

        Args:
            batch: Batch being processed
            environmental: Weather of the arrival day

        Returns:
            Tuple of (parameters, production)
        """
        parameters = self.generate_parameters(batch, environmental)
        production = self.calculate_production(batch, parameters)
        return parameters, production

    def generate_parameters(
        self, batch: OlivesBatch, environmental: EnvironmentalData
    ) -> ProcessingParameters:
        grinding = min(environmental.temperature + GRINDING_AMBIENT_OFFSET, MAX_PROCESSING_TEMP)

        return ProcessingParameters(
            batch_id=batch.id,
            timestamp=batch.arrival_timestamp,
            grinding_temperature=round(grinding, 1),
            mixing_duration=mixing_duration(environmental.humidity),
            extraction_temperature=round(grinding - 1, 1),
            centrifugation_speed=self._centrifugation_speed(batch.quality),
        )

    def _centrifugation_speed(self, quality: str) -> int:
        band = CENTRIFUGE_SPEED[quality]
        jitter = self.uniform(-CENTRIFUGE_JITTER, CENTRIFUGE_JITTER)
        speed = band["optimal"] * (1 + jitter)
        return int(round(clamp(speed, band["min"], band["max"])))

    def yield_modifiers(
        self, batch: OlivesBatch, parameters: ProcessingParameters
    ) -> YieldModifiers:
        """Quality, temperature and mixing modifiers for a batch."""
        return YieldModifiers(
            quality=QUALITY_YIELD_MODIFIER[batch.quality],
            temperature=0.9 if parameters.extraction_temperature > MAX_PROCESSING_TEMP else 1.0,
            mixing=mixing_modifier(parameters.mixing_duration),
        )

    def calculate_production(
        self, batch: OlivesBatch, parameters: ProcessingParameters
    ) -> ProductionData:
        """Production output of a batch processed with the given parameters."""
        rates = YIELD_RATES[batch.variety]
        base_yield = rates["base"] + (self.uniform() - 0.5) * rates["variation"]

        modifiers = self.yield_modifiers(batch, parameters)
        final_yield = round(
            clamp(base_yield * modifiers.total, MIN_YIELD, yield_cap(batch.variety)), 2
        )
        oil_produced = batch.weight * final_yield / 100

        base_minutes = base_processing_minutes(batch.weight)
        total_minutes = base_minutes + parameters.mixing_duration
        # +/-2.5% around the nominal time
        processing_time = int(round(total_minutes * (1 + (self.uniform() - 0.5) * 0.05)))

        energy = (
            batch.weight
            * ENERGY_KWH_PER_KG
            * (parameters.extraction_temperature / MAX_PROCESSING_TEMP)
            * (parameters.centrifugation_speed / CENTRIFUGE_REFERENCE_SPEED)
            * (processing_time / base_minutes)
        )

        return ProductionData(
            batch_id=batch.id,
            timestamp=batch.arrival_timestamp,
            olive_processed=batch.weight,
            oil_produced=round(oil_produced, 1),
            yield_pct=final_yield,
            processing_time=processing_time,
            energy_consumption=round(energy, 1),
            water_consumption=round(batch.weight * WATER_L_PER_KG, 1),
        )
