"""
Environmental generator: daily weather for the mill.

Weather follows the climate of Bitonto during the harvest months. Each day
draws a base condition from its monthly profile, then synthesizes hourly
samples over the working hours (8:00-18:00) with a temperature and wind
peak at 14:00. The daily record averages the hourly samples and sums the
rain.
"""

from dataclasses import dataclass
from datetime import date

from ..constants import (
    DAYTIME_HOURS,
    MONTHLY_PROFILES,
    TEMPERATURE_PEAK_HOUR,
    WEATHER_EXTREMES,
    MonthlyProfile,
)
from ..models import EnvironmentalData
from ..queries import clamp, mean
from .base import BaseGenerator, GeneratorContext


@dataclass(frozen=True)
class DailyConditions:
    """Base weather drawn once per day."""

    is_rainy_day: bool
    base_temperature: float
    base_humidity: float
    base_wind_speed: float


@dataclass(frozen=True)
class HourlySample:
    hour: int
    temperature: float
    humidity: float
    wind_speed: float
    precipitation: float


class EnvironmentalGenerator(BaseGenerator):
    """
    Generate one EnvironmentalData record per day.

    No state is kept between days; the output depends only on the date and
    the random stream.
    """

    def __init__(
        self,
        ctx: GeneratorContext,
        profiles: dict[int, MonthlyProfile] | None = None,
    ) -> None:
        super().__init__(ctx)
        self.profiles = profiles if profiles is not None else MONTHLY_PROFILES

    def generate_daily_data(self, day: date) -> EnvironmentalData:
        """
        Generate the weather record for a day.

        Args:
            day: Calendar day

        Returns:
            Daily averages (temperature, humidity, wind) and summed rain

        Raises:
            ValueError: If the day's month has no climate profile
        """
        conditions = self.generate_daily_conditions(day)
        samples = [self.generate_hourly_sample(hour, conditions) for hour in DAYTIME_HOURS]

        rain_min, rain_max = WEATHER_EXTREMES["precipitation"]
        precipitation = clamp(sum(s.precipitation for s in samples), rain_min, rain_max)

        return EnvironmentalData(
            timestamp=day,
            temperature=round(mean(s.temperature for s in samples), 1),
            humidity=round(mean(s.humidity for s in samples), 1),
            wind_speed=round(mean(s.wind_speed for s in samples), 1),
            precipitation=round(precipitation, 1),
        )

    def generate_daily_conditions(self, day: date) -> DailyConditions:
        """Draw the day's base conditions from its monthly profile."""
        profile = self.profiles.get(day.month)
        if profile is None:
            raise ValueError(f"No climate profile for month {day.month} ({day})")

        is_rainy_day = self.chance(profile.rain_probability)

        # +/-1.5 C around the monthly midpoint
        base_temperature = (profile.temp_min + profile.temp_max) / 2 + (self.uniform() - 0.5) * 3
        base_humidity = (
            (profile.humidity_min + profile.humidity_max) / 2 + (self.uniform() - 0.5) * 10
        )
        base_wind_speed = self.uniform() * 15

        return DailyConditions(
            is_rainy_day=is_rainy_day,
            base_temperature=base_temperature,
            base_humidity=base_humidity,
            base_wind_speed=base_wind_speed,
        )

    def generate_hourly_sample(self, hour: int, conditions: DailyConditions) -> HourlySample:
        """Weather at one working hour, clamped to the observable extremes."""
        temp_delta, wind_delta = hourly_variations(hour)

        temperature = clamp(
            conditions.base_temperature + temp_delta, *WEATHER_EXTREMES["temperature"]
        )
        # Humidity moves against temperature
        humidity = clamp(
            conditions.base_humidity - temp_delta * 2, *WEATHER_EXTREMES["humidity"]
        )
        wind_speed = clamp(
            conditions.base_wind_speed + wind_delta, *WEATHER_EXTREMES["wind_speed"]
        )

        precipitation = 0.0
        if conditions.is_rainy_day:
            precipitation = self._hourly_precipitation(hour)

        return HourlySample(
            hour=hour,
            temperature=round(temperature, 1),
            humidity=round(humidity, 1),
            wind_speed=round(wind_speed, 1),
            precipitation=round(precipitation, 1),
        )

    def _hourly_precipitation(self, hour: int) -> float:
        """Rain for one hour of a rainy day, heavier early in the afternoon."""
        # At most 30% of the daily maximum in a single hour
        intensity = self.uniform() * WEATHER_EXTREMES["precipitation"][1] * 0.3
        hour_factor = hour / 12 if hour < 13 else (18 - hour) / 5
        return intensity * hour_factor


def hourly_variations(hour: int) -> tuple[float, float]:
    """
    Deterministic (temperature, wind) offsets for an hour of the day.

    Both peak at 14:00: +3 C and +5 km/h, falling off linearly.
    """
    hours_from_peak = abs(hour - TEMPERATURE_PEAK_HOUR)
    return 3 - hours_from_peak * 0.5, 5 - hours_from_peak * 0.7
