"""
Batch generator: daily olive deliveries.

One or two batches arrive per day. Variety follows the fixed 70/30
Ogliarola/Coratina split of the Cima di Bitonto cultivar mix; Premium
quality becomes less likely as the season advances.
"""

from datetime import date, datetime, time, timedelta

from ..constants import (
    ARRIVAL_HOURS,
    PREMIUM_PROBABILITY_MONTHLY_DECAY,
    PREMIUM_PROBABILITY_START,
    VARIETY_SHARE,
)
from ..models import BatchId, OlivesBatch
from ..queries import clamp_probability
from .base import BaseGenerator


class BatchGenerator(BaseGenerator):
    """Generate the olive batches arriving on a day."""

    def generate_daily_batches(self, day: date) -> list[OlivesBatch]:
        """
        Generate the day's deliveries.

        Args:
            day: Calendar day

        Returns:
            Between min_daily_batches and max_daily_batches batches,
            ordered by sequence number
        """
        count = self.randint(self.config.min_daily_batches, self.config.max_daily_batches)
        return [self.generate_batch(day, seq) for seq in range(1, count + 1)]

    def generate_batch(self, day: date, sequence: int) -> OlivesBatch:
        """Generate a single batch; sequence is 1-based within the day."""
        weight = self.randint(self.config.min_batch_weight, self.config.max_batch_weight)
        variety = "Ogliarola" if self.chance(VARIETY_SHARE["Ogliarola"]) else "Coratina"
        quality = "Premium" if self.chance(self.premium_probability(day)) else "Standard"

        arrival = self._random_arrival(day)

        return OlivesBatch(
            id=BatchId(f"{day.isoformat()}-{sequence}"),
            arrival_timestamp=arrival,
            weight=weight,
            variety=variety,
            quality=quality,
            origin=self.config.origin,
            harvest_date=arrival - timedelta(days=1),
            is_organic=self.chance(self.config.organic_probability),
        )

    def premium_probability(self, day: date) -> float:
        """
        Probability of a Premium batch on a day.

        Starts at 0.8 and drops 0.2 per calendar month since the season
        start, clamped to [0, 1].
        """
        start = self.config.season_start
        months_elapsed = (day.year - start.year) * 12 + (day.month - start.month)
        return clamp_probability(
            PREMIUM_PROBABILITY_START - months_elapsed * PREMIUM_PROBABILITY_MONTHLY_DECAY
        )

    def _random_arrival(self, day: date) -> datetime:
        hour = self.randint(*ARRIVAL_HOURS)
        minute = self.randint(0, 59)
        return datetime.combine(day, time(hour, minute))
