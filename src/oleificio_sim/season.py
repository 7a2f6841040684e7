"""
Season orchestration: one full season, day by day.

OliveMillSimulator owns one instance of each sub-generator and walks the
season calendar. For every day:
1. Environmental record
2. The day's batches
3. Per batch: processing parameters + production, then oil analysis
4. Machine fleet status from the batch count and weather

DatasetProvider wraps a simulator with a lazy cache for callers that read
the dataset repeatedly.
"""

import time

from .config import SimulationConfig
from .generators import (
    BatchGenerator,
    EnvironmentalGenerator,
    GeneratorContext,
    MachineStateTracker,
    ProcessingGenerator,
    QualityGenerator,
)
from .models import Dataset


class OliveMillSimulator:
    """
    Generate complete season datasets.

    Usage:
        simulator = OliveMillSimulator(SimulationConfig(seed=42))
        dataset = simulator.generate_season_data()
        print(dataset.row_counts())
    """

    def __init__(self, config: SimulationConfig | None = None, verbose: bool = False) -> None:
        """
        Initialize the simulator and its sub-generators.

        Args:
            config: Season configuration (validated here)
            verbose: Print progress while generating
        """
        self.config = config or SimulationConfig()
        self.config.validate()
        self.verbose = verbose

        self.ctx = GeneratorContext.create(self.config)
        self.environmental = EnvironmentalGenerator(self.ctx)
        self.batches = BatchGenerator(self.ctx)
        self.processing = ProcessingGenerator(self.ctx)
        self.quality = QualityGenerator(self.ctx)
        self.machines: MachineStateTracker | None = None

    def generate_season_data(self) -> Dataset:
        """
        Generate the whole season.

        Each call starts a fresh machine fleet and continues the random
        stream, so repeated calls give new values with the same shape.

        Returns:
            Dataset with all six streams in chronological order
        """
        self._log(
            f"Generating season {self.config.season_start} -> {self.config.season_end} "
            f"({self.config.season_length} days, seed={self.config.seed})"
        )
        start_time = time.time()

        dataset = Dataset()
        self.machines = MachineStateTracker(self.ctx)
        current_month = None

        for day in self.config.season_days():
            if self.verbose and (day.year, day.month) != current_month:
                current_month = (day.year, day.month)
                print(f"  {day:%B %Y}...")

            environmental = self.environmental.generate_daily_data(day)
            dataset.environmental.append(environmental)

            daily_batches = self.batches.generate_daily_batches(day)
            dataset.batches.extend(daily_batches)

            for batch in daily_batches:
                parameters, production = self.processing.generate_processing_data(
                    batch, environmental
                )
                dataset.processing.append(parameters)
                dataset.production.append(production)
                dataset.quality.append(self.quality.generate_quality_data(batch, parameters))

            dataset.machine_status.append(
                self.machines.generate_daily_status(day, len(daily_batches), environmental)
            )

        elapsed = time.time() - start_time
        total_rows = dataset.total_rows
        rows_per_sec = total_rows / elapsed if elapsed > 0 else 0
        self._log(f"  Season completed: {total_rows:,} rows in {elapsed:.2f}s ({rows_per_sec:,.0f} rows/sec)")
        return dataset

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message)


class DatasetProvider:
    """
    Lazily generated, cached season dataset.

    get_dataset() generates on first access; regenerate() replaces the
    cached dataset with a fresh one.
    """

    def __init__(self, simulator: OliveMillSimulator | None = None) -> None:
        self.simulator = simulator or OliveMillSimulator()
        self._dataset: Dataset | None = None

    def get_dataset(self) -> Dataset:
        if self._dataset is None:
            self._dataset = self.simulator.generate_season_data()
        return self._dataset

    def regenerate(self) -> Dataset:
        """Discard the cached dataset and generate a new one."""
        self._dataset = None
        return self.get_dataset()

    @property
    def is_cached(self) -> bool:
        return self._dataset is not None
