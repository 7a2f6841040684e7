"""
Validation checks for a generated season.

Contains the invariant checks every dataset must satisfy:
- Row counts against the season calendar
- Weather bounds
- Yield bounds and oil/yield consistency
- Chemistry bounds and certification implications
- Referential integrity between batches and their records
- Machine snapshots and storage
- Season window

Each check returns (passed, message), like the report printed by the CLI.
"""

from collections import Counter
from typing import Callable

from .config import SimulationConfig
from .constants import DOP_ORIGIN, MACHINES, QUALITY_LIMITS, WEATHER_EXTREMES, YIELD_RATES
from .generators.processing import yield_cap
from .models import MACHINE_STATUSES, Dataset
from .queries import record_day

# Rounding slack for oil = weight * yield / 100 (oil is rounded to 0.1 L)
OIL_TOLERANCE_L = 0.05 + 1e-9


class DatasetValidationError(Exception):
    """Raised when a dataset fails one or more validation checks."""

    def __init__(self, failures: dict[str, str]) -> None:
        self.failures = failures
        message = f"Dataset validation failed with {len(failures)} error(s):\n"
        message += "\n".join(f"  - {name}: {msg}" for name, msg in failures.items())
        super().__init__(message)


class DatasetValidator:
    """Validator for a generated season Dataset."""

    def __init__(self, dataset: Dataset, config: SimulationConfig | None = None) -> None:
        """
        Initialize validator.

        Args:
            dataset: Dataset to check
            config: Configuration it was generated with (for the season window)
        """
        self.dataset = dataset
        self.config = config or SimulationConfig()

    def checks(self) -> dict[str, Callable[[], tuple[bool, str]]]:
        return {
            "row_counts": self.validate_row_counts,
            "weather_bounds": self.validate_weather_bounds,
            "yield": self.validate_yield,
            "chemistry": self.validate_chemistry,
            "certifications": self.validate_certifications,
            "referential_integrity": self.validate_referential_integrity,
            "machine_status": self.validate_machine_status,
            "storage": self.validate_storage,
            "season_window": self.validate_season_window,
        }

    def validate_all(self) -> dict[str, tuple[bool, str]]:
        """Run every check; returns {name: (passed, message)}."""
        return {name: check() for name, check in self.checks().items()}

    def validate_row_counts(self) -> tuple[bool, str]:
        """One weather record and one fleet snapshot per day; batch count in bounds."""
        days = self.config.season_length
        counts = self.dataset.row_counts()
        if counts["environmental"] != days or counts["machine_status"] != days:
            return False, (
                f"{counts['environmental']} weather / {counts['machine_status']} status "
                f"records for {days} days"
            )

        low = days * self.config.min_daily_batches
        high = days * self.config.max_daily_batches
        if not low <= counts["batches"] <= high:
            return False, f"{counts['batches']} batches outside [{low}, {high}]"

        per_batch = ("processing", "production", "quality")
        if any(counts[name] != counts["batches"] for name in per_batch):
            return False, f"Per-batch streams out of step with batches: {counts}"
        return True, f"{days} days, {counts['batches']} batches"

    def validate_weather_bounds(self) -> tuple[bool, str]:
        bad = []
        for env in self.dataset.environmental:
            for name in ("temperature", "humidity", "wind_speed"):
                low, high = WEATHER_EXTREMES[name]
                if not low <= getattr(env, name) <= high:
                    bad.append(f"{env.timestamp} {name}={getattr(env, name)}")
            if not 0 <= env.precipitation <= WEATHER_EXTREMES["precipitation"][1]:
                bad.append(f"{env.timestamp} precipitation={env.precipitation}")
        if bad:
            return False, f"{len(bad)} out-of-range values, e.g. {bad[:3]}"
        return True, f"{len(self.dataset.environmental)} days within extremes"

    def validate_yield(self) -> tuple[bool, str]:
        """0 < yield <= variety cap, and oil matches weight * yield."""
        variety_by_batch = {b.id: b.variety for b in self.dataset.batches}
        bad = []
        for prod in self.dataset.production:
            variety = variety_by_batch.get(prod.batch_id)
            cap = yield_cap(variety) if variety in YIELD_RATES else 0
            if not 0 < prod.yield_pct <= cap:
                bad.append(f"{prod.batch_id} yield={prod.yield_pct}")
            expected = prod.olive_processed * prod.yield_pct / 100
            if abs(prod.oil_produced - expected) > OIL_TOLERANCE_L:
                bad.append(f"{prod.batch_id} oil={prod.oil_produced} expected={expected:.2f}")
        if bad:
            return False, f"{len(bad)} production issues, e.g. {bad[:3]}"
        return True, f"{len(self.dataset.production)} production records consistent"

    def validate_chemistry(self) -> tuple[bool, str]:
        limits = QUALITY_LIMITS
        bad = []
        for q in self.dataset.quality:
            if not 0 <= q.acidity <= limits["acidity"]["extra_virgin"]:
                bad.append(f"{q.batch_id} acidity={q.acidity}")
            if not 0 <= q.peroxides <= limits["peroxides"]["extra_virgin"]:
                bad.append(f"{q.batch_id} peroxides={q.peroxides}")
            if not limits["polyphenols"]["min"] <= q.polyphenols <= limits["polyphenols"]["max"]:
                bad.append(f"{q.batch_id} polyphenols={q.polyphenols}")
            if not 0 <= q.alkyl_esters <= limits["alkyl_esters"]["extra_virgin"]:
                bad.append(f"{q.batch_id} alkyl_esters={q.alkyl_esters}")
            if not 0 <= q.organoleptics_score <= limits["panel_test"]["max"]:
                bad.append(f"{q.batch_id} score={q.organoleptics_score}")
        if bad:
            return False, f"{len(bad)} analytes out of range, e.g. {bad[:3]}"
        return True, f"{len(self.dataset.quality)} analyses within limits"

    def validate_certifications(self) -> tuple[bool, str]:
        """DOP implies extra-virgin thresholds and origin; organic implies low acidity."""
        batches = {b.id: b for b in self.dataset.batches}
        limits = QUALITY_LIMITS
        bad = []
        for q in self.dataset.quality:
            cert = q.quality_certification
            batch = batches.get(q.batch_id)
            if cert.is_dop:
                if not (
                    q.acidity <= limits["acidity"]["extra_virgin"]
                    and q.peroxides <= limits["peroxides"]["extra_virgin"]
                    and q.alkyl_esters <= limits["alkyl_esters"]["extra_virgin"]
                    and q.organoleptics_score >= limits["panel_test"]["min_extra_virgin"]
                    and batch is not None
                    and batch.origin == DOP_ORIGIN
                ):
                    bad.append(f"{q.batch_id} DOP")
            if cert.is_organic and not (
                batch is not None
                and batch.is_organic
                and q.acidity <= limits["acidity"]["organic"]
            ):
                bad.append(f"{q.batch_id} organic")
        if bad:
            return False, f"{len(bad)} invalid certifications, e.g. {bad[:3]}"
        dop = sum(1 for q in self.dataset.quality if q.quality_certification.is_dop)
        return True, f"{dop} DOP certifications, all consistent"

    def validate_referential_integrity(self) -> tuple[bool, str]:
        """Every per-batch record points at exactly one batch of the same day."""
        id_counts = Counter(b.id for b in self.dataset.batches)
        duplicates = [bid for bid, n in id_counts.items() if n > 1]
        if duplicates:
            return False, f"Duplicate batch ids: {duplicates[:3]}"

        batch_day = {b.id: b.arrival_timestamp.date() for b in self.dataset.batches}
        orphans = []
        for name in ("processing", "production", "quality"):
            for record in getattr(self.dataset, name):
                if batch_day.get(record.batch_id) != record_day(record):
                    orphans.append(f"{name}:{record.batch_id}")
        if orphans:
            return False, f"{len(orphans)} orphan records, e.g. {orphans[:3]}"
        return True, f"{len(batch_day)} batches fully linked"

    def validate_machine_status(self) -> tuple[bool, str]:
        expected = set(MACHINES)
        bad = []
        for status in self.dataset.machine_status:
            if set(status.statuses) != expected:
                bad.append(f"{status.timestamp} machines={sorted(status.statuses)}")
            invalid = [s for s in status.statuses.values() if s not in MACHINE_STATUSES]
            if invalid:
                bad.append(f"{status.timestamp} statuses={invalid}")
        if bad:
            return False, f"{len(bad)} bad snapshots, e.g. {bad[:3]}"
        return True, f"{len(self.dataset.machine_status)} snapshots with all {len(expected)} machines"

    def validate_storage(self) -> tuple[bool, str]:
        negative = [
            str(s.timestamp)
            for s in self.dataset.machine_status
            if s.storage_capacity.olive_storage < 0 or s.storage_capacity.oil_storage < 0
        ]
        if negative:
            return False, f"Negative storage on {negative[:3]}"
        return True, "Storage never negative"

    def validate_season_window(self) -> tuple[bool, str]:
        start, end = self.config.season_start, self.config.season_end
        outside = []
        for name in ("environmental", "batches", "processing", "production", "quality", "machine_status"):
            for record in getattr(self.dataset, name):
                if not start <= record_day(record) <= end:
                    outside.append(f"{name}:{record_day(record)}")
        for q in self.dataset.quality:
            if not start <= q.quality_certification.certification_date <= end:
                outside.append(f"certification:{q.quality_certification.certification_date}")
        if outside:
            return False, f"{len(outside)} records outside {start}..{end}, e.g. {outside[:3]}"
        return True, f"All records within {start}..{end}"


def validate_dataset(
    dataset: Dataset, config: SimulationConfig | None = None, strict: bool = False
) -> dict[str, tuple[bool, str]]:
    """
    Run every validation check on a dataset.

    Args:
        dataset: Dataset to check
        config: Configuration it was generated with
        strict: Raise instead of returning when any check fails

    Returns:
        {check name: (passed, message)}

    Raises:
        DatasetValidationError: If strict and any check failed
    """
    results = DatasetValidator(dataset, config).validate_all()
    if strict:
        failures = {name: msg for name, (passed, msg) in results.items() if not passed}
        if failures:
            raise DatasetValidationError(failures)
    return results
