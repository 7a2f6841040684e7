"""
Read-side helpers over a finished Dataset.

Consumers typically slice a stream by an inclusive date range and average a
field. These helpers make the edge cases explicit:
- filter_by_date_range() never raises; an inverted or out-of-season range
  yields an empty list
- mean() raises EmptyInputError instead of returning NaN
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any, TypeVar

from .models import Dataset

T = TypeVar("T")


class EmptyInputError(ValueError):
    """Raised when an aggregate is requested over no values."""

    pass


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]: floor first, then ceiling."""
    return min(max(value, low), high)


def clamp_probability(p: float) -> float:
    """Clamp a probability into [0, 1] before it reaches a random draw."""
    return clamp(p, 0.0, 1.0)


def mean(values: Iterable[float]) -> float:
    """
    Arithmetic mean.

    Raises:
        EmptyInputError: If values is empty
    """
    items = list(values)
    if not items:
        raise EmptyInputError("Cannot average an empty sequence")
    return sum(items) / len(items)


def record_day(record: Any) -> date:
    """Calendar day of a record (timestamp, or arrival_timestamp for batches)."""
    value = getattr(record, "timestamp", None)
    if value is None:
        value = record.arrival_timestamp
    if isinstance(value, datetime):
        return value.date()
    return value


def filter_by_date_range(records: Sequence[T], start: date, end: date) -> list[T]:
    """
    Records whose calendar day lies in [start, end].

    Args:
        records: Any dataset stream
        start: First day included
        end: Last day included

    Returns:
        Matching records in their original order (empty if end < start)
    """
    if isinstance(start, datetime):
        start = start.date()
    if isinstance(end, datetime):
        end = end.date()
    if end < start:
        return []
    return [r for r in records if start <= record_day(r) <= end]


def summarize(dataset: Dataset) -> dict[str, Any]:
    """
    Season KPIs for reporting.

    Averages over empty streams are reported as None rather than raising,
    since a summary of a partial dataset is still useful.
    """

    def _safe_mean(values: Iterable[float]) -> float | None:
        try:
            return round(mean(values), 2)
        except EmptyInputError:
            return None

    total_olives = sum(p.olive_processed for p in dataset.production)
    total_oil = sum(p.oil_produced for p in dataset.production)
    severities: Counter = Counter(
        alert.severity
        for status in dataset.machine_status
        for alert in status.maintenance_alerts
    )

    return {
        "days": len(dataset.environmental),
        "batches": len(dataset.batches),
        "mean_temperature": _safe_mean(e.temperature for e in dataset.environmental),
        "mean_humidity": _safe_mean(e.humidity for e in dataset.environmental),
        "total_precipitation": round(sum(e.precipitation for e in dataset.environmental), 1),
        "rainy_days": sum(1 for e in dataset.environmental if e.precipitation > 0),
        "total_olives_kg": total_olives,
        "total_oil_l": round(total_oil, 1),
        "overall_yield_pct": round(total_oil / total_olives * 100, 2) if total_olives else None,
        "mean_acidity": _safe_mean(q.acidity for q in dataset.quality),
        "mean_organoleptics_score": _safe_mean(q.organoleptics_score for q in dataset.quality),
        "dop_batches": sum(1 for q in dataset.quality if q.quality_certification.is_dop),
        "organic_certified_batches": sum(
            1 for q in dataset.quality if q.quality_certification.is_organic
        ),
        "alerts": {severity: severities.get(severity, 0) for severity in ("low", "medium", "high")},
    }
