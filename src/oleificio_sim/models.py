"""
Entity records for the olive mill season dataset.

Every record is a frozen dataclass: once a generator emits it, it is never
modified. Records of one batch are linked through a typed BatchId.

Streams (in Dataset):
- environmental: one EnvironmentalData per day
- batches: OlivesBatch arrivals (1-2 per day)
- processing: ProcessingParameters, one per batch
- production: ProductionData, one per batch
- quality: OilAnalysis (with embedded QualityCertification), one per batch
- machine_status: one SystemStatus per day
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from types import MappingProxyType
from typing import Any, Literal, Mapping, NewType

BatchId = NewType("BatchId", str)

Variety = Literal["Ogliarola", "Coratina"]
Quality = Literal["Premium", "Standard"]
MachineName = Literal["defogliatore", "frangitore", "gramola", "decanter", "separatore"]
MachineStatus = Literal["active", "idle", "maintenance", "error"]
AlertSeverity = Literal["low", "medium", "high"]
AlertStatus = Literal["pending", "in-progress", "resolved"]

VARIETIES: tuple[str, ...] = ("Ogliarola", "Coratina")
QUALITIES: tuple[str, ...] = ("Premium", "Standard")
MACHINE_STATUSES: tuple[str, ...] = ("active", "idle", "maintenance", "error")
ALERT_SEVERITIES: tuple[str, ...] = ("low", "medium", "high")
ALERT_STATUSES: tuple[str, ...] = ("pending", "in-progress", "resolved")


@dataclass(frozen=True)
class EnvironmentalData:
    """Daily weather aggregated over the working hours."""

    timestamp: date
    temperature: float  # C
    humidity: float  # %
    wind_speed: float  # km/h
    precipitation: float  # mm, summed over the day


@dataclass(frozen=True)
class OlivesBatch:
    """One delivery of olives, processed as a unit."""

    id: BatchId
    arrival_timestamp: datetime
    weight: int  # kg
    variety: Variety
    quality: Quality
    origin: str
    harvest_date: datetime
    is_organic: bool


@dataclass(frozen=True)
class ProcessingParameters:
    """Process settings applied to one batch."""

    batch_id: BatchId
    timestamp: datetime
    grinding_temperature: float  # C
    mixing_duration: float  # minutes
    extraction_temperature: float  # C
    centrifugation_speed: int  # rpm


@dataclass(frozen=True)
class ProductionData:
    """Yield outcome of processing one batch."""

    batch_id: BatchId
    timestamp: datetime
    olive_processed: int  # kg
    oil_produced: float  # L
    yield_pct: float  # %
    processing_time: int  # minutes
    energy_consumption: float  # kWh
    water_consumption: float  # L


@dataclass(frozen=True)
class QualityCertification:
    """Certification outcome for one batch."""

    batch_id: BatchId
    is_extra_virgin: bool
    is_dop: bool
    is_organic: bool
    certification_body: str
    certification_date: date
    expiry_date: date
    certification_number: str


@dataclass(frozen=True)
class OilAnalysis:
    """Lab and panel-test results for one batch."""

    batch_id: BatchId
    timestamp: datetime
    acidity: float  # % oleic acid
    peroxides: int  # meq O2/kg
    polyphenols: int  # mg/kg
    alkyl_esters: int  # mg/kg
    organoleptics_score: float  # panel test, 0-9
    quality_certification: QualityCertification


@dataclass(frozen=True)
class MaintenanceAlert:
    """One fleet event raised by the machine tracker."""

    id: str
    timestamp: date
    machine: MachineName
    severity: AlertSeverity
    description: str
    status: AlertStatus
    estimated_duration: int  # minutes


@dataclass(frozen=True)
class StorageCapacity:
    """Free storage left at the end of a day."""

    olive_storage: int  # kg
    oil_storage: int  # L


@dataclass(frozen=True)
class SystemStatus:
    """
    Daily snapshot of the machine fleet.

    machine_statuses holds (machine, status) pairs in line order; use
    statuses for keyed access.
    """

    timestamp: date
    machine_statuses: tuple[tuple[str, MachineStatus], ...]
    maintenance_alerts: tuple[MaintenanceAlert, ...]
    storage_capacity: StorageCapacity

    @property
    def statuses(self) -> Mapping[str, MachineStatus]:
        """Read-only {machine: status} view."""
        return MappingProxyType(dict(self.machine_statuses))


STREAMS: tuple[str, ...] = (
    "environmental",
    "batches",
    "processing",
    "production",
    "quality",
    "machine_status",
)


@dataclass
class Dataset:
    """
    Season-level aggregate of the six entity streams.

    Each stream is append-only and chronologically ordered. The orchestrator
    owns the dataset while generating and hands it over whole.
    """

    environmental: list[EnvironmentalData] = field(default_factory=list)
    batches: list[OlivesBatch] = field(default_factory=list)
    processing: list[ProcessingParameters] = field(default_factory=list)
    production: list[ProductionData] = field(default_factory=list)
    quality: list[OilAnalysis] = field(default_factory=list)
    machine_status: list[SystemStatus] = field(default_factory=list)

    def row_counts(self) -> dict[str, int]:
        """Number of records per stream."""
        return {name: len(getattr(self, name)) for name in STREAMS}

    @property
    def total_rows(self) -> int:
        return sum(self.row_counts().values())

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        """Plain dict/list form of every stream (dates left as objects)."""
        data = {
            name: [asdict(record) for record in getattr(self, name)]
            for name in STREAMS
        }
        for status in data["machine_status"]:
            status["machine_statuses"] = dict(status["machine_statuses"])
        return data
