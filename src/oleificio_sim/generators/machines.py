"""
Machine state tracker: fleet health across the season.

The five machines of the line (leaf remover, crusher, malaxer, decanter,
separator) each carry state from one day to the next:
- status: active, idle, maintenance or error
- last_maintenance: day of the last maintenance stop
- operating_hours: hours since that stop
- open_alerts: ids of alerts not yet resolved

The tracker is the only owner of this state. States are frozen; each day
advance_machine() returns the replacement state.

Daily transition, per machine:
1. active machines accumulate workload * 8 hours (at most 8)
2. failure check against the machine's base rate, scaled by workload and
   environmental stress -> error
3. maintenance due (over 30 days or 200 hours) -> maintenance, counters reset
4. otherwise active if there was work, idle if not
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from types import MappingProxyType
from typing import Mapping

from ..constants import (
    AVERAGE_BATCH_KG,
    BASE_FAILURE_RATES,
    HOURS_PER_SHIFT,
    MACHINES,
    MAINTENANCE_DURATION,
    MAINTENANCE_HOURS_LIMIT,
    MAINTENANCE_INTERVAL_DAYS,
    MAX_DAILY_BATCHES,
    OIL_VOLUME_RATIO,
    PREEMPTIVE_HOURS_THRESHOLD,
    STORAGE_CAPACITY,
)
from ..models import EnvironmentalData, MaintenanceAlert, StorageCapacity, SystemStatus
from .base import BaseGenerator, GeneratorContext

HEALTHY_STATUSES = frozenset({"active", "idle"})


@dataclass(frozen=True)
class MachineState:
    """Persistent operational state of one machine."""

    status: str
    last_maintenance: date
    operating_hours: float
    open_alerts: tuple[str, ...] = ()


def workload_for(batch_count: int) -> float:
    """Fraction of daily line capacity used by a number of batches."""
    return batch_count / MAX_DAILY_BATCHES


def environmental_stress(environmental: EnvironmentalData) -> float:
    """Failure-rate multiplier from heat (over 25 C) and humidity (over 70%)."""
    stress = 1.0
    if environmental.temperature > 25:
        stress *= 1 + (environmental.temperature - 25) * 0.05
    if environmental.humidity > 70:
        stress *= 1 + (environmental.humidity - 70) * 0.02
    return stress


def advance_machine(
    state: MachineState,
    machine: str,
    day: date,
    workload: float,
    stress: float,
    failure_draw: float,
) -> MachineState:
    """
    Advance one machine by one day.

    Args:
        state: State at the end of the previous day
        machine: Machine name (selects the base failure rate)
        day: Day being simulated
        workload: Fraction of capacity in use
        stress: Environmental stress multiplier (>= 1.0)
        failure_draw: Uniform draw in [0, 1) for the failure check

    Returns:
        State at the end of the day
    """
    hours = state.operating_hours
    if state.status == "active":
        hours += min(workload * HOURS_PER_SHIFT, HOURS_PER_SHIFT)

    failure_pct = BASE_FAILURE_RATES[machine] * workload * stress
    if failure_draw * 100 < failure_pct:
        return replace(state, status="error", operating_hours=hours)

    days_since_maintenance = (day - state.last_maintenance).days
    if days_since_maintenance > MAINTENANCE_INTERVAL_DAYS or hours > MAINTENANCE_HOURS_LIMIT:
        return replace(state, status="maintenance", last_maintenance=day, operating_hours=0.0)

    return replace(state, status="active" if workload > 0 else "idle", operating_hours=hours)


def estimated_duration(status: str, severity: str) -> int:
    """Minutes needed to clear an alert for a machine in a given status."""
    if status == "error":
        if severity == "high":
            hours = MAINTENANCE_DURATION["emergency"]
        elif severity == "medium":
            hours = MAINTENANCE_DURATION["repair"] * 1.5
        else:
            hours = MAINTENANCE_DURATION["repair"]
    else:
        # Scheduled and pre-emptive maintenance
        hours = MAINTENANCE_DURATION["routine"]
    return int(hours * 60)


def storage_capacity(batch_count: int) -> StorageCapacity:
    """
    Free storage estimated from the day's deliveries alone.

    Not a running balance: each day starts from full capacity.
    """
    olives = max(0, STORAGE_CAPACITY["olives"] - batch_count * AVERAGE_BATCH_KG)
    oil = max(0, STORAGE_CAPACITY["oil"] - batch_count * AVERAGE_BATCH_KG * OIL_VOLUME_RATIO)
    return StorageCapacity(olive_storage=int(round(olives)), oil_storage=int(round(oil)))


class MachineStateTracker(BaseGenerator):
    """
    Track the machine fleet day by day and emit daily SystemStatus snapshots.

    One tracker covers one season; its states are never handed out except as
    read-only views.
    """

    def __init__(self, ctx: GeneratorContext, season_start: date | None = None) -> None:
        super().__init__(ctx)
        start = season_start or self.config.season_start
        initial_maintenance = start - timedelta(days=MAINTENANCE_INTERVAL_DAYS)
        self._states: dict[str, MachineState] = {
            machine: MachineState(
                status="idle",
                last_maintenance=initial_maintenance,
                operating_hours=0.0,
            )
            for machine in MACHINES
        }

    @property
    def states(self) -> Mapping[str, MachineState]:
        """Read-only view of the current machine states."""
        return MappingProxyType(self._states)

    def generate_daily_status(
        self, day: date, batch_count: int, environmental: EnvironmentalData
    ) -> SystemStatus:
        """
        Advance every machine by one day and snapshot the fleet.

        Args:
            day: Day being simulated
            batch_count: Number of batches processed that day
            environmental: That day's weather

        Returns:
            SystemStatus with machine statuses, new alerts and storage
        """
        self.update_machine_states(day, batch_count, environmental)
        alerts = self.generate_maintenance_alerts(day)

        return SystemStatus(
            timestamp=day,
            machine_statuses=tuple(
                (machine, self._states[machine].status) for machine in MACHINES
            ),
            maintenance_alerts=tuple(alerts),
            storage_capacity=storage_capacity(batch_count),
        )

    def update_machine_states(
        self, day: date, batch_count: int, environmental: EnvironmentalData
    ) -> None:
        workload = workload_for(batch_count)
        stress = environmental_stress(environmental)

        for machine in MACHINES:
            new_state = advance_machine(
                self._states[machine],
                machine,
                day,
                workload=workload,
                stress=stress,
                failure_draw=float(self.rng.random()),
            )
            if new_state.status in HEALTHY_STATUSES and new_state.open_alerts:
                new_state = replace(new_state, open_alerts=())
            self._states[machine] = new_state

    def generate_maintenance_alerts(self, day: date) -> list[MaintenanceAlert]:
        """Raise the alerts implied by the current machine states."""
        alerts: list[MaintenanceAlert] = []

        for machine in MACHINES:
            state = self._states[machine]
            if state.status == "error":
                alert = self._create_alert(
                    day, machine, "high",
                    f"Failure detected on {machine}. Immediate intervention required.",
                )
            elif state.status == "maintenance":
                alert = self._create_alert(
                    day, machine, "medium", f"Scheduled maintenance for {machine}."
                )
            elif state.operating_hours > PREEMPTIVE_HOURS_THRESHOLD:
                alert = self._create_alert(
                    day, machine, "low", f"{machine}: preventive maintenance recommended."
                )
            else:
                continue

            alerts.append(alert)
            self._states[machine] = replace(state, open_alerts=state.open_alerts + (alert.id,))

        return alerts

    def _create_alert(
        self, day: date, machine: str, severity: str, description: str
    ) -> MaintenanceAlert:
        suffix = self.fake.lexify("?????????", letters="abcdefghijklmnopqrstuvwxyz0123456789")
        return MaintenanceAlert(
            id=f"{day.isoformat()}-{machine}-{suffix}",
            timestamp=day,
            machine=machine,
            severity=severity,
            description=description,
            status="pending",
            estimated_duration=estimated_duration(self._states[machine].status, severity),
        )
