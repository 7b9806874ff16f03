"""Dashboard metrics computed from already-fetched entity collections.

All functions are pure and synchronous. Empty inputs, unknown statuses and
unparseable timestamps never raise: they produce zero-valued metrics or are
left out of the named buckets.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, TypeVar

import numpy as np
import pandas as pd

from src.analytics.formatting import fixed, percentage, to_decimal
from src.analytics.report import (
    ChartSlice,
    DashboardReport,
    DeliveryMetrics,
    DriverMetrics,
    EfficiencyMetrics,
    FleetMetrics,
    LoadError,
    RecentIncident,
    RecentMaintenance,
    RecentTrip,
    TopDriver,
)
from src.config.constants import (
    FLEET_STATUS_CHART,
    MAINTENANCE_SERVICE_TYPES,
    MAINTENANCE_TYPE_CHART,
    TOP_DRIVERS_LIMIT,
    TRIP_STATUSES,
    TRUCK_STATUSES,
    UNKNOWN_BUCKET,
)
from src.config.schema import AggregationPolicy
from src.fleet.driver import Driver
from src.fleet.records import IncidentReport, MaintenanceLog
from src.fleet.trip import Trip
from src.fleet.truck import Truck

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_POLICY = AggregationPolicy()


@dataclass(frozen=True)
class DashboardInputs:
    """The joined result of the dashboard fan-out.

    ``*_total`` are the totals reported by the API, which may exceed the
    collection length when the source is paginated. ``None`` means "use len".
    """

    trips: Sequence[Trip] = ()
    trucks: Sequence[Truck] = ()
    incidents: Sequence[IncidentReport] = ()
    maintenance_logs: Sequence[MaintenanceLog] = ()
    drivers: Sequence[Driver] = ()
    trips_total: Optional[int] = None
    trucks_total: Optional[int] = None
    incidents_total: Optional[int] = None
    drivers_total: Optional[int] = None


def _parse_timestamps(values: Sequence[Optional[str]]) -> pd.Series:
    """ISO-8601 strings -> UTC timestamps; missing or malformed -> NaT."""
    raw = pd.Series(list(values), dtype="object")
    return pd.to_datetime(raw, utc=True, errors="coerce", format="ISO8601")


# =============================================================================
# Delivery
# =============================================================================

def on_time_rate(trips: Sequence[Trip], policy: AggregationPolicy = DEFAULT_POLICY) -> str:
    """Share of finished trips that arrived at or before schedule, e.g. "50.0".

    A trip without an actual arrival counts against the rate.
    """
    finished = [t for t in trips if t.status in policy.on_time.statuses]
    if not finished:
        return percentage(0, 0)

    scheduled = _parse_timestamps([t.arrival_time.scheduled for t in finished])
    actual = _parse_timestamps([t.arrival_time.actual for t in finished])
    on_time = int((actual.notna() & scheduled.notna() & (actual <= scheduled)).sum())
    return percentage(on_time, len(finished))


def total_deliveries(trips: Sequence[Trip], policy: AggregationPolicy = DEFAULT_POLICY) -> int:
    return sum(1 for t in trips if t.status in policy.on_time.statuses)


def failed_deliveries(trips: Sequence[Trip], policy: AggregationPolicy = DEFAULT_POLICY) -> int:
    """Failed trips among *all* trips, not only finished ones."""
    return sum(1 for t in trips if t.status in policy.failed_statuses)


def average_trip_duration(trips: Sequence[Trip]) -> str:
    """Mean hours between actual departure and actual arrival, e.g. "6.5"."""
    timed = [t for t in trips if t.departure_time.actual and t.arrival_time.actual]
    if not timed:
        return fixed(0, 1)

    departed = _parse_timestamps([t.departure_time.actual for t in timed])
    arrived = _parse_timestamps([t.arrival_time.actual for t in timed])
    hours = ((arrived - departed).dt.total_seconds() / 3600.0).dropna()
    if hours.empty:
        return fixed(0, 1)
    return fixed(float(hours.mean()), 1)


def trip_status_histogram(trips: Sequence[Trip]) -> Dict[str, int]:
    counts = Counter(t.status for t in trips)
    return {status: counts.get(status, 0) for status in TRIP_STATUSES}


# =============================================================================
# Fuel efficiency
# =============================================================================

def _fuel_trips(trips: Sequence[Trip]) -> List[Trip]:
    return [t for t in trips if t.fuel_usage_gallons > 0 and t.distance_miles > 0]


def average_mpg(trips: Sequence[Trip]) -> str:
    """Mean of per-trip miles-per-gallon over trips with fuel and distance."""
    fueled = _fuel_trips(trips)
    if not fueled:
        return fixed(0, 1)
    mpg = np.array([t.distance_miles / t.fuel_usage_gallons for t in fueled])
    return fixed(float(mpg.mean()), 1)


def total_fuel_usage(trips: Sequence[Trip]) -> str:
    return fixed(math.fsum(t.fuel_usage_gallons for t in _fuel_trips(trips)), 1)


def total_mileage(trips: Sequence[Trip]) -> str:
    return fixed(math.fsum(t.distance_miles for t in _fuel_trips(trips)), 0)


# =============================================================================
# Maintenance
# =============================================================================

def maintenance_cost_total(logs: Sequence[MaintenanceLog]) -> str:
    """Sum of costs over every log, including unknown service types, e.g. "350.51"."""
    total = sum((to_decimal(log.cost) for log in logs), Decimal(0))
    return fixed(total, 2)


def maintenance_by_type(logs: Sequence[MaintenanceLog]) -> Dict[str, int]:
    """Log counts per canonical service type; unknown types are left out."""
    counts = Counter(log.service_type for log in logs)
    return {service: counts.get(service, 0) for service in MAINTENANCE_SERVICE_TYPES}


# =============================================================================
# Fleet
# =============================================================================

def fleet_status_histogram(
    trucks: Sequence[Truck], include_unknown: bool = False,
) -> Dict[str, int]:
    """Truck counts per status. Every named bucket is present, zero if empty.

    With ``include_unknown`` an extra ``UNKNOWN`` bucket holds trucks whose
    status is missing or outside the enum, so the buckets sum to ``len(trucks)``.
    """
    counts = Counter(t.status for t in trucks)
    histogram = {status: counts.get(status, 0) for status in TRUCK_STATUSES}
    if include_unknown:
        histogram[UNKNOWN_BUCKET] = len(trucks) - sum(histogram.values())
    return histogram


def active_driver_count(drivers: Sequence[Driver]) -> int:
    return sum(1 for d in drivers if d.employment_status == "ACTIVE")


def top_drivers(drivers: Sequence[Driver], limit: int = TOP_DRIVERS_LIMIT) -> List[TopDriver]:
    """First ``limit`` active drivers in input order."""
    active = [d for d in drivers if d.employment_status == "ACTIVE"][:limit]
    return [TopDriver(name=d.full_name, initials=d.initials, state=d.license_state) for d in active]


# =============================================================================
# Recent activity
# =============================================================================

def most_recent(items: Sequence[T], field_name: str, limit: int) -> List[T]:
    """The ``limit`` items with the latest ``field_name`` timestamp, newest first.

    The sort is stable, so ties keep their input order. Items without a
    parseable timestamp sort after all others.
    """
    if not items or limit <= 0:
        return []
    stamps = _parse_timestamps([getattr(item, field_name) for item in items])
    order = stamps.sort_values(ascending=False, kind="mergesort", na_position="last").index
    return [items[i] for i in order[:limit]]


def recent_trips(trips: Sequence[Trip], limit: int) -> List[RecentTrip]:
    return [
        RecentTrip(
            id=t.id,
            trip_number=t.trip_number,
            distance_miles=t.distance_miles,
            status=t.status,
            fuel_usage_gallons=t.fuel_usage_gallons,
            scheduled_arrival=t.arrival_time.scheduled,
        )
        for t in most_recent(trips, "created_at", limit)
    ]


def recent_incidents(incidents: Sequence[IncidentReport], limit: int) -> List[RecentIncident]:
    return [
        RecentIncident(
            id=i.id,
            type=i.type,
            description=i.description,
            date=i.date,
            damage_estimate=i.damage_estimate,
        )
        for i in most_recent(incidents, "created_at", limit)
    ]


def recent_maintenance(logs: Sequence[MaintenanceLog], limit: int) -> List[RecentMaintenance]:
    return [
        RecentMaintenance(
            id=log.id,
            service_type=log.service_type,
            cost=log.cost,
            date=log.date,
            notes=log.notes,
        )
        for log in most_recent(logs, "date", limit)
    ]


# =============================================================================
# Report
# =============================================================================

def _chart(histogram: Dict[str, int], layout) -> tuple:
    return tuple(
        ChartSlice(key=key, label=label, value=histogram.get(key, 0), color=color)
        for key, label, color in layout
    )


def _reported(total: Optional[int], items: Sequence) -> int:
    return len(items) if total is None else max(total, len(items))


def build_report(
    inputs: DashboardInputs, policy: AggregationPolicy = DEFAULT_POLICY,
) -> DashboardReport:
    """Reduce the fetched collections into the full dashboard report."""
    statuses = fleet_status_histogram(inputs.trucks, include_unknown=True)
    trip_statuses = trip_status_histogram(inputs.trips)
    service_types = maintenance_by_type(inputs.maintenance_logs)

    report = DashboardReport(
        fleet=FleetMetrics(
            total=_reported(inputs.trucks_total, inputs.trucks),
            available=statuses["AVAILABLE"],
            in_transit=statuses["IN_TRANSIT"],
            under_maintenance=statuses["UNDER_MAINTENANCE"],
            retired=statuses["RETIRED"],
            unknown=statuses[UNKNOWN_BUCKET],
        ),
        delivery=DeliveryMetrics(
            on_time_rate=on_time_rate(inputs.trips, policy),
            total_deliveries=total_deliveries(inputs.trips, policy),
            failed_deliveries=failed_deliveries(inputs.trips, policy),
            active_trips=trip_statuses["IN_TRANSIT"],
            total_trips=_reported(inputs.trips_total, inputs.trips),
            avg_duration_hours=average_trip_duration(inputs.trips),
        ),
        efficiency=EfficiencyMetrics(
            avg_mpg=average_mpg(inputs.trips),
            total_fuel_usage=total_fuel_usage(inputs.trips),
            total_mileage=total_mileage(inputs.trips),
            maintenance_cost=maintenance_cost_total(inputs.maintenance_logs),
        ),
        drivers=DriverMetrics(
            total=_reported(inputs.drivers_total, inputs.drivers),
            active=active_driver_count(inputs.drivers),
        ),
        incident_count=_reported(inputs.incidents_total, inputs.incidents),
        fleet_status=_chart(statuses, FLEET_STATUS_CHART),
        maintenance_types=_chart(service_types, MAINTENANCE_TYPE_CHART),
        trip_statuses=trip_statuses,
        recent_trips=tuple(recent_trips(inputs.trips, policy.recent_limit)),
        recent_incidents=tuple(recent_incidents(inputs.incidents, policy.recent_limit)),
        recent_maintenance=tuple(recent_maintenance(inputs.maintenance_logs, policy.recent_limit)),
        top_drivers=tuple(top_drivers(inputs.drivers)),
    )
    logger.debug(
        f"Built report: {len(inputs.trips)} trips, {len(inputs.trucks)} trucks, "
        f"{len(inputs.incidents)} incidents, {len(inputs.maintenance_logs)} logs"
    )
    return report


def empty_report(
    error: Optional[LoadError] = None, policy: AggregationPolicy = DEFAULT_POLICY,
) -> DashboardReport:
    """Zero-valued report with every bucket present, flagged with ``error``."""
    return replace(build_report(DashboardInputs(), policy), error=error)
