"""Typed dashboard report returned by the aggregation engine.

Every field has a zero-valued default so a report is always complete, even
when the inputs could not be loaded.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class ChartSlice:
    key: str
    label: str
    value: int
    color: str


@dataclass(frozen=True)
class FleetMetrics:
    total: int = 0
    available: int = 0
    in_transit: int = 0
    under_maintenance: int = 0
    retired: int = 0
    unknown: int = 0


@dataclass(frozen=True)
class DeliveryMetrics:
    on_time_rate: str = "0.0"
    total_deliveries: int = 0
    failed_deliveries: int = 0
    active_trips: int = 0
    total_trips: int = 0
    avg_duration_hours: str = "0.0"


@dataclass(frozen=True)
class EfficiencyMetrics:
    avg_mpg: str = "0.0"
    total_fuel_usage: str = "0.0"
    total_mileage: str = "0"
    maintenance_cost: str = "0.00"


@dataclass(frozen=True)
class DriverMetrics:
    total: int = 0
    active: int = 0


@dataclass(frozen=True)
class RecentTrip:
    id: str
    trip_number: str
    distance_miles: float
    status: Optional[str]
    fuel_usage_gallons: float
    scheduled_arrival: Optional[str]


@dataclass(frozen=True)
class RecentIncident:
    id: str
    type: Optional[str]
    description: str
    date: Optional[str]
    damage_estimate: float


@dataclass(frozen=True)
class RecentMaintenance:
    id: str
    service_type: Optional[str]
    cost: float
    date: Optional[str]
    notes: str


@dataclass(frozen=True)
class TopDriver:
    name: str
    initials: str
    state: str


@dataclass(frozen=True)
class LoadError:
    message: str
    code: str


@dataclass(frozen=True)
class DashboardReport:
    fleet: FleetMetrics = field(default_factory=FleetMetrics)
    delivery: DeliveryMetrics = field(default_factory=DeliveryMetrics)
    efficiency: EfficiencyMetrics = field(default_factory=EfficiencyMetrics)
    drivers: DriverMetrics = field(default_factory=DriverMetrics)
    incident_count: int = 0
    fleet_status: Tuple[ChartSlice, ...] = ()
    maintenance_types: Tuple[ChartSlice, ...] = ()
    trip_statuses: Dict[str, int] = field(default_factory=dict)
    recent_trips: Tuple[RecentTrip, ...] = ()
    recent_incidents: Tuple[RecentIncident, ...] = ()
    recent_maintenance: Tuple[RecentMaintenance, ...] = ()
    top_drivers: Tuple[TopDriver, ...] = ()
    error: Optional[LoadError] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
