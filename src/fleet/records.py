"""Incident reports and maintenance logs.

Both reference other entities. The API embeds the referenced objects in some
revisions and sends bare ids in others; either form is accepted and the id is
always populated.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from src.fleet.common import (
    as_float,
    as_optional_text,
    as_text,
    embedded,
    normalize_service_type,
    reference_id,
)
from src.fleet.driver import Driver
from src.fleet.trip import Trip
from src.fleet.truck import Truck


def _embedded_entity(data: Mapping[str, Any], name: str, parser):
    nested = embedded(data, name)
    return parser(nested) if nested is not None else None


@dataclass(frozen=True)
class IncidentReport:
    id: str
    type: Optional[str] = None    # TRAFFIC_ACCIDENT, MECHANICAL_FAILURE, WEATHER_DELAY, ...
    description: str = ""
    date: Optional[str] = None
    location: str = ""
    damage_estimate: float = 0.0
    trip_id: Optional[str] = None
    truck_id: Optional[str] = None
    driver_id: Optional[str] = None
    trip: Optional[Trip] = None
    truck: Optional[Truck] = None
    driver: Optional[Driver] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "IncidentReport":
        return cls(
            id=as_text(data.get("id")),
            type=as_optional_text(data.get("type")),
            description=as_text(data.get("description")),
            date=as_optional_text(data.get("date")),
            location=as_text(data.get("location")),
            damage_estimate=as_float(data.get("damage_estimate")),
            trip_id=reference_id(data, "trip"),
            truck_id=reference_id(data, "truck"),
            driver_id=reference_id(data, "driver"),
            trip=_embedded_entity(data, "trip", Trip.from_dict),
            truck=_embedded_entity(data, "truck", Truck.from_dict),
            driver=_embedded_entity(data, "driver", Driver.from_dict),
            created_at=as_optional_text(data.get("created_at")),
            updated_at=as_optional_text(data.get("updated_at")),
        )


@dataclass(frozen=True)
class MaintenanceLog:
    id: str
    service_type: Optional[str] = None    # ROUTINE_MAINTENANCE, REPAIR, EMERGENCY
    cost: float = 0.0
    date: Optional[str] = None
    notes: str = ""
    mechanic: str = ""
    location: str = ""
    truck_id: Optional[str] = None
    truck: Optional[Truck] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MaintenanceLog":
        return cls(
            id=as_text(data.get("id")),
            service_type=normalize_service_type(data.get("service_type")),
            cost=as_float(data.get("cost")),
            date=as_optional_text(data.get("date")),
            notes=as_text(data.get("notes")),
            mechanic=as_text(data.get("mechanic")),
            location=as_text(data.get("location")),
            truck_id=reference_id(data, "truck"),
            truck=_embedded_entity(data, "truck", Truck.from_dict),
            created_at=as_optional_text(data.get("created_at")),
            updated_at=as_optional_text(data.get("updated_at")),
        )
