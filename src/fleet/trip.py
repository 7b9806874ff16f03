"""Trip snapshot: schedule vs. actual times, cargo, fuel and distance."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from src.config.constants import TRIP
from src.fleet.common import (
    as_float,
    as_optional_text,
    as_text,
    embedded,
    normalize_status,
    reference_id,
)


@dataclass(frozen=True)
class TripTime:
    scheduled: Optional[str] = None
    actual: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "TripTime":
        if not isinstance(data, Mapping):
            return cls()
        return cls(
            scheduled=as_optional_text(data.get("scheduled")),
            actual=as_optional_text(data.get("actual")),
        )


@dataclass(frozen=True)
class Cargo:
    description: str = ""
    weight: float = 0.0
    hazmat: bool = False


@dataclass(frozen=True)
class TripNote:
    note_timestamp: Optional[str] = None
    content: str = ""


@dataclass(frozen=True)
class Trip:
    id: str
    trip_number: str = ""
    departure_time: TripTime = field(default_factory=TripTime)
    arrival_time: TripTime = field(default_factory=TripTime)
    status: Optional[str] = None    # SCHEDULED, IN_TRANSIT, COMPLETED, FAILED_DELIVERY, CANCELED
    cargo: Cargo = field(default_factory=Cargo)
    fuel_usage_gallons: float = 0.0
    distance_miles: float = 0.0
    notes: Tuple[TripNote, ...] = ()
    driver_id: Optional[str] = None
    truck_id: Optional[str] = None
    origin_facility_id: Optional[str] = None
    destination_facility_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Trip":
        cargo = embedded(data, "cargo") or {}
        notes = data.get("notes")
        if not isinstance(notes, list):
            notes = []
        return cls(
            id=as_text(data.get("id")),
            trip_number=as_text(data.get("trip_number")),
            departure_time=TripTime.from_dict(data.get("departure_time")),
            arrival_time=TripTime.from_dict(data.get("arrival_time")),
            status=normalize_status(TRIP, data.get("status")),
            cargo=Cargo(
                description=as_text(cargo.get("description")),
                weight=as_float(cargo.get("weight")),
                hazmat=bool(cargo.get("hazmat", False)),
            ),
            fuel_usage_gallons=as_float(data.get("fuel_usage_gallons")),
            distance_miles=as_float(data.get("distance_miles")),
            notes=tuple(
                TripNote(
                    note_timestamp=as_optional_text(note.get("note_timestamp")),
                    content=as_text(note.get("content")),
                )
                for note in notes
                if isinstance(note, Mapping)
            ),
            driver_id=reference_id(data, "driver"),
            truck_id=reference_id(data, "truck"),
            origin_facility_id=reference_id(data, "origin_facility"),
            destination_facility_id=reference_id(data, "destination_facility"),
            created_at=as_optional_text(data.get("created_at")),
            updated_at=as_optional_text(data.get("updated_at")),
        )
