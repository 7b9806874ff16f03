"""Truck snapshot as returned by the fleet API."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from src.config.constants import TRUCK
from src.fleet.common import (
    as_float,
    as_int,
    as_optional_text,
    as_text,
    embedded,
    normalize_status,
)


@dataclass(frozen=True)
class LicensePlate:
    number: str = ""
    state: str = ""


@dataclass(frozen=True)
class Truck:
    id: str
    truck_number: str = ""
    vin: str = ""
    make: str = ""
    model: str = ""
    year: int = 0
    license_plate: LicensePlate = field(default_factory=LicensePlate)
    mileage: float = 0.0
    status: Optional[str] = None    # AVAILABLE, IN_TRANSIT, UNDER_MAINTENANCE, RETIRED
    trailer_type: str = ""
    capacity_tons: float = 0.0
    fuel_type: str = ""
    last_maintenance: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Truck":
        plate = embedded(data, "license_plate") or {}
        return cls(
            id=as_text(data.get("id")),
            truck_number=as_text(data.get("truck_number")),
            vin=as_text(data.get("vin")),
            make=as_text(data.get("make")),
            model=as_text(data.get("model")),
            year=as_int(data.get("year")),
            license_plate=LicensePlate(
                number=as_text(plate.get("number")),
                state=as_text(plate.get("state")),
            ),
            mileage=as_float(data.get("mileage")),
            status=normalize_status(TRUCK, data.get("status")),
            trailer_type=as_text(data.get("trailer_type")),
            capacity_tons=as_float(data.get("capacity_tons")),
            fuel_type=as_text(data.get("fuel_type")),
            last_maintenance=as_optional_text(data.get("last_maintenance")),
            created_at=as_optional_text(data.get("created_at")),
            updated_at=as_optional_text(data.get("updated_at")),
        )
