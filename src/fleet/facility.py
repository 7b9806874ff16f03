"""Facility snapshot (warehouses, yards, shops)."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

from src.fleet.common import Address, as_int, as_optional_text, as_text, embedded


@dataclass(frozen=True)
class ContactInfo:
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class Facility:
    id: str
    facility_number: str = ""
    name: str = ""
    type: str = ""
    address: Address = field(default_factory=Address)
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    parking_capacity: int = 0
    services_available: Tuple[str, ...] = ()
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Facility":
        contact = embedded(data, "contact_info") or {}
        services = data.get("services_available")
        if not isinstance(services, list):
            services = []
        return cls(
            id=as_text(data.get("id")),
            facility_number=as_text(data.get("facility_number")),
            name=as_text(data.get("name")),
            type=as_text(data.get("type")),
            address=Address.from_dict(data.get("address")),
            contact_info=ContactInfo(
                phone=as_text(contact.get("phone")),
                email=as_text(contact.get("email")),
            ),
            parking_capacity=as_int(data.get("parking_capacity")),
            services_available=tuple(str(s) for s in services),
            created_at=as_optional_text(data.get("created_at")),
            updated_at=as_optional_text(data.get("updated_at")),
        )
