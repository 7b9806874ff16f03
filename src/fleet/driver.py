"""Driver snapshot as returned by the fleet API."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from src.config.constants import DRIVER
from src.fleet.common import Address, as_optional_text, as_text, normalize_status


@dataclass(frozen=True)
class Driver:
    id: str
    first_name: str = ""
    last_name: str = ""
    dob: Optional[str] = None
    license_number: str = ""
    license_state: str = ""
    license_expiration: Optional[str] = None
    phone: str = ""
    email: str = ""
    address: Address = field(default_factory=Address)
    employment_status: Optional[str] = None    # ACTIVE, SUSPENDED, TERMINATED
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def initials(self) -> str:
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Driver":
        return cls(
            id=as_text(data.get("id")),
            first_name=as_text(data.get("first_name")),
            last_name=as_text(data.get("last_name")),
            dob=as_optional_text(data.get("dob")),
            license_number=as_text(data.get("license_number")),
            license_state=as_text(data.get("license_state")),
            license_expiration=as_optional_text(data.get("license_expiration")),
            phone=as_text(data.get("phone")),
            email=as_text(data.get("email")),
            address=Address.from_dict(data.get("address")),
            employment_status=normalize_status(DRIVER, data.get("employment_status")),
            created_at=as_optional_text(data.get("created_at")),
            updated_at=as_optional_text(data.get("updated_at")),
        )
