import secrets
import string
from datetime import datetime, timezone
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from clearview.models.base import Document

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_id(length: int = 8) -> str:
    """Random base-36 record id."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SizeEntry(Document):
    """Driver/passenger/rear blade lengths for one vehicle."""

    model_config = ConfigDict(frozen=True)

    driver: str
    passenger: str
    rear: Optional[str] = None  # no rear wiper


class Vehicle(Document):
    """A customer vehicle.

    ``wiper_sizes`` is derived from make and model by the resolver and is
    recomputed whenever either changes; see
    ``clearview.services.resolver.identify_vehicle``.
    """

    make: str = ""
    model: str = ""
    year: str = ""
    wiper_sizes: Optional[SizeEntry] = None

    @field_validator("year", mode="before")
    @classmethod
    def coerce_year(cls, value: object) -> object:
        """Years arrive as numbers from some clients."""
        if isinstance(value, int):
            return str(value)
        return "" if value is None else value


class Customer(Document):
    id: str = Field(default_factory=generate_id)
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    vehicles: list[Vehicle] = Field(default_factory=list)  # insertion order
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("vehicles")
    @classmethod
    def drop_blank_vehicles(cls, vehicles: list[Vehicle]) -> list[Vehicle]:
        """Vehicle rows left without a make are not saved."""
        return [v for v in vehicles if v.make.strip()]

    def vehicle(self, index: int) -> Vehicle | None:
        if 0 <= index < len(self.vehicles):
            return self.vehicles[index]
        return None


def simple_address(address: str | None) -> str:
    """Street-only address for cards.

    Nominatim returns long display names
    ("7337 Earl Ave NW, Ballard, Seattle, ..."); cards show the first part.
    """
    if not address or not isinstance(address, str):
        return ""
    first = address.split(",")[0].strip()
    return first or address
