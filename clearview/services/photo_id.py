"""Vehicle identification from a photo.

Only the contract is real: ``identify(photo) -> {make, model}`` with
unspecified latency. ``SimulatedPhotoIdentifier`` stands in for a vision
service by picking a common vehicle after a delay.
"""

import asyncio
import random
from typing import Protocol

from pydantic import BaseModel


class IdentifiedVehicle(BaseModel):
    make: str
    model: str


class PhotoIdentifier(Protocol):
    async def identify(self, photo: bytes | None = None) -> IdentifiedVehicle: ...


COMMON_VEHICLES: list[IdentifiedVehicle] = [
    IdentifiedVehicle(make="Toyota", model="Camry"),
    IdentifiedVehicle(make="Honda", model="CR-V"),
    IdentifiedVehicle(make="Ford", model="F-150"),
    IdentifiedVehicle(make="Chevrolet", model="Equinox"),
]


class SimulatedPhotoIdentifier:
    """Random pick from ``COMMON_VEHICLES`` after ``delay`` seconds."""

    def __init__(self, delay: float = 2.0, rng: random.Random | None = None) -> None:
        self.delay = delay
        self.rng = rng or random.Random()

    async def identify(self, photo: bytes | None = None) -> IdentifiedVehicle:
        if self.delay > 0:
            await asyncio.sleep(self.delay)
        return self.rng.choice(COMMON_VEHICLES)
