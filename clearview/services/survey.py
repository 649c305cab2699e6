"""Block survey: blades a street of parked cars would need.

A technician walks a block, records make/model of parked vehicles, and gets
blade counts per size next to current stock.
"""

from collections.abc import Iterable

from clearview.models.base import Document
from clearview.models.vehicle import Vehicle
from clearview.services.ledger import InventoryLedger, size_sort_key
from clearview.services.resolver import blades_for_sizes, identify_vehicle


class SurveyLine(Document):
    size: str
    needed: int
    in_stock: int
    consider_buying: int


class SurveyReport(Document):
    name: str = ""
    vehicles: list[Vehicle]
    unknown_vehicles: int
    lines: list[SurveyLine]


def survey_vehicles(pairs: Iterable[tuple[str, str]]) -> list[Vehicle]:
    return [identify_vehicle(make, model) for make, model in pairs]


def build_report(
    vehicles: list[Vehicle], ledger: InventoryLedger, name: str = ""
) -> SurveyReport:
    needed: dict[str, int] = {}
    unknown = 0
    for vehicle in vehicles:
        if vehicle.wiper_sizes is None:
            unknown += 1
            continue
        for blade in blades_for_sizes(vehicle.wiper_sizes):
            needed[blade.size] = needed.get(blade.size, 0) + 1

    lines = []
    for size in sorted(needed, key=size_sort_key):
        have = ledger.quantity(size)
        lines.append(
            SurveyLine(
                size=size,
                needed=needed[size],
                in_stock=have,
                consider_buying=max(0, needed[size] - have),
            )
        )
    return SurveyReport(name=name, vehicles=vehicles, unknown_vehicles=unknown, lines=lines)
