"""Per-size blade inventory ledger.

The ledger is a value object: every mutation returns a new ledger and leaves
the original untouched, so a rejected job transition can never leave a
half-applied decrement behind. Quantities never go negative.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from clearview.core.enums import DEFAULT_UNIT_COST, LOW_STOCK_THRESHOLD
from clearview.models.job import BladeLineItem, Job
from clearview.models.metrics import InventoryItem
from clearview.utils.converters import parse_quantity, safe_int

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*(\d+)")


def size_sort_key(size: str) -> tuple[int, str]:
    """Order sizes by their leading inch value ('12"' before '26"')."""
    match = _LEADING_INT.match(size)
    inches = int(match.group(1)) if match else 10**6
    return inches, size


class InventoryLedger:
    """Blade counts keyed by size string."""

    def __init__(self, counts: Mapping[str, Any] | None = None) -> None:
        self._counts: dict[str, int] = {}
        for size, qty in (counts or {}).items():
            self._counts[size] = max(0, safe_int(qty))

    @classmethod
    def from_document(cls, doc: Mapping[str, Any] | None) -> "InventoryLedger":
        """Build from the ``data/inventory`` document (``{"counts": {...}}``)."""
        if not doc:
            return cls()
        return cls(doc.get("counts") or {})

    def to_document(self) -> dict[str, Any]:
        return {"counts": dict(self._counts)}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def quantity(self, size: str) -> int:
        return self._counts.get(size, 0)

    def as_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def sorted_sizes(self) -> list[str]:
        return sorted(self._counts, key=size_sort_key)

    def total_blades(self) -> int:
        return sum(self._counts.values())

    def can_fulfill(self, blades: Iterable[BladeLineItem]) -> bool:
        """True when every blade's size has at least one unit on hand.

        Each line item is checked on its own: two items of the same size pass
        with a single unit in stock.
        """
        return all(self.quantity(b.size) > 0 for b in blades)

    def missing_sizes(self, blades: Iterable[BladeLineItem]) -> list[str]:
        """Sizes in ``blades`` with nothing on hand, first-seen order."""
        missing: list[str] = []
        for blade in blades:
            if self.quantity(blade.size) <= 0 and blade.size not in missing:
                missing.append(blade.size)
        return missing

    def low_stock(self, threshold: int = LOW_STOCK_THRESHOLD) -> list[str]:
        return [s for s in self.sorted_sizes() if self._counts[s] <= threshold]

    def with_unit_costs(
        self,
        unit_cost: float = DEFAULT_UNIT_COST,
        overrides: Mapping[str, float] | None = None,
    ) -> dict[str, InventoryItem]:
        """Reporting view ``{size: {qty, unitCost}}``."""
        overrides = overrides or {}
        return {
            size: InventoryItem(qty=qty, unit_cost=overrides.get(size, unit_cost))
            for size, qty in self._counts.items()
        }

    # ------------------------------------------------------------------
    # Mutations (return new ledgers)
    # ------------------------------------------------------------------

    def decrement_for_job(self, blades: Iterable[BladeLineItem]) -> "InventoryLedger":
        """Take one unit per blade. Empty or unknown sizes are left alone."""
        counts = dict(self._counts)
        for blade in blades:
            if counts.get(blade.size, 0) > 0:
                counts[blade.size] -= 1
        return InventoryLedger(counts)

    def adjust(self, size: str, delta: int) -> "InventoryLedger":
        """Add ``delta`` (may be negative) to a size, floored at zero."""
        counts = dict(self._counts)
        counts[size] = max(0, counts.get(size, 0) + delta)
        return InventoryLedger(counts)

    def set_quantity(self, size: str, value: Any) -> "InventoryLedger":
        """Set a size's count. Non-numeric or negative input is a no-op."""
        qty = parse_quantity(value)
        if qty is None:
            logger.info(f"Rejected stock quantity {value!r} for size {size}")
            return self
        counts = dict(self._counts)
        counts[size] = qty
        return InventoryLedger(counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InventoryLedger):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        return f"InventoryLedger({self._counts!r})"


def blades_needed(jobs: Iterable[Job]) -> dict[str, int]:
    """Blade count per size across pending and scheduled jobs."""
    needed: dict[str, int] = {}
    for job in jobs:
        if not job.status.is_open:
            continue
        for blade in job.blades:
            needed[blade.size] = needed.get(blade.size, 0) + 1
    return needed


def shopping_list(needed: Mapping[str, int], ledger: InventoryLedger) -> dict[str, int]:
    """Sizes to buy (``needed - on hand``), only where short.

    An empty result means every needed blade is on hand.
    """
    to_buy: dict[str, int] = {}
    for size in sorted(needed):
        short = max(0, needed[size] - ledger.quantity(size))
        if short > 0:
            to_buy[size] = short
    return to_buy
