"""Vehicle to wiper-size resolution and model suggestions.

Lookup priority for ``resolve``:
  1. exact "Make_Model" key, case-insensitive
  2. same make, model equal once spaces and hyphens are removed
     ("F250" <-> "F-250", "Land Cruiser" <-> "landcruiser")
  3. None: sizes unknown, the caller records the vehicle without sizes

There is no partial-word or edit-distance matching.
"""

import logging
import re
from functools import lru_cache

from clearview.core.enums import MAX_MODEL_SUGGESTIONS, BladePosition
from clearview.data.wiper_sizes import WIPER_SIZES, SizeTriple
from clearview.models.job import BladeLineItem
from clearview.models.vehicle import SizeEntry, Vehicle

logger = logging.getLogger(__name__)

_SPACE_OR_HYPHEN = re.compile(r"[\s-]")


def normalize_model(model: str | None) -> str:
    """Lower-case and strip spaces/hyphens for flexible model matching.

    Examples:
        >>> normalize_model(" F 250 ")
        'f250'
        >>> normalize_model("F-250")
        'f250'
    """
    if not model or not isinstance(model, str):
        return ""
    return _SPACE_OR_HYPHEN.sub("", model.strip().lower())


def split_key(key: str) -> tuple[str, str] | None:
    """Split a table key into (make, model) on the first underscore."""
    make, sep, model = key.partition("_")
    if not sep:
        return None
    return make, model


def _to_entry(sizes: SizeTriple) -> SizeEntry:
    driver, passenger, rear = sizes
    return SizeEntry(driver=driver, passenger=passenger, rear=rear)


def resolve(make: str | None, model: str | None) -> SizeEntry | None:
    """Look up the wiper sizes for a make and model.

    Returns None for blank input or an unknown vehicle. Never raises for
    unknown vehicles.
    """
    if not make or not model:
        return None
    make_trim = make.strip()
    model_trim = model.strip()
    if not make_trim or not model_trim:
        return None

    # 1. Exact match (case-insensitive)
    key_lower = f"{make_trim}_{model_trim}".lower()
    for key, sizes in WIPER_SIZES.items():
        if key.lower() == key_lower:
            return _to_entry(sizes)

    # 2. Normalized match on the model, same make
    normalized_input = normalize_model(model_trim)
    if not normalized_input:
        return None
    make_lower = make_trim.lower()
    for key, sizes in WIPER_SIZES.items():
        parts = split_key(key)
        if parts is None:
            continue
        db_make, db_model = parts
        if db_make.lower() == make_lower and normalize_model(db_model) == normalized_input:
            logger.debug(f"Normalized match {make_trim!r} {model_trim!r} -> {key!r}")
            return _to_entry(sizes)

    logger.debug(f"No wiper sizes for {make_trim!r} {model_trim!r}")
    return None


@lru_cache(maxsize=128)
def _models_for_make(make_lower: str) -> tuple[str, ...]:
    seen: set[str] = set()
    models: list[str] = []
    for key in WIPER_SIZES:
        parts = split_key(key)
        if parts is None:
            continue
        db_make, db_model = parts
        if db_make.lower() == make_lower and db_model and db_model not in seen:
            seen.add(db_model)
            models.append(db_model)
    return tuple(sorted(models, key=lambda m: (m.lower(), m)))


def models_for_make(make: str | None) -> list[str]:
    """All distinct models known for a make, in lexicographic order.

    Ordering ignores case, so "bZ4X" sorts among the B's.
    """
    if not make or not make.strip():
        return []
    return list(_models_for_make(make.strip().lower()))


def suggest_models(
    make: str | None,
    partial_model: str | None,
    limit: int = MAX_MODEL_SUGGESTIONS,
) -> list[str]:
    """Autocomplete suggestions for the model field.

    Empty input returns the first ``limit`` models for the make; otherwise
    models containing the input (case-insensitive substring), in the same
    order, truncated to ``limit``.
    """
    models = models_for_make(make)
    query = (partial_model or "").strip().lower()
    if not query:
        return models[:limit]
    return [m for m in models if query in m.lower()][:limit]


def identify_vehicle(make: str, model: str, year: str = "") -> Vehicle:
    """Build a vehicle with its sizes derived from make and model."""
    return Vehicle(make=make, model=model, year=year, wiper_sizes=resolve(make, model))


def refresh_sizes(vehicle: Vehicle) -> Vehicle:
    """Recompute a vehicle's sizes from its current make and model."""
    return vehicle.model_copy(update={"wiper_sizes": resolve(vehicle.make, vehicle.model)})


def blades_for_sizes(sizes: SizeEntry | None) -> list[BladeLineItem]:
    """Blade line items for a size entry: driver, passenger, then rear."""
    if sizes is None:
        return []
    blades: list[BladeLineItem] = []
    for size, position in (
        (sizes.driver, BladePosition.DRIVER),
        (sizes.passenger, BladePosition.PASSENGER),
        (sizes.rear, BladePosition.REAR),
    ):
        if size:
            blades.append(BladeLineItem(size=size, position=position))
    return blades
