"""Job creation and the pending -> scheduled -> completed state machine.

    pending ──schedule(date)──> scheduled
       │                           │
       └──────complete(...)────────┴──> completed (terminal)

Completion needs every blade size in stock and a schedule date (already on
the job or supplied with the completion). Rejected transitions raise
``JobTransitionError`` and change nothing: neither the job nor the ledger.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from clearview.core.enums import DEFAULT_JOB_PRICE, DEFAULT_UNIT_COST, JobStatus
from clearview.models.job import BladeLineItem, Job
from clearview.models.vehicle import Customer, utc_now
from clearview.services.ledger import InventoryLedger
from clearview.services.resolver import blades_for_sizes
from clearview.utils.converters import safe_float

logger = logging.getLogger(__name__)


class JobError(ValueError):
    """A job could not be created."""


class JobTransitionError(JobError):
    """A state transition was rejected; nothing was changed."""


def create_job(
    customer: Customer,
    vehicle_index: int,
    price: float = DEFAULT_JOB_PRICE,
    now: datetime | None = None,
) -> Job:
    """New pending job for one of the customer's vehicles.

    Blades are copied from the vehicle's sizes, so the vehicle must have
    known sizes.
    """
    vehicle = customer.vehicle(vehicle_index)
    if vehicle is None:
        raise JobError(f"Customer {customer.id} has no vehicle #{vehicle_index}")
    if vehicle.wiper_sizes is None:
        raise JobError(
            f"Wiper sizes unknown for {vehicle.make} {vehicle.model}; "
            "cannot create a job"
        )

    job = Job(
        customer_id=customer.id,
        customer_name=customer.name,
        vehicle_index=vehicle_index,
        status=JobStatus.PENDING,
        scheduled_date=None,
        blades=blades_for_sizes(vehicle.wiper_sizes),
        created_at=now or utc_now(),
        price=price,
    )
    logger.info(f"Created job {job.id} for customer {customer.id} ({len(job.blades)} blades)")
    return job


def schedule(job: Job, scheduled_date: str | None) -> Job:
    """pending -> scheduled. Needs a non-empty date."""
    if job.status is not JobStatus.PENDING:
        raise JobTransitionError(f"Job {job.id} is {job.status.value}; only pending jobs can be scheduled")
    date_text = (scheduled_date or "").strip()
    if not date_text:
        raise JobTransitionError("A schedule date is required")
    return job.model_copy(update={"status": JobStatus.SCHEDULED, "scheduled_date": date_text})


def can_complete(
    job: Job,
    ledger: InventoryLedger,
    scheduled_date: str | None = None,
) -> bool:
    """Whether ``complete`` would accept this job right now."""
    if job.status is JobStatus.COMPLETED:
        return False
    has_date = job.has_schedule_date or bool((scheduled_date or "").strip())
    return ledger.can_fulfill(job.blades) and has_date


def blade_cost(
    blades: list[BladeLineItem],
    unit_costs: Mapping[str, float] | None = None,
    default_unit_cost: float = DEFAULT_UNIT_COST,
) -> float:
    """Sum of per-blade unit cost; unlisted sizes cost the default."""
    unit_costs = unit_costs or {}
    return sum(unit_costs.get(b.size, default_unit_cost) for b in blades)


def complete(
    job: Job,
    ledger: InventoryLedger,
    price_override: Any = None,
    now: datetime | None = None,
    scheduled_date: str | None = None,
    unit_costs: Mapping[str, float] | None = None,
    default_unit_cost: float = DEFAULT_UNIT_COST,
) -> tuple[Job, InventoryLedger]:
    """pending/scheduled -> completed.

    Returns the completed job and the decremented ledger. The final price is
    ``price_override`` when it parses to a non-zero number, else the job's
    current price.
    """
    if job.status is JobStatus.COMPLETED:
        raise JobTransitionError(f"Job {job.id} is already completed")

    missing = ledger.missing_sizes(job.blades)
    if missing:
        raise JobTransitionError(f"Out of stock: {', '.join(missing)}")

    date_text = (scheduled_date or "").strip()
    if not job.has_schedule_date and not date_text:
        raise JobTransitionError("Schedule the job before completing it")

    final_price = safe_float(price_override) or job.price
    update: dict[str, Any] = {
        "status": JobStatus.COMPLETED,
        "completed_at": now or utc_now(),
        "price": final_price,
        "blade_costs": blade_cost(job.blades, unit_costs, default_unit_cost),
    }
    if not job.has_schedule_date:
        update["scheduled_date"] = date_text

    completed = job.model_copy(update=update)
    logger.info(f"Completed job {job.id} price={final_price:.2f}")
    return completed, ledger.decrement_for_job(job.blades)
