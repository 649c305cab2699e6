"""In-memory view of the shop's records plus the write helpers.

``ShopState`` subscribes to the document store; each notification replaces
the matching collection wholesale. All reads (lists, lookups, dashboard
metrics) work on that snapshot. Writes go to the store and come back through
the subscription, so the snapshot is never edited in place.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from clearview.core.enums import DEFAULT_JOB_PRICE, DEFAULT_UNIT_COST, JobStatus, TimeRange
from clearview.models.job import Expense, Job
from clearview.models.metrics import ProfitMetrics
from clearview.models.vehicle import Customer, utc_now
from clearview.services import jobs as job_machine
from clearview.services.ledger import InventoryLedger, blades_needed, shopping_list
from clearview.services.metrics import compute_metrics
from clearview.services.store import (
    CUSTOMERS,
    DATA,
    EXPENSES,
    INVENTORY_ID,
    JOBS,
    DocumentStore,
    Record,
    StoreError,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class NotFoundError(LookupError):
    """No record with the requested id."""


def _parse_all(model: type[M], records: Iterable[Record], collection: str) -> list[M]:
    parsed: list[M] = []
    for record in records:
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as e:
            logger.warning(
                f"Skipping invalid {collection} document {record.get('id')!r}: "
                f"{e.error_count()} errors"
            )
    return parsed


class ShopState:
    """Live snapshot of customers, jobs, inventory and expenses."""

    def __init__(
        self,
        store: DocumentStore,
        default_unit_cost: float = DEFAULT_UNIT_COST,
        default_job_price: float = DEFAULT_JOB_PRICE,
    ) -> None:
        self.store = store
        self.default_unit_cost = default_unit_cost
        self.default_job_price = default_job_price
        self.customers: list[Customer] = []
        self.jobs: list[Job] = []
        self.expenses: list[Expense] = []
        self.ledger = InventoryLedger()
        # Serializes ledger read-modify-write cycles across request threads
        self._ledger_lock = threading.Lock()
        self._unsubscribers: list[Callable[[], None]] = [
            store.subscribe(CUSTOMERS, self._on_customers),
            store.subscribe(JOBS, self._on_jobs),
            store.subscribe(DATA, self._on_data),
            store.subscribe(EXPENSES, self._on_expenses),
        ]

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # ------------------------------------------------------------------
    # Subscription handlers (replace wholesale)
    # ------------------------------------------------------------------

    def _on_customers(self, records: list[Record]) -> None:
        self.customers = _parse_all(Customer, records, CUSTOMERS)

    def _on_jobs(self, records: list[Record]) -> None:
        self.jobs = _parse_all(Job, records, JOBS)

    def _on_expenses(self, records: list[Record]) -> None:
        self.expenses = _parse_all(Expense, records, EXPENSES)

    def _on_data(self, records: list[Record]) -> None:
        inventory = next((r for r in records if r.get("id") == INVENTORY_ID), None)
        self.ledger = InventoryLedger.from_document(inventory)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_customer(self, customer_id: str) -> Customer:
        for customer in self.customers:
            if customer.id == customer_id:
                return customer
        raise NotFoundError(f"Customer {customer_id} not found")

    def get_job(self, job_id: str) -> Job:
        for job in self.jobs:
            if job.id == job_id:
                return job
        raise NotFoundError(f"Job {job_id} not found")

    def search_customers(self, text: str | None = None) -> list[Customer]:
        """Customers whose name or address contains ``text`` (any case)."""
        needle = (text or "").strip().lower()
        if not needle:
            return list(self.customers)
        return [
            c
            for c in self.customers
            if needle in c.name.lower() or needle in (c.address or "").lower()
        ]

    def jobs_by_status(self, status: JobStatus | None = None) -> list[Job]:
        if status is None:
            return list(self.jobs)
        return [j for j in self.jobs if j.status is status]

    def jobs_for_customer(self, customer_id: str) -> list[Job]:
        return [j for j in self.jobs if j.customer_id == customer_id]

    def calendar(self, year: int, month: int) -> dict[str, list[Job]]:
        """Scheduled jobs in a month, grouped by ``YYYY-MM-DD``."""
        prefix = f"{year:04d}-{month:02d}-"
        by_date: dict[str, list[Job]] = {}
        for job in self.jobs:
            if job.status is not JobStatus.SCHEDULED or not job.scheduled_date:
                continue
            if job.scheduled_date.startswith(prefix):
                by_date.setdefault(job.scheduled_date, []).append(job)
        return dict(sorted(by_date.items()))

    def home_summary(self, today: date | None = None) -> dict[str, Any]:
        today_str = (today or date.today()).isoformat()
        return {
            "pending": len(self.jobs_by_status(JobStatus.PENDING)),
            "scheduled": len(self.jobs_by_status(JobStatus.SCHEDULED)),
            "completed": len(self.jobs_by_status(JobStatus.COMPLETED)),
            "today": [
                j for j in self.jobs_by_status(JobStatus.SCHEDULED)
                if j.scheduled_date == today_str
            ],
            "totalBlades": self.ledger.total_blades(),
            "lowStock": self.ledger.low_stock(),
        }

    def blades_needed(self) -> dict[str, int]:
        return blades_needed(self.jobs)

    def shopping_list(self) -> dict[str, int]:
        return shopping_list(self.blades_needed(), self.ledger)

    def metrics(
        self, time_range: TimeRange = TimeRange.ALL, now: datetime | None = None
    ) -> ProfitMetrics:
        return compute_metrics(
            self.jobs,
            self.ledger.with_unit_costs(self.default_unit_cost),
            self.expenses,
            time_range=time_range,
            now=now,
            default_unit_cost=self.default_unit_cost,
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_customer(self, customer: Customer) -> Customer:
        self.store.upsert(CUSTOMERS, customer.id, customer.to_document())
        logger.info(f"Added customer {customer.id}")
        return customer

    def update_customer(self, customer: Customer) -> Customer:
        """Save a customer; a name change is fanned out to their jobs."""
        previous = self.get_customer(customer.id)
        self.store.upsert(CUSTOMERS, customer.id, customer.to_document())
        if customer.name != previous.name:
            self.propagate_customer_name(customer.id, customer.name)
        return customer

    def propagate_customer_name(self, customer_id: str, customer_name: str) -> int:
        """Copy a customer's new name onto every job of theirs.

        Safe to repeat; returns how many jobs were updated.
        """
        updated = 0
        for record in self.store.query_by_field(JOBS, "customerId", customer_id):
            if self.store.update_fields(JOBS, record["id"], {"customerName": customer_name}):
                updated += 1
        logger.info(f"Renamed customer {customer_id} on {updated} jobs")
        return updated

    def save_job(self, job: Job) -> Job:
        self.store.upsert(JOBS, job.id, job.to_document())
        return job

    def write_inventory(self, ledger: InventoryLedger) -> InventoryLedger:
        self.store.upsert(DATA, INVENTORY_ID, ledger.to_document())
        return ledger

    def add_expense(self, expense: Expense) -> Expense:
        self.store.upsert(EXPENSES, expense.id, expense.to_document())
        return expense

    # ------------------------------------------------------------------
    # Job operations
    # ------------------------------------------------------------------

    def create_job(
        self, customer_id: str, vehicle_index: int, price: float | None = None
    ) -> Job:
        customer = self.get_customer(customer_id)
        job = job_machine.create_job(
            customer,
            vehicle_index,
            price=self.default_job_price if price is None else price,
        )
        return self.save_job(job)

    def schedule_job(self, job_id: str, scheduled_date: str | None) -> Job:
        job = job_machine.schedule(self.get_job(job_id), scheduled_date)
        return self.save_job(job)

    def complete_job(
        self,
        job_id: str,
        price: Any = None,
        scheduled_date: str | None = None,
        now: datetime | None = None,
    ) -> Job:
        """Complete a job: ledger first, then the job.

        If the job cannot be saved the previous ledger is written back, so a
        retry does not take the blades twice.
        """
        with self._ledger_lock:
            previous = self.ledger
            job, ledger = job_machine.complete(
                self.get_job(job_id),
                previous,
                price_override=price,
                now=now or utc_now(),
                scheduled_date=scheduled_date,
                default_unit_cost=self.default_unit_cost,
            )
            self.write_inventory(ledger)
            try:
                return self.save_job(job)
            except StoreError:
                logger.error(f"Saving completed job {job_id} failed; restoring inventory")
                self.write_inventory(previous)
                raise

    # ------------------------------------------------------------------
    # Inventory operations
    # ------------------------------------------------------------------

    def set_stock(self, size: str, value: Any) -> bool:
        """Set a size's count. False (and no write) when input is invalid."""
        with self._ledger_lock:
            ledger = self.ledger.set_quantity(size, value)
            if ledger is self.ledger:
                return False
            self.write_inventory(ledger)
            return True

    def adjust_stock(self, size: str, delta: int) -> InventoryLedger:
        with self._ledger_lock:
            return self.write_inventory(self.ledger.adjust(size, delta))
