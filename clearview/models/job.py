import time
from datetime import date, datetime
from typing import Optional

from pydantic import Field

from clearview.core.enums import (
    DEFAULT_JOB_PRICE,
    BladePosition,
    ExpenseCategory,
    JobStatus,
)
from clearview.models.base import Document
from clearview.models.vehicle import generate_id, utc_now


class BladeLineItem(Document):
    """One replacement blade required by a job.

    Copied from the vehicle's sizes when the job is created; later edits to
    the vehicle do not change existing jobs.
    """

    size: str
    position: BladePosition


class Job(Document):
    id: str = Field(default_factory=generate_id)
    customer_id: str
    customer_name: str = ""  # snapshot, kept in sync by rename fan-out
    vehicle_index: int = 0
    status: JobStatus = JobStatus.PENDING
    scheduled_date: Optional[str] = None  # "YYYY-MM-DD"
    blades: list[BladeLineItem] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    completed_at: Optional[datetime] = None
    price: float = DEFAULT_JOB_PRICE
    blade_costs: Optional[float] = None

    @property
    def has_schedule_date(self) -> bool:
        return bool(self.scheduled_date and self.scheduled_date.strip())


def _expense_id() -> str:
    return f"e{int(time.time() * 1000)}"


def _today() -> str:
    return date.today().isoformat()


class Expense(Document):
    """A business expense. Not linked to jobs."""

    id: str = Field(default_factory=_expense_id)
    description: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0)
    date: str = Field(default_factory=_today)  # "YYYY-MM-DD"
    category: ExpenseCategory = ExpenseCategory.TRANSPORT
