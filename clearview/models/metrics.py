from typing import Optional

from clearview.core.enums import TimeRange
from clearview.models.base import Document


class InventoryItem(Document):
    """Reporting view of one inventory size."""

    qty: int
    unit_cost: float


class JobMargin(Document):
    job_id: str
    customer_name: str
    price: float
    blade_costs: float
    profit: float
    margin: float  # 0.0 - 1.0, 0 when price is 0


class WeeklyBucket(Document):
    label: str  # e.g. "W7"
    revenue: float = 0.0
    profit: float = 0.0
    jobs: int = 0


class BladeUsage(Document):
    size: str
    count: int = 0
    total_cost: float = 0.0


class ProfitMetrics(Document):
    """Derived dashboard figures. Never stored."""

    time_range: TimeRange
    total_jobs: int
    pipeline_jobs: int
    total_revenue: float
    total_blade_cost: float
    total_expenses: float
    gross_profit: float
    net_profit: float
    gross_margin: float
    net_margin: float
    avg_profit_per_job: float
    avg_revenue_per_job: float
    best_job: Optional[JobMargin] = None
    worst_job: Optional[JobMargin] = None
    weekly_data: list[WeeklyBucket]
    blade_breakdown: list[BladeUsage]
    inventory_value: float
    pipeline_revenue: float
