"""Profit dashboard aggregation.

Everything here is a pure function of (jobs, inventory view, expenses, time
range, now). Nothing is stored; the dashboard recomputes from scratch on
every request.
"""

import math
from collections.abc import Iterable, Mapping
from datetime import date, datetime, timedelta, timezone
from typing import Any

from clearview.core.enums import (
    DEFAULT_UNIT_COST,
    WEEKLY_SERIES_LENGTH,
    JobStatus,
    TimeRange,
)
from clearview.models.job import Expense, Job
from clearview.models.metrics import (
    BladeUsage,
    InventoryItem,
    JobMargin,
    ProfitMetrics,
    WeeklyBucket,
)
from clearview.models.vehicle import utc_now
from clearview.services.jobs import blade_cost

# =============================================================================
# Date helpers
# =============================================================================


def as_datetime(value: Any) -> datetime | None:
    """Coerce a stored timestamp or ``YYYY-MM-DD`` date to an aware datetime.

    Naive values are taken as UTC. Unparseable values give None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            result = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None
    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def week_number(when: datetime) -> int:
    """Week of year: ``ceil((daysSinceJan1 + jan1Weekday + 1) / 7)``.

    ``daysSinceJan1`` is fractional; weekdays count Sunday as 0.
    """
    jan1 = datetime(when.year, 1, 1, tzinfo=when.tzinfo)
    days = (when - jan1).total_seconds() / 86400
    jan1_weekday = (jan1.weekday() + 1) % 7
    return math.ceil((days + jan1_weekday + 1) / 7)


def in_range(when: datetime | None, time_range: TimeRange, now: datetime) -> bool:
    if time_range is TimeRange.ALL:
        return True
    if when is None:
        return False
    if time_range is TimeRange.WEEK:
        return now - timedelta(days=7) <= when
    # MONTH: same calendar month and year
    when = when.astimezone(now.tzinfo)
    return when.month == now.month and when.year == now.year


# =============================================================================
# Per-job figures
# =============================================================================


def job_blade_costs(
    job: Job,
    inventory: Mapping[str, InventoryItem],
    default_unit_cost: float = DEFAULT_UNIT_COST,
) -> float:
    """Stored ``blade_costs`` if present, else unit cost summed per blade."""
    if job.blade_costs is not None:
        return job.blade_costs
    unit_costs = {size: item.unit_cost for size, item in inventory.items()}
    return blade_cost(job.blades, unit_costs, default_unit_cost)


def job_margin(job: Job, costs: float) -> JobMargin:
    price = job.price or 0.0
    profit = price - costs
    return JobMargin(
        job_id=job.id,
        customer_name=job.customer_name,
        price=price,
        blade_costs=costs,
        profit=profit,
        margin=(profit / price) if price > 0 else 0.0,
    )


# =============================================================================
# Series
# =============================================================================


def weekly_series(
    completed: Iterable[tuple[Job, float]],
    length: int = WEEKLY_SERIES_LENGTH,
) -> list[WeeklyBucket]:
    """Revenue, profit and job count per week; the latest ``length`` weeks."""
    buckets: dict[tuple[int, int], WeeklyBucket] = {}
    for job, costs in completed:
        when = as_datetime(job.completed_at)
        if when is None:
            continue
        week = week_number(when)
        key = (when.year, week)
        bucket = buckets.setdefault(key, WeeklyBucket(label=f"W{week}"))
        bucket.revenue += job.price or 0.0
        bucket.profit += (job.price or 0.0) - costs
        bucket.jobs += 1
    ordered = [buckets[k] for k in sorted(buckets)]
    return ordered[-length:]


def blade_breakdown(
    completed: Iterable[Job],
    inventory: Mapping[str, InventoryItem],
    default_unit_cost: float = DEFAULT_UNIT_COST,
) -> list[BladeUsage]:
    """Blades used per size with their cost, most used first."""
    usage: dict[str, BladeUsage] = {}
    for job in completed:
        for blade in job.blades:
            entry = usage.setdefault(blade.size, BladeUsage(size=blade.size))
            entry.count += 1
            item = inventory.get(blade.size)
            entry.total_cost += item.unit_cost if item is not None else default_unit_cost
    return sorted(usage.values(), key=lambda u: u.count, reverse=True)


def inventory_value(inventory: Mapping[str, InventoryItem]) -> float:
    return sum(item.qty * item.unit_cost for item in inventory.values())


# =============================================================================
# Dashboard
# =============================================================================


def compute_metrics(
    jobs: Iterable[Job],
    inventory: Mapping[str, InventoryItem],
    expenses: Iterable[Expense],
    time_range: TimeRange = TimeRange.ALL,
    now: datetime | None = None,
    default_unit_cost: float = DEFAULT_UNIT_COST,
) -> ProfitMetrics:
    """All dashboard figures for one time range."""
    now = as_datetime(now) or utc_now()
    jobs = list(jobs)

    completed = [
        (job, job_blade_costs(job, inventory, default_unit_cost))
        for job in jobs
        if job.status is JobStatus.COMPLETED
    ]
    filtered = [
        (job, costs)
        for job, costs in completed
        if in_range(as_datetime(job.completed_at), time_range, now)
    ]
    filtered_expenses = [
        e for e in expenses if in_range(as_datetime(e.date), time_range, now)
    ]

    total_revenue = sum(job.price or 0.0 for job, _ in filtered)
    total_blade_cost = sum(costs for _, costs in filtered)
    total_expenses = sum(e.amount or 0.0 for e in filtered_expenses)
    gross_profit = total_revenue - total_blade_cost
    net_profit = gross_profit - total_expenses
    count = len(filtered)

    best_job = worst_job = None
    if count >= 2:
        margins = sorted(
            (job_margin(job, costs) for job, costs in filtered),
            key=lambda m: m.margin,
            reverse=True,
        )
        best_job, worst_job = margins[0], margins[-1]

    pipeline = [job for job in jobs if job.status.is_open]

    return ProfitMetrics(
        time_range=time_range,
        total_jobs=count,
        pipeline_jobs=len(pipeline),
        total_revenue=total_revenue,
        total_blade_cost=total_blade_cost,
        total_expenses=total_expenses,
        gross_profit=gross_profit,
        net_profit=net_profit,
        gross_margin=gross_profit / total_revenue if total_revenue > 0 else 0.0,
        net_margin=net_profit / total_revenue if total_revenue > 0 else 0.0,
        avg_profit_per_job=gross_profit / count if count > 0 else 0.0,
        avg_revenue_per_job=total_revenue / count if count > 0 else 0.0,
        best_job=best_job,
        worst_job=worst_job,
        weekly_data=weekly_series(completed),
        blade_breakdown=blade_breakdown(
            (job for job, _ in completed), inventory, default_unit_cost
        ),
        inventory_value=inventory_value(inventory),
        pipeline_revenue=sum(job.price or 0.0 for job in pipeline),
    )
