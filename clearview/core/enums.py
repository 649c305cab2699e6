"""Enums for job, inventory, and access-control constants."""

from enum import Enum


class JobStatus(str, Enum):
    """Job lifecycle states. ``completed`` is terminal."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"

    @classmethod
    def from_string(cls, value: str | None) -> "JobStatus | None":
        """Convert string to enum, returning None if invalid."""
        if not value:
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @property
    def is_open(self) -> bool:
        """Pending and scheduled jobs make up the pipeline."""
        return self is not JobStatus.COMPLETED


class BladePosition(str, Enum):
    """Where a blade is fitted on the vehicle."""

    DRIVER = "Driver"
    PASSENGER = "Passenger"
    REAR = "Rear"


class TimeRange(str, Enum):
    """Reporting window for the profit dashboard."""

    WEEK = "week"
    MONTH = "month"
    ALL = "all"

    @classmethod
    def from_string(cls, value: str | None) -> "TimeRange":
        """Convert string to enum, defaulting to ALL."""
        if not value:
            return cls.ALL
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.ALL


class ExpenseCategory(str, Enum):
    """Expense categories offered on the expense form."""

    TRANSPORT = "transport"
    MARKETING = "marketing"
    SUPPLIES = "supplies"
    OTHER = "other"

    @classmethod
    def from_string(cls, value: str | None) -> "ExpenseCategory":
        """Convert string to enum, handling common variations."""
        if not value:
            return cls.TRANSPORT
        mappings = {
            "transport": cls.TRANSPORT,
            "gas": cls.TRANSPORT,
            "fuel": cls.TRANSPORT,
            "marketing": cls.MARKETING,
            "flyers": cls.MARKETING,
            "supplies": cls.SUPPLIES,
            "tools": cls.SUPPLIES,
            "other": cls.OTHER,
        }
        return mappings.get(value.strip().lower(), cls.OTHER)


class Role(str, Enum):
    """Access roles. Employees see only the home and jobs views."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class View(str, Enum):
    """Top-level views of the app, used for role permissions."""

    HOME = "home"
    JOBS = "jobs"
    CUSTOMERS = "customers"
    CALENDAR = "calendar"
    INVENTORY = "inventory"
    PROFITS = "profits"


ROLE_VIEWS: dict[Role, frozenset[View]] = {
    Role.ADMIN: frozenset(View),
    Role.EMPLOYEE: frozenset({View.HOME, View.JOBS}),
}

# Business constants
DEFAULT_UNIT_COST = 7.0
DEFAULT_JOB_PRICE = 50.0
MAX_MODEL_SUGGESTIONS = 8
WEEKLY_SERIES_LENGTH = 8
MIN_ADDRESS_QUERY_LENGTH = 3
LOW_STOCK_THRESHOLD = 2
