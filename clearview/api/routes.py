"""FastAPI route definitions for the ClearView Wipers API."""

from datetime import date
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from clearview.api.deps import (
    get_access,
    get_geocoding,
    get_photo_identifier,
    get_shop,
    limiter,
    require_view,
)
from clearview.config import Settings, get_settings
from clearview.core.enums import ExpenseCategory, JobStatus, TimeRange, View
from clearview.data.wiper_sizes import MAKES, TABLE_VERSION, YEARS
from clearview.models.base import Document
from clearview.models.job import Expense, Job
from clearview.models.location import GeocodeResult
from clearview.models.metrics import ProfitMetrics
from clearview.models.user import AccessContext
from clearview.models.vehicle import Customer, SizeEntry, Vehicle, simple_address
from clearview.services.auth import check_pin
from clearview.services.geocoding import GeocodingClient
from clearview.services.jobs import JobError, JobTransitionError, can_complete
from clearview.services.photo_id import PhotoIdentifier
from clearview.services.resolver import (
    identify_vehicle,
    models_for_make,
    resolve,
    suggest_models,
)
from clearview.services.shop import ShopState
from clearview.services.survey import SurveyReport, build_report, survey_vehicles
from clearview.utils.converters import parse_amount

router = APIRouter()

Shop = Annotated[ShopState, Depends(get_shop)]
AdminCustomers = Depends(require_view(View.CUSTOMERS))
AdminInventory = Depends(require_view(View.INVENTORY))
AdminProfits = Depends(require_view(View.PROFITS))
AdminCalendar = Depends(require_view(View.CALENDAR))
JobsAccess = Depends(require_view(View.JOBS))


# ---------------------------------------------------------------------------
# Request / Response Models
# ---------------------------------------------------------------------------


class UnlockRequest(Document):
    pin: str


class VehicleIn(Document):
    make: str = ""
    model: str = ""
    year: str | int = ""


class CustomerIn(Document):
    name: str
    phone: str = ""
    email: str = ""
    address: str = ""
    vehicles: list[VehicleIn] = []

    def resolved_vehicles(self) -> list[Vehicle]:
        """Sizes are always derived from make and model, never taken as given."""
        return [identify_vehicle(v.make, v.model, str(v.year)) for v in self.vehicles]


class CreateJobRequest(Document):
    vehicle_index: int = 0
    price: Optional[float] = None


class ScheduleRequest(Document):
    scheduled_date: Optional[str] = None


class CompleteRequest(Document):
    price: Any = None
    scheduled_date: Optional[str] = None


class StockRequest(Document):
    quantity: Any = None


class AdjustRequest(Document):
    delta: int


class ExpenseIn(Document):
    description: str = ""
    amount: Any = None
    date: Optional[str] = None
    category: Optional[str] = None


class SurveyRequest(Document):
    name: str = ""
    vehicles: list[VehicleIn] = []


class LookupResponse(Document):
    make: str
    model: str
    found: bool
    wiper_sizes: Optional[SizeEntry] = None


class Readiness(Document):
    can_complete: bool
    has_blades: bool
    has_scheduled_date: bool
    missing_sizes: list[str]


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


@router.post("/auth/unlock")
def unlock(req: UnlockRequest, settings: Annotated[Settings, Depends(get_settings)]):
    """Unlock admin with the shop PIN."""
    if not check_pin(req.pin, settings.admin_pin):
        raise HTTPException(status_code=401, detail="Wrong PIN")
    return {"role": "admin"}


@router.get("/auth/role")
def current_role(access: Annotated[AccessContext, Depends(get_access)]):
    return {"role": access.role.value, "views": [v.value for v in access.views]}


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------


@router.get("/home")
def home(shop: Shop, _access: AccessContext = JobsAccess):
    """Job counts, today's schedule and low-stock sizes."""
    return shop.home_summary()


# ---------------------------------------------------------------------------
# Vehicles
# ---------------------------------------------------------------------------


@router.get("/vehicles/makes")
def get_makes():
    return {"makes": MAKES, "tableVersion": TABLE_VERSION}


@router.get("/vehicles/years")
def get_years():
    return {"years": YEARS}


@router.get("/vehicles/lookup", response_model=LookupResponse)
def lookup_vehicle(make: str = "", model: str = ""):
    """Wiper sizes for a make and model. Unknown vehicles are not an error."""
    sizes = resolve(make, model)
    return LookupResponse(make=make, model=model, found=sizes is not None, wiper_sizes=sizes)


@router.get("/vehicles/models/{make}")
def get_models(make: str):
    return {"models": models_for_make(make)}


@router.get("/vehicles/suggest")
def get_model_suggestions(make: str = "", q: str = ""):
    return {"suggestions": suggest_models(make, q)}


@router.post("/vehicles/identify", response_model=Vehicle)
async def identify_from_photo(
    identifier: Annotated[PhotoIdentifier, Depends(get_photo_identifier)],
):
    """Identify a vehicle from a photo and resolve its sizes."""
    found = await identifier.identify()
    return identify_vehicle(found.make, found.model)


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------


@router.get("/customers", response_model=list[Customer])
def list_customers(shop: Shop, search: str = "", _access: AccessContext = AdminCustomers):
    return shop.search_customers(search)


@router.post("/customers", response_model=Customer, status_code=201)
def create_customer(req: CustomerIn, shop: Shop, _access: AccessContext = AdminCustomers):
    customer = Customer(
        name=req.name,
        phone=req.phone,
        email=req.email,
        address=req.address,
        vehicles=req.resolved_vehicles(),
    )
    return shop.add_customer(customer)


@router.get("/customers/{customer_id}")
def get_customer(customer_id: str, shop: Shop, _access: AccessContext = AdminCustomers):
    """Customer with their jobs."""
    customer = shop.get_customer(customer_id)
    return {"customer": customer, "jobs": shop.jobs_for_customer(customer_id)}


@router.put("/customers/{customer_id}", response_model=Customer)
def update_customer(
    customer_id: str, req: CustomerIn, shop: Shop, _access: AccessContext = AdminCustomers
):
    current = shop.get_customer(customer_id)
    updated = current.model_copy(
        update={
            "name": req.name,
            "phone": req.phone,
            "email": req.email,
            "address": req.address,
            "vehicles": [v for v in req.resolved_vehicles() if v.make.strip()],
        }
    )
    return shop.update_customer(updated)


@router.post("/customers/{customer_id}/jobs", response_model=Job, status_code=201)
def create_job(
    customer_id: str,
    req: CreateJobRequest,
    shop: Shop,
    _access: AccessContext = AdminCustomers,
):
    try:
        return shop.create_job(customer_id, req.vehicle_index, price=req.price)
    except JobError as e:
        raise HTTPException(status_code=422, detail=str(e))


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


@router.get("/jobs", response_model=list[Job])
def list_jobs(shop: Shop, status: str = "", _access: AccessContext = JobsAccess):
    if status and status != "all":
        job_status = JobStatus.from_string(status)
        if job_status is None:
            raise HTTPException(status_code=422, detail=f"Unknown status {status!r}")
        return shop.jobs_by_status(job_status)
    return shop.jobs_by_status()


@router.get("/jobs/{job_id}", response_model=Job)
def get_job(job_id: str, shop: Shop, _access: AccessContext = JobsAccess):
    return shop.get_job(job_id)


@router.get("/jobs/{job_id}/readiness", response_model=Readiness)
def job_readiness(
    job_id: str,
    shop: Shop,
    scheduled_date: str = Query(default="", alias="scheduledDate"),
    _access: AccessContext = JobsAccess,
):
    """Whether the job can be completed now, and what is missing."""
    job = shop.get_job(job_id)
    return Readiness(
        can_complete=can_complete(job, shop.ledger, scheduled_date),
        has_blades=shop.ledger.can_fulfill(job.blades),
        has_scheduled_date=job.has_schedule_date or bool(scheduled_date.strip()),
        missing_sizes=shop.ledger.missing_sizes(job.blades),
    )


@router.post("/jobs/{job_id}/schedule", response_model=Job)
def schedule_job(
    job_id: str, req: ScheduleRequest, shop: Shop, _access: AccessContext = JobsAccess
):
    try:
        return shop.schedule_job(job_id, req.scheduled_date)
    except JobTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/jobs/{job_id}/complete", response_model=Job)
def complete_job(
    job_id: str, req: CompleteRequest, shop: Shop, _access: AccessContext = JobsAccess
):
    try:
        return shop.complete_job(job_id, price=req.price, scheduled_date=req.scheduled_date)
    except JobTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))


# ---------------------------------------------------------------------------
# Inventory
# ---------------------------------------------------------------------------


@router.get("/inventory")
def get_inventory(shop: Shop, _access: AccessContext = AdminInventory):
    ledger = shop.ledger
    return {
        "counts": {size: ledger.quantity(size) for size in ledger.sorted_sizes()},
        "totalBlades": ledger.total_blades(),
    }


@router.put("/inventory/{size}")
def set_stock(size: str, req: StockRequest, shop: Shop, _access: AccessContext = AdminInventory):
    if not shop.set_stock(size, req.quantity):
        raise HTTPException(
            status_code=422, detail="Quantity must be a whole number of 0 or more"
        )
    return {"size": size, "quantity": shop.ledger.quantity(size)}


@router.post("/inventory/{size}/adjust")
def adjust_stock(
    size: str, req: AdjustRequest, shop: Shop, _access: AccessContext = AdminInventory
):
    shop.adjust_stock(size, req.delta)
    return {"size": size, "quantity": shop.ledger.quantity(size)}


@router.get("/inventory/shopping-list")
def get_shopping_list(shop: Shop, _access: AccessContext = AdminInventory):
    """Blades to buy for pending and scheduled jobs."""
    needed = shop.blades_needed()
    to_buy = shop.shopping_list()
    return {"needed": needed, "toBuy": to_buy, "allInStock": not to_buy}


@router.post("/survey", response_model=SurveyReport)
def block_survey(req: SurveyRequest, shop: Shop, _access: AccessContext = AdminInventory):
    vehicles = survey_vehicles((v.make, v.model) for v in req.vehicles)
    return build_report(vehicles, shop.ledger, name=req.name)


# ---------------------------------------------------------------------------
# Expenses / Profits / Calendar
# ---------------------------------------------------------------------------


@router.get("/expenses", response_model=list[Expense])
def list_expenses(shop: Shop, _access: AccessContext = AdminProfits):
    return shop.expenses


@router.post("/expenses", response_model=Expense, status_code=201)
def add_expense(req: ExpenseIn, shop: Shop, _access: AccessContext = AdminProfits):
    amount = parse_amount(req.amount)
    if not req.description.strip() or amount is None:
        raise HTTPException(
            status_code=422, detail="An expense needs a description and an amount of 0 or more"
        )
    fields: dict[str, Any] = {
        "description": req.description.strip(),
        "amount": amount,
        "category": ExpenseCategory.from_string(req.category),
    }
    if req.date:
        fields["date"] = req.date
    return shop.add_expense(Expense(**fields))


@router.get("/profits", response_model=ProfitMetrics)
def get_profits(
    shop: Shop,
    time_range: str = Query(default="all", alias="range"),
    _access: AccessContext = AdminProfits,
):
    return shop.metrics(TimeRange.from_string(time_range))


@router.get("/calendar")
def get_calendar(
    shop: Shop,
    year: Optional[int] = None,
    month: Optional[int] = Query(default=None, ge=1, le=12),
    _access: AccessContext = AdminCalendar,
):
    """Scheduled jobs for a month, grouped by date."""
    today = date.today()
    return {"days": shop.calendar(year or today.year, month or today.month)}


# ---------------------------------------------------------------------------
# Geocoding
# ---------------------------------------------------------------------------


def _geocode_payload(result: GeocodeResult) -> dict[str, Any]:
    """Geocode hit plus the street-only form used on customer cards."""
    return {**result.model_dump(by_alias=True), "street": simple_address(result.display_name)}


@router.get("/geocode/search")
async def geocode_search(
    q: str, geocoder: Annotated[GeocodingClient, Depends(get_geocoding)]
):
    """Verify an address."""
    result = await geocoder.search(q)
    if result is None:
        return {"result": None, "message": "Could not verify address"}
    return {"result": _geocode_payload(result)}


@router.get("/geocode/suggest")
@limiter.limit(lambda: get_settings().rate_limit_suggest)
async def geocode_suggest(
    request: Request,
    q: str,
    geocoder: Annotated[GeocodingClient, Depends(get_geocoding)],
):
    """Address autocomplete (3+ characters)."""
    results = await geocoder.suggest(q)
    return {"suggestions": [_geocode_payload(r) for r in results]}
