"""API tests against the FastAPI app with an in-memory store."""

import logging
import random

import httpx
import pytest
from fastapi.testclient import TestClient

from clearview.api.deps import get_geocoding, get_photo_identifier, get_shop
from clearview.main import app
from clearview.services.geocoding import GeocodingClient
from clearview.services.photo_id import COMMON_VEHICLES, SimulatedPhotoIdentifier

ADMIN = {"X-Admin-Pin": "1313"}

HIT = {"lat": "47.6687", "lon": "-122.3842", "display_name": "7337 Earl Ave NW, Seattle"}


def _nominatim(request):
    if request.url.params.get("q") == "down":
        return httpx.Response(500)
    return httpx.Response(200, json=[HIT])


@pytest.fixture
def client(shop):
    app.dependency_overrides[get_shop] = lambda: shop
    app.dependency_overrides[get_photo_identifier] = lambda: SimulatedPhotoIdentifier(
        delay=0, rng=random.Random(7)
    )
    app.dependency_overrides[get_geocoding] = lambda: GeocodingClient(
        httpx.AsyncClient(transport=httpx.MockTransport(_nominatim))
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Auth and Roles
# ---------------------------------------------------------------------------


class TestAuth:
    def test_health(self, client):
        assert client.get("/health").json()["status"] == "ok"

    def test_request_id_header(self, client):
        assert client.get("/health").headers["X-Request-ID"]
        resp = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["X-Request-ID"] == "abc123"

    def test_unlock(self, client):
        assert client.post("/api/auth/unlock", json={"pin": "1313"}).json() == {"role": "admin"}

    def test_wrong_pin(self, client):
        resp = client.post("/api/auth/unlock", json={"pin": "0000"})
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Wrong PIN"

    def test_employee_by_default(self, client):
        body = client.get("/api/auth/role").json()
        assert body == {"role": "employee", "views": ["home", "jobs"]}

    @pytest.mark.parametrize(
        "path",
        ["/api/customers", "/api/inventory", "/api/profits", "/api/expenses", "/api/calendar"],
    )
    def test_employee_blocked_from_admin_views(self, client, path):
        assert client.get(path).status_code == 403
        assert client.get(path, headers=ADMIN).status_code == 200

    def test_forged_user_id_is_not_admin(self, client):
        forged = {"X-User-Id": "anything-at-all"}
        assert client.get("/api/customers", headers=forged).status_code == 403
        assert client.get("/api/auth/role", headers=forged).json()["role"] == "employee"

    def test_unverified_bearer_token_is_not_admin(self, client):
        forged = {"Authorization": "Bearer made-up-token"}
        assert client.get("/api/customers", headers=forged).status_code == 403

    def test_denied_view_is_logged(self, client, caplog):
        with caplog.at_level(logging.WARNING, logger="clearview"):
            client.get("/api/profits", headers={"X-Request-ID": "req-42"})
        assert "ACCESS role=employee view=profits allowed=False request_id=req-42" in caplog.text

    def test_employee_can_use_jobs(self, client):
        assert client.get("/api/jobs").status_code == 200
        assert client.get("/api/home").status_code == 200


# ---------------------------------------------------------------------------
# Vehicles
# ---------------------------------------------------------------------------


class TestVehicles:
    def test_makes_and_years(self, client):
        assert "Toyota" in client.get("/api/vehicles/makes").json()["makes"]
        assert client.get("/api/vehicles/years").json()["years"][0] == "2026"

    def test_lookup(self, client):
        body = client.get("/api/vehicles/lookup", params={"make": "Ford", "model": "F250"}).json()
        assert body["found"] is True
        assert body["wiperSizes"]["driver"] == '22"'

    def test_lookup_unknown_is_not_an_error(self, client):
        resp = client.get("/api/vehicles/lookup", params={"make": "Toyota", "model": "Nope"})
        assert resp.status_code == 200
        assert resp.json()["found"] is False

    def test_suggest(self, client):
        body = client.get("/api/vehicles/suggest", params={"make": "Toyota", "q": "cam"}).json()
        assert body["suggestions"] == ["Camry"]

    def test_identify_from_photo(self, client):
        body = client.post("/api/vehicles/identify").json()
        assert (body["make"], body["model"]) in {(v.make, v.model) for v in COMMON_VEHICLES}
        assert body["wiperSizes"] is not None


# ---------------------------------------------------------------------------
# Customers
# ---------------------------------------------------------------------------


class TestCustomers:
    def test_create_derives_sizes(self, client):
        resp = client.post(
            "/api/customers",
            headers=ADMIN,
            json={
                "name": "Ana Ruiz",
                "vehicles": [
                    {"make": "Toyota", "model": "camry", "year": 2021, "wiperSizes": {"driver": '9"', "passenger": '9"'}},
                    {"make": "", "model": ""},
                ],
            },
        )
        assert resp.status_code == 201
        body = resp.json()
        assert len(body["vehicles"]) == 1
        assert body["vehicles"][0]["wiperSizes"]["driver"] == '26"'
        assert body["vehicles"][0]["year"] == "2021"

    def test_search(self, client):
        body = client.get("/api/customers", params={"search": "elm"}, headers=ADMIN).json()
        assert [c["name"] for c in body] == ["Mike Chen"]

    def test_get_with_jobs(self, client):
        body = client.get("/api/customers/demo1", headers=ADMIN).json()
        assert body["customer"]["name"] == "Sarah Johnson"
        assert [j["id"] for j in body["jobs"]] == ["j1"]

    def test_unknown_customer(self, client):
        assert client.get("/api/customers/nope", headers=ADMIN).status_code == 404

    def test_rename_updates_jobs(self, client):
        resp = client.put(
            "/api/customers/demo1",
            headers=ADMIN,
            json={"name": "Sarah Lee", "vehicles": [{"make": "Toyota", "model": "Camry"}]},
        )
        assert resp.status_code == 200
        assert client.get("/api/jobs/j1").json()["customerName"] == "Sarah Lee"

    def test_create_job(self, client):
        resp = client.post("/api/customers/demo2/jobs", headers=ADMIN, json={"vehicleIndex": 0})
        assert resp.status_code == 201
        body = resp.json()
        assert body["status"] == "pending"
        assert body["price"] == 50
        assert [b["size"] for b in body["blades"]] == ['26"', '17"', '12"']

    def test_create_job_unknown_sizes(self, client):
        created = client.post(
            "/api/customers",
            headers=ADMIN,
            json={"name": "Yuri", "vehicles": [{"make": "Yugo", "model": "GV"}]},
        ).json()
        resp = client.post(f"/api/customers/{created['id']}/jobs", headers=ADMIN, json={})
        assert resp.status_code == 422


# ---------------------------------------------------------------------------
# Jobs
# ---------------------------------------------------------------------------


class TestJobs:
    def test_filter_by_status(self, client):
        assert [j["id"] for j in client.get("/api/jobs", params={"status": "pending"}).json()] == ["j2"]
        assert len(client.get("/api/jobs", params={"status": "all"}).json()) == 2
        assert client.get("/api/jobs", params={"status": "bogus"}).status_code == 422

    def test_readiness(self, client):
        body = client.get("/api/jobs/j2/readiness").json()
        assert body["hasBlades"] is True
        assert body["hasScheduledDate"] is False
        assert body["canComplete"] is False
        body = client.get("/api/jobs/j2/readiness", params={"scheduledDate": "2026-02-21"}).json()
        assert body["canComplete"] is True

    def test_schedule_then_complete(self, client):
        resp = client.post("/api/jobs/j2/schedule", json={"scheduledDate": "2026-02-21"})
        assert resp.json()["status"] == "scheduled"
        resp = client.post("/api/jobs/j2/complete", json={"price": "55"})
        assert resp.status_code == 200
        assert resp.json()["status"] == "completed"
        assert resp.json()["price"] == 55
        counts = client.get("/api/inventory", headers=ADMIN).json()["counts"]
        assert counts['12"'] == 3

    def test_completed_is_terminal(self, client):
        assert client.post("/api/jobs/j1/complete", json={}).status_code == 200
        assert client.post("/api/jobs/j1/complete", json={}).status_code == 409
        assert client.post("/api/jobs/j1/schedule", json={"scheduledDate": "2026-03-01"}).status_code == 409

    def test_out_of_stock_rejected(self, client):
        client.put('/api/inventory/18"', headers=ADMIN, json={"quantity": 0})
        resp = client.post("/api/jobs/j1/complete", json={})
        assert resp.status_code == 409
        assert client.get("/api/jobs/j1").json()["status"] == "scheduled"

    def test_schedule_needs_date(self, client):
        assert client.post("/api/jobs/j2/schedule", json={}).status_code == 409


# ---------------------------------------------------------------------------
# Inventory, Survey, Expenses, Profits
# ---------------------------------------------------------------------------


class TestInventory:
    def test_set_stock(self, client):
        resp = client.put('/api/inventory/26"', headers=ADMIN, json={"quantity": "3"})
        assert resp.json() == {"size": '26"', "quantity": 3}

    @pytest.mark.parametrize("value", ["abc", -1, "2.5"])
    def test_set_stock_invalid(self, client, value):
        resp = client.put('/api/inventory/26"', headers=ADMIN, json={"quantity": value})
        assert resp.status_code == 422

    def test_adjust(self, client):
        resp = client.post('/api/inventory/21"/adjust', headers=ADMIN, json={"delta": -9})
        assert resp.json()["quantity"] == 0

    def test_shopping_list(self, client):
        client.put('/api/inventory/12"', headers=ADMIN, json={"quantity": 0})
        body = client.get("/api/inventory/shopping-list", headers=ADMIN).json()
        assert body["toBuy"] == {'12"': 1}
        assert body["allInStock"] is False

    def test_survey(self, client):
        resp = client.post(
            "/api/survey",
            headers=ADMIN,
            json={"name": "Earl Ave", "vehicles": [{"make": "Toyota", "model": "Camry"}, {"make": "Yugo", "model": "GV"}]},
        )
        body = resp.json()
        assert body["unknownVehicles"] == 1
        assert {line["size"] for line in body["lines"]} == {'26"', '18"'}
        assert all(line["considerBuying"] == 0 for line in body["lines"])


class TestProfits:
    def test_expense_validation(self, client):
        bad = client.post("/api/expenses", headers=ADMIN, json={"description": "", "amount": 5})
        assert bad.status_code == 422
        bad = client.post("/api/expenses", headers=ADMIN, json={"description": "Gas", "amount": "x"})
        assert bad.status_code == 422

    def test_add_expense(self, client):
        resp = client.post(
            "/api/expenses",
            headers=ADMIN,
            json={"description": "Gas", "amount": "12.50", "category": "fuel"},
        )
        assert resp.status_code == 201
        assert resp.json()["category"] == "transport"
        assert resp.json()["id"].startswith("e")

    def test_profits(self, client):
        client.post("/api/jobs/j1/complete", json={})
        body = client.get("/api/profits", params={"range": "all"}, headers=ADMIN).json()
        assert body["totalRevenue"] == 35
        assert body["totalBladeCost"] == 14
        assert body["pipelineJobs"] == 1
        assert body["timeRange"] == "all"

    def test_calendar(self, client):
        body = client.get("/api/calendar", params={"year": 2026, "month": 2}, headers=ADMIN).json()
        assert list(body["days"]) == ["2026-02-15"]


# ---------------------------------------------------------------------------
# Geocoding
# ---------------------------------------------------------------------------


class TestGeocode:
    def test_search(self, client):
        body = client.get("/api/geocode/search", params={"q": "7337 Earl Ave"}).json()
        assert body["result"]["displayName"].startswith("7337")
        assert body["result"]["street"] == "7337 Earl Ave NW"

    def test_search_failure(self, client):
        body = client.get("/api/geocode/search", params={"q": "down"}).json()
        assert body == {"result": None, "message": "Could not verify address"}

    def test_suggest_includes_street(self, client):
        body = client.get("/api/geocode/suggest", params={"q": "Earl Ave"}).json()
        assert [s["street"] for s in body["suggestions"]] == ["7337 Earl Ave NW"]

    def test_suggest_short_query(self, client):
        assert client.get("/api/geocode/suggest", params={"q": "ab"}).json() == {"suggestions": []}
