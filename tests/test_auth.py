"""Tests for PIN and profile-based role resolution."""

from clearview.core.enums import Role, View
from clearview.services.auth import (
    bearer_token,
    check_pin,
    resolve_access,
    role_for_pin,
    role_for_user,
)
from clearview.services.store import USERS, InMemoryStore, StoreError


class BrokenStore(InMemoryStore):
    def get(self, collection, record_id):
        raise StoreError("down")


class SessionStore(InMemoryStore):
    """In-memory store that knows a fixed set of session tokens."""

    def __init__(self, seed=None, sessions=None):
        super().__init__(seed)
        self.sessions = sessions or {}

    def verify_token(self, token):
        return self.sessions.get(token)


class TestPin:
    def test_correct_pin(self):
        assert check_pin("1313", "1313")
        assert check_pin(" 1313 ", "1313")

    def test_wrong_pin(self):
        assert not check_pin("1234", "1313")
        assert not check_pin("", "1313")
        assert not check_pin(None, "1313")

    def test_role_for_pin(self):
        assert role_for_pin("1313", "1313") is Role.ADMIN
        assert role_for_pin("0000", "1313") is Role.EMPLOYEE


class TestUserProfile:
    def test_employee_profile(self):
        store = InMemoryStore({USERS: [{"id": "u1", "role": "employee"}]})
        assert role_for_user(store, "u1") is Role.EMPLOYEE

    def test_admin_or_missing_profile(self):
        store = InMemoryStore({USERS: [{"id": "u1", "role": "admin"}]})
        assert role_for_user(store, "u1") is Role.ADMIN
        assert role_for_user(store, "u2") is Role.ADMIN

    def test_lookup_failure_falls_back_to_admin(self):
        assert role_for_user(BrokenStore(), "u1") is Role.ADMIN

    def test_verified_token_takes_precedence_over_pin(self):
        store = SessionStore({USERS: [{"id": "u1", "role": "employee"}]}, {"tok-1": "u1"})
        access = resolve_access(store, "1313", pin="1313", token="tok-1")
        assert access.role is Role.EMPLOYEE
        assert access.user_id == "u1"

    def test_unverified_token_is_ignored(self):
        store = SessionStore(sessions={"tok-1": "u1"})
        assert resolve_access(store, "1313", token="forged").role is Role.EMPLOYEE
        assert resolve_access(store, "1313", pin="1313", token="forged").role is Role.ADMIN

    def test_store_without_auth_verifies_nothing(self):
        access = resolve_access(InMemoryStore(), "1313", token="anything")
        assert access.role is Role.EMPLOYEE
        assert access.user_id is None

    def test_malformed_profile_is_admin(self):
        store = InMemoryStore({USERS: [{"id": "u1", "role": 5}]})
        assert role_for_user(store, "u1") is Role.ADMIN


class TestViews:
    def test_employee_views(self):
        access = resolve_access(InMemoryStore(), "1313")
        assert access.views == [View.HOME, View.JOBS]
        assert not access.can_view(View.PROFITS)

    def test_admin_sees_everything(self):
        access = resolve_access(InMemoryStore(), "1313", pin="1313")
        assert access.views == list(View)


class TestBearerToken:
    def test_parses_bearer_header(self):
        assert bearer_token("Bearer abc.def") == "abc.def"
        assert bearer_token("bearer  abc ") == "abc"

    def test_rejects_other_schemes(self):
        assert bearer_token("Basic dXNlcjpwYXNz") is None
        assert bearer_token("Bearer ") is None
        assert bearer_token(None) is None
