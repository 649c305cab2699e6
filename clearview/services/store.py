"""Document store boundary.

The app reads collections with subscribe-and-replace semantics and writes
with upsert-by-id. Two implementations:

* ``SupabaseStore``: one table per collection, rows ``{id text, doc jsonb}``.
  Subscribers get a fresh snapshot after every write made through the store
  and whenever ``refresh()`` is called.
* ``InMemoryStore``: process-local dicts, seeded with demo data when no
  Supabase project is configured.

Collections: ``customers``, ``jobs``, ``expenses``, ``users`` and ``data``
(which holds the singleton ``inventory`` document).
"""

import copy
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from typing import Any

from supabase import Client, create_client

from clearview.config import get_settings
from clearview.core.logging import log_db_query, log_error, logger
from clearview.data.demo import demo_documents
from clearview.models.vehicle import utc_now

Record = dict[str, Any]
Listener = Callable[[list[Record]], None]

CUSTOMERS = "customers"
JOBS = "jobs"
EXPENSES = "expenses"
USERS = "users"
DATA = "data"
INVENTORY_ID = "inventory"


class StoreError(RuntimeError):
    """The document store could not complete an operation."""


class DocumentStore(ABC):
    """Minimal document-database contract used by the app."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = {}
        self._listeners_lock = threading.Lock()

    # --- reads / writes -------------------------------------------------

    @abstractmethod
    def snapshot(self, collection: str) -> list[Record]:
        """All documents in a collection."""

    @abstractmethod
    def get(self, collection: str, record_id: str) -> Record | None:
        """One document by id, or None."""

    @abstractmethod
    def query_by_field(self, collection: str, field: str, value: Any) -> list[Record]:
        """Documents whose top-level ``field`` equals ``value``."""

    @abstractmethod
    def _write(self, collection: str, record_id: str, record: Record) -> None:
        """Insert or replace one document."""

    def upsert(self, collection: str, record_id: str, record: Record) -> None:
        """Insert or replace a document, then notify subscribers."""
        self._write(collection, record_id, {**record, "id": record_id})
        self._notify(collection)

    def update_fields(self, collection: str, record_id: str, fields: Record) -> bool:
        """Merge ``fields`` into an existing document. False if it is missing."""
        current = self.get(collection, record_id)
        if current is None:
            return False
        self._write(collection, record_id, {**current, **fields})
        self._notify(collection)
        return True

    def verify_token(self, token: str) -> str | None:
        """User id for a signed-in session token; None when it cannot be verified.

        Stores without an auth backend verify nothing.
        """
        return None

    # --- subscriptions --------------------------------------------------

    def subscribe(self, collection: str, on_change: Listener) -> Callable[[], None]:
        """Call ``on_change`` with the collection now and after every change.

        Returns an unsubscribe function.
        """
        with self._listeners_lock:
            self._listeners.setdefault(collection, []).append(on_change)
        on_change(self.snapshot(collection))

        def unsubscribe() -> None:
            with self._listeners_lock:
                listeners = self._listeners.get(collection, [])
                if on_change in listeners:
                    listeners.remove(on_change)

        return unsubscribe

    def refresh(self, collection: str | None = None) -> None:
        """Re-read collections and push snapshots to subscribers."""
        with self._listeners_lock:
            names = [collection] if collection else list(self._listeners)
        for name in names:
            self._notify(name)

    def _notify(self, collection: str) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners.get(collection, []))
        if not listeners:
            return
        snapshot = self.snapshot(collection)
        for listener in listeners:
            try:
                listener(copy.deepcopy(snapshot))
            except Exception as e:
                # One broken view must not block the write or other views
                log_error("Subscriber failed", e, collection=collection)


class InMemoryStore(DocumentStore):
    """Process-local store. Last writer wins."""

    def __init__(self, seed: dict[str, list[Record]] | None = None) -> None:
        super().__init__()
        self._lock = threading.Lock()
        self._collections: dict[str, dict[str, Record]] = {}
        for collection, records in (seed or {}).items():
            self._collections[collection] = {
                r["id"]: copy.deepcopy(r) for r in records if "id" in r
            }

    @classmethod
    def with_demo_data(cls, now: datetime | None = None) -> "InMemoryStore":
        return cls(demo_documents(now or utc_now()))

    def snapshot(self, collection: str) -> list[Record]:
        with self._lock:
            return [copy.deepcopy(r) for r in self._collections.get(collection, {}).values()]

    def get(self, collection: str, record_id: str) -> Record | None:
        with self._lock:
            record = self._collections.get(collection, {}).get(record_id)
            return copy.deepcopy(record) if record is not None else None

    def query_by_field(self, collection: str, field: str, value: Any) -> list[Record]:
        return [r for r in self.snapshot(collection) if r.get(field) == value]

    def _write(self, collection: str, record_id: str, record: Record) -> None:
        with self._lock:
            self._collections.setdefault(collection, {})[record_id] = copy.deepcopy(record)
        log_db_query("upsert", collection)


class SupabaseStore(DocumentStore):
    """Documents kept as JSON in Supabase tables (``id``, ``doc`` columns)."""

    def __init__(self, client: Client) -> None:
        super().__init__()
        self.client = client

    def _execute(self, operation: str, collection: str, build: Callable[[], Any]) -> Any:
        start = time.time()
        try:
            result = build().execute()
        except Exception as e:
            log_error(f"Supabase {operation} failed", e, collection=collection)
            raise StoreError(f"{operation} on {collection} failed") from e
        log_db_query(operation, collection, (time.time() - start) * 1000)
        return result

    @staticmethod
    def _docs(result: Any) -> list[Record]:
        if not result.data or not isinstance(result.data, list):
            return []
        return [
            row["doc"]
            for row in result.data
            if isinstance(row, dict) and isinstance(row.get("doc"), dict)
        ]

    def snapshot(self, collection: str) -> list[Record]:
        result = self._execute(
            "snapshot", collection, lambda: self.client.table(collection).select("id, doc")
        )
        return self._docs(result)

    def get(self, collection: str, record_id: str) -> Record | None:
        result = self._execute(
            "get",
            collection,
            lambda: self.client.table(collection)
            .select("id, doc")
            .eq("id", record_id)
            .limit(1),
        )
        docs = self._docs(result)
        return docs[0] if docs else None

    def query_by_field(self, collection: str, field: str, value: Any) -> list[Record]:
        result = self._execute(
            "query",
            collection,
            lambda: self.client.table(collection)
            .select("id, doc")
            .eq(f"doc->>{field}", str(value)),
        )
        return self._docs(result)

    def verify_token(self, token: str) -> str | None:
        """Check a session token with Supabase Auth."""
        start = time.time()
        try:
            response = self.client.auth.get_user(token)
        except Exception as e:
            log_error("Supabase token check failed", e)
            return None
        log_db_query("verify_token", "auth", (time.time() - start) * 1000)
        user = getattr(response, "user", None)
        return user.id if user is not None else None

    def _write(self, collection: str, record_id: str, record: Record) -> None:
        self._execute(
            "upsert",
            collection,
            lambda: self.client.table(collection).upsert({"id": record_id, "doc": record}),
        )


_store: DocumentStore | None = None
_store_lock = threading.Lock()


def get_store() -> DocumentStore:
    """Get or create the shared store (thread-safe).

    Uses Supabase when configured, otherwise an in-memory store with demo
    data.
    """
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                settings = get_settings()
                if settings.use_supabase:
                    client = create_client(settings.supabase_url, settings.supabase_key)
                    _store = SupabaseStore(client)
                    logger.info("Using Supabase document store")
                else:
                    _store = InMemoryStore.with_demo_data()
                    logger.info("SUPABASE_URL not set - using in-memory demo store")
    return _store
