"""
Shared test fixtures.

The Supabase client is replaced by an in-memory fake that keeps rows per
table and applies eq/ilike/in_ filters, so importer tests can assert on
what was actually written.
"""

import os
import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Settings require these at import time
os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")

import importlib
import re
from contextlib import ExitStack
from datetime import datetime, timedelta
from typing import Any, Callable, Generator, Optional
from unittest.mock import patch
from uuid import uuid4

import pytest

from tests.factories import CompanyFactory

# ===================
# MOCK SUPABASE CLIENT
# ===================

_BASE_TIME = datetime(2025, 1, 1, 12, 0, 0)


class MockSupabaseResponse:
    """Mock Supabase query response."""

    def __init__(self, data: Any = None, count: Optional[int] = None):
        self.data = data if data is not None else []
        if count is not None:
            self.count = count
        else:
            self.count = len(self.data) if isinstance(self.data, list) else None


def _ilike_to_regex(pattern: str) -> re.Pattern:
    """Translate an ILIKE pattern to a regex, with PostgREST's "*" alias for "%"."""
    parts = []
    chars = iter(pattern)
    for char in chars:
        if char == "\\":
            parts.append(re.escape(next(chars, "\\")))
        elif char in "%*":
            parts.append(".*")
        elif char == "_":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


class MockSupabaseQuery:
    """Chainable query against one in-memory table."""

    def __init__(self, client: "MockSupabaseClient", table: str, operation: str, payload: Any = None):
        self._client = client
        self._table = table
        self._operation = operation
        self._payload = payload
        self._filters: list[Callable[[dict], bool]] = []
        self._order: Optional[tuple[str, bool]] = None
        self._limit: Optional[int] = None
        self._offset = 0
        self._is_single = False

    def select(self, *args, **kwargs):
        return self

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column, value):
        self._filters.append(lambda row: row.get(column) != value)
        return self

    def ilike(self, column, pattern):
        regex = _ilike_to_regex(pattern)
        self._filters.append(
            lambda row: row.get(column) is not None and regex.fullmatch(str(row.get(column))) is not None
        )
        return self

    def in_(self, column, values):
        allowed = list(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    def order(self, column, desc: bool = False, **kwargs):
        self._order = (column, desc)
        return self

    def limit(self, count):
        self._limit = count
        return self

    def range(self, start, end):
        self._offset = start
        self._limit = end - start + 1
        return self

    def single(self):
        self._is_single = True
        return self

    def _matching(self) -> list[dict]:
        rows = self._client._tables.setdefault(self._table, [])
        return [row for row in rows if all(f(row) for f in self._filters)]

    def execute(self) -> MockSupabaseResponse:
        self._client._maybe_fail(self._table, self._operation)

        if self._operation == "insert":
            return MockSupabaseResponse(data=self._client._insert(self._table, self._payload))

        if self._operation == "update":
            updated = []
            for row in self._matching():
                row.update(self._payload)
                row["updated_at"] = datetime.utcnow().isoformat()
                updated.append(dict(row))
            return MockSupabaseResponse(data=updated)

        if self._operation == "delete":
            matched = self._matching()
            rows = self._client._tables[self._table]
            self._client._tables[self._table] = [r for r in rows if r not in matched]
            return MockSupabaseResponse(data=matched)

        rows = self._matching()
        total = len(rows)
        if self._order:
            column, desc = self._order
            rows = sorted(rows, key=lambda r: (r.get(column) is None, r.get(column) or ""), reverse=desc)
        rows = rows[self._offset:]
        if self._limit is not None:
            rows = rows[:self._limit]
        rows = [dict(row) for row in rows]

        if self._is_single:
            return MockSupabaseResponse(data=rows[0] if rows else None, count=1 if rows else 0)
        return MockSupabaseResponse(data=rows, count=total)


class MockSupabaseTable:
    """Entry point for queries on one table."""

    def __init__(self, client: "MockSupabaseClient", name: str):
        self._client = client
        self._name = name

    def select(self, *args, **kwargs):
        return MockSupabaseQuery(self._client, self._name, "select")

    def insert(self, data):
        return MockSupabaseQuery(self._client, self._name, "insert", data)

    def update(self, data):
        return MockSupabaseQuery(self._client, self._name, "update", data)

    def delete(self):
        return MockSupabaseQuery(self._client, self._name, "delete")


class MockSupabaseRpc:
    def __init__(self, client: "MockSupabaseClient", name: str, params: dict):
        self._client = client
        self._name = name
        self._params = params

    def execute(self) -> MockSupabaseResponse:
        self._client._maybe_fail(f"rpc:{self._name}", "rpc")
        if self._name != "next_sequence_value":
            raise ValueError(f"Unknown function {self._name}")
        key = (self._params["p_company_id"], self._params["p_sequence"])
        self._client.counters[key] = self._client.counters.get(key, 0) + 1
        return MockSupabaseResponse(data=self._client.counters[key])


class MockSupabaseClient:
    """
    In-memory Supabase client.

    Usage:
        mock_supabase.set_table_data("customers", [{"id": "c1", ...}])
        mock_supabase.fail_on("expenses", "insert", httpx.ConnectError("down"))
        mock_supabase.rows("expenses")
    """

    def __init__(self):
        self._tables: dict[str, list[dict]] = {}
        self._failures: dict[tuple[str, str], tuple[Exception, int]] = {}
        self._inserted = 0
        self.counters: dict[tuple[str, str], int] = {}

    def set_table_data(self, table_name: str, data: list, count: int = None):
        """Configure rows for a table (count is accepted for compatibility)."""
        self._tables[table_name] = [dict(row) for row in data]

    def rows(self, table_name: str) -> list[dict]:
        return self._tables.get(table_name, [])

    def fail_on(self, table_name: str, operation: str, error: Exception, after: int = 0):
        """Raise `error` on `operation` against the table, after `after` successful calls."""
        self._failures[(table_name, operation)] = (error, after)

    def _maybe_fail(self, table_name: str, operation: str):
        failure = self._failures.get((table_name, operation))
        if failure is None:
            return
        error, remaining = failure
        if remaining > 0:
            self._failures[(table_name, operation)] = (error, remaining - 1)
            return
        raise error

    def _insert(self, table_name: str, data) -> list[dict]:
        items = data if isinstance(data, list) else [data]
        rows = self._tables.setdefault(table_name, [])
        inserted = []
        for item in items:
            self._inserted += 1
            row = dict(item)
            row.setdefault("id", str(uuid4()))
            row.setdefault("created_at", (_BASE_TIME + timedelta(seconds=self._inserted)).isoformat())
            rows.append(row)
            inserted.append(dict(row))
        return inserted

    def table(self, name: str) -> MockSupabaseTable:
        return MockSupabaseTable(self, name)

    def rpc(self, name: str, params: dict) -> MockSupabaseRpc:
        return MockSupabaseRpc(self, name, params)


# ===================
# FIXTURES
# ===================

CLIENT_MODULES = [
    "config.database",
    "services.company_scoped_service",
    "services.company_service",
    "services.sequence_service",
    "services.import_job_service",
]

SINGLETON_MODULES = [
    "services.company_service",
    "services.customer_service",
    "services.vendor_service",
    "services.product_service",
    "services.expense_service",
    "services.transaction_service",
    "services.invoice_service",
    "services.sequence_service",
    "services.import_job_service",
    "services.import_service",
]


def _reset_singletons():
    for name in SINGLETON_MODULES:
        importlib.import_module(name)._service = None


@pytest.fixture
def mock_supabase() -> MockSupabaseClient:
    """Create an empty in-memory Supabase client."""
    return MockSupabaseClient()


@pytest.fixture
def mock_db(mock_supabase) -> Generator:
    """
    Patch the database client with the fake in every service module.

    Usage:
        def test_something(mock_db, mock_supabase):
            mock_supabase.set_table_data("customers", [...])
            # Now any code using get_supabase_client() gets the fake
    """
    _reset_singletons()
    with ExitStack() as stack:
        for module in CLIENT_MODULES:
            stack.enter_context(
                patch(f"{module}.get_supabase_client", return_value=mock_supabase)
            )
        yield mock_supabase
    _reset_singletons()


@pytest.fixture
def company(mock_db, mock_supabase) -> dict:
    """A company with user-1 as member."""
    company = CompanyFactory.create(id="company-1")
    mock_supabase.set_table_data("companies", [company])
    mock_supabase.set_table_data("company_users", [
        CompanyFactory.membership(company["id"], "user-1")
    ])
    return company


@pytest.fixture
def import_context(company):
    """ImportContext for company-1 / user-1."""
    from importers import ImportContext

    return ImportContext(company_id=company["id"], user_id="user-1")


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client(mock_db, monkeypatch):
    """
    FastAPI test client backed by the fake database.

    Usage:
        def test_endpoint(test_client, company):
            response = test_client.post("/api/tools/excel/import", json={...},
                                        headers={"X-User-Id": "user-1"})
    """
    from fastapi.testclient import TestClient
    from config import settings
    from main import app

    monkeypatch.setattr(settings, "api_key", None)
    return TestClient(app)
