"""Shared fixtures: in-memory Supabase and mailer fakes wired into the app."""

from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from email_service.resend_adapter import ResendMailer
from hospital_api.main import create_app
from hospital_api.utils.config import Settings
from supabase_service.supabase_adapter import SupabaseError

BASE_CREATED_AT = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _as_naive_utc(value: Any) -> datetime:
    if isinstance(value, datetime):
        moment = value
    else:
        moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def _matches(row: Dict[str, Any], filters: Sequence[Tuple[str, str, Any]]) -> bool:
    for column, operator, value in filters:
        current = row.get(column)
        if operator == "eq":
            if current is None or str(current) != str(value):
                return False
            continue

        if current is None:
            return False
        left, right = _as_naive_utc(current), _as_naive_utc(value)
        if operator == "gte" and not left >= right:
            return False
        if operator == "lte" and not left <= right:
            return False
        if operator == "lt" and not left < right:
            return False
    return True


class FakeSupabase:
    """Stands in for both the anon and the service-role adapters."""

    def __init__(self) -> None:
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            "patients": [],
            "doctors": [],
            "appointments": [],
        }
        self.auth_users: List[Dict[str, Any]] = []
        self.count_overrides: Dict[str, Optional[int]] = {}
        self.calls: List[Tuple[str, str]] = []
        self._failures: Dict[Tuple[str, Optional[str]], Exception] = {}
        self._ids = itertools.count(1)

    def fail(
        self,
        method: str,
        table: Optional[str] = None,
        message: str = "backend unavailable",
        error: Optional[Exception] = None,
    ) -> None:
        self._failures[(method, table)] = error or SupabaseError(message, status_code=500)

    def seed(self, table: str, **row: Any) -> Dict[str, Any]:
        return self._store(table, row)

    def _check_failure(self, method: str, table: Optional[str]) -> None:
        self.calls.append((method, table or ""))
        error = self._failures.get((method, table)) or self._failures.get((method, None))
        if error is not None:
            raise error

    def _store(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        row_id = next(self._ids)
        stored = {"id": row_id, **row}
        stored.setdefault("created_at", (BASE_CREATED_AT + timedelta(minutes=row_id)).isoformat())
        self.tables.setdefault(table, []).append(stored)
        return dict(stored)

    def _project(self, table: str, row: Dict[str, Any], columns: str) -> Dict[str, Any]:
        if columns == "*":
            return dict(row)
        if columns.startswith("*,patients("):
            projected = dict(row)
            patient = next(
                (item for item in self.tables["patients"] if item["id"] == row.get("patient_id")),
                None,
            )
            projected["patients"] = (
                {"name": patient.get("name"), "contact_number": patient.get("contact_number")}
                if patient
                else None
            )
            return projected
        return {column: row.get(column) for column in columns.split(",")}

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Sequence[Tuple[str, str, Any]] = (),
        order: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Dict[str, Any]]:
        self._check_failure("select", table)
        rows = [row for row in self.tables.get(table, []) if _matches(row, filters)]
        if order:
            rows.sort(key=lambda row: _as_naive_utc(row[order]), reverse=not ascending)
        return [self._project(table, row, columns) for row in rows]

    async def select_maybe_single(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Sequence[Tuple[str, str, Any]] = (),
    ) -> Optional[Dict[str, Any]]:
        rows = await self.select(table, columns=columns, filters=filters)
        if len(rows) > 1:
            raise SupabaseError("JSON object requested, multiple (or no) rows returned")
        return rows[0] if rows else None

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        self._check_failure("insert", table)
        return self._store(table, row)

    async def count(self, table: str, *, filters: Sequence[Tuple[str, str, Any]] = ()) -> Optional[int]:
        self._check_failure("count", table)
        if table in self.count_overrides and not filters:
            return self.count_overrides[table]
        return len([row for row in self.tables.get(table, []) if _matches(row, filters)])

    async def create_auth_user(
        self,
        *,
        email: Optional[str],
        password: str,
        user_metadata: Optional[Dict[str, Any]] = None,
        email_confirm: bool = True,
    ) -> Dict[str, Any]:
        self._check_failure("create_auth_user", None)
        user = {
            "id": f"user-{len(self.auth_users) + 1}",
            "email": email,
            "email_confirmed": email_confirm,
            "user_metadata": user_metadata or {},
        }
        self.auth_users.append(user)
        return user


class FakeMailer(ResendMailer):
    """Records messages instead of calling Resend."""

    def __init__(self, *, api_key: Optional[str] = "re_test", redirect_to: Optional[str] = None) -> None:
        super().__init__(api_key=api_key, redirect_to=redirect_to)
        self.sent: List[Dict[str, Any]] = []
        self.error: Optional[Exception] = None

    def send(self, *, subject: str, html: str, to: Any = None) -> Dict[str, Any]:
        if self.error is not None:
            raise self.error
        message = {"subject": subject, "html": html, "to": self.resolve_recipients(to)}
        self.sent.append(message)
        return {"id": f"email-{len(self.sent)}"}


@pytest.fixture
def backend() -> FakeSupabase:
    return FakeSupabase()


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, log_level="WARNING")


@pytest.fixture
def app(settings: Settings, backend: FakeSupabase, mailer: FakeMailer):
    return create_app(settings, data_client=backend, admin_client=backend, mailer=mailer)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def client_with_mailer(settings: Settings, backend: FakeSupabase):
    """Build a client around a mailer configured per test."""

    def _build(**mailer_kwargs: Any) -> Tuple[TestClient, FakeMailer]:
        custom_mailer = FakeMailer(**mailer_kwargs)
        custom_app = create_app(settings, data_client=backend, admin_client=backend, mailer=custom_mailer)
        return TestClient(custom_app), custom_mailer

    return _build
