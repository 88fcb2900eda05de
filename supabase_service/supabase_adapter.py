"""Supabase REST adapter (PostgREST tables + GoTrue admin)."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx

LOGGER = logging.getLogger(__name__)

Filter = Tuple[str, str, Any]

SUPPORTED_OPERATORS = {"eq", "gte", "lte", "lt"}


class SupabaseError(Exception):
    """Error reported by Supabase or raised while talking to it."""

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code


class SupabaseAdapter:
    """Adapter for the Supabase table and identity admin REST APIs.

    One adapter is bound to one key. The anon key is used for table access,
    the service-role key for identity administration. Every call opens its own
    short-lived HTTP client.
    """

    def __init__(
        self,
        *,
        url: str,
        api_key: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url.rstrip("/")
        self.api_key = api_key
        self._timeout = timeout_seconds
        self._transport = transport

    # ---------------------------------------------------------------------
    # Table API
    # ---------------------------------------------------------------------
    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Dict[str, Any]]:
        """Return rows of ``table`` matching every filter."""

        params = self._build_query_params(columns=columns, filters=filters)
        if order:
            params.append(("order", f"{order}.{'asc' if ascending else 'desc'}"))

        response = await self._request("GET", self._table_path(table), params=params)
        return response.json()

    async def select_maybe_single(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Sequence[Filter] = (),
    ) -> Optional[Dict[str, Any]]:
        """Return the single matching row, ``None`` when nothing matches.

        More than one match is an error, the same way PostgREST treats a
        single-object request.
        """

        rows = await self.select(table, columns=columns, filters=filters)
        if not rows:
            return None
        if len(rows) > 1:
            raise SupabaseError(
                "JSON object requested, multiple (or no) rows returned",
                code="PGRST116",
                details=f"The result contains {len(rows)} rows",
            )
        return rows[0]

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one row and return it as stored by the backend."""

        response = await self._request(
            "POST",
            self._table_path(table),
            json=[row],
            headers={"Prefer": "return=representation"},
        )
        rows = response.json()
        if not rows:
            raise SupabaseError(f"Insert into {table} returned no rows")
        return rows[0]

    async def count(self, table: str, *, filters: Sequence[Filter] = ()) -> Optional[int]:
        """Return the exact row count, ``None`` if the backend omits it."""

        params = self._build_query_params(columns="*", filters=filters)
        response = await self._request(
            "HEAD",
            self._table_path(table),
            params=params,
            headers={"Prefer": "count=exact"},
        )
        return self._parse_content_range(response.headers.get("content-range"))

    # ---------------------------------------------------------------------
    # Identity admin API
    # ---------------------------------------------------------------------
    async def create_auth_user(
        self,
        *,
        email: Optional[str],
        password: str,
        user_metadata: Optional[Dict[str, Any]] = None,
        email_confirm: bool = True,
    ) -> Dict[str, Any]:
        """Provision a login through the admin endpoint (service-role key)."""

        payload = {
            "email": email,
            "password": password,
            "email_confirm": email_confirm,
            "user_metadata": user_metadata or {},
        }
        response = await self._request("POST", "/auth/v1/admin/users", json=payload)
        user = response.json()
        # Older GoTrue releases wrap the record in {"user": {...}}.
        if isinstance(user, dict) and isinstance(user.get("user"), dict):
            return user["user"]
        return user

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _http_client(self) -> httpx.AsyncClient:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        return httpx.AsyncClient(
            base_url=self.url,
            headers=headers,
            timeout=self._timeout,
            transport=self._transport,
        )

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            async with self._http_client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            LOGGER.error("Supabase %s %s failed: %s", method, path, exc)
            raise SupabaseError(str(exc) or exc.__class__.__name__) from exc

        if response.is_error:
            error = self._coerce_error(response)
            LOGGER.error(
                "Supabase %s %s returned status=%s message=%s",
                method,
                path,
                response.status_code,
                error.message,
            )
            raise error

        return response

    @staticmethod
    def _table_path(table: str) -> str:
        return f"/rest/v1/{table}"

    @staticmethod
    def _build_query_params(
        *,
        columns: str,
        filters: Sequence[Filter],
    ) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = [("select", columns)]
        for column, operator, value in filters:
            if operator not in SUPPORTED_OPERATORS:
                raise ValueError(f"Unsupported filter operator: {operator}")
            params.append((column, f"{operator}.{value}"))
        return params

    @staticmethod
    def _parse_content_range(header: Optional[str]) -> Optional[int]:
        # "0-24/3573", "*/0" or "*/*" when the total is unknown.
        if not header or "/" not in header:
            return None

        total = header.rsplit("/", 1)[1]
        if not total.isdigit():
            return None
        return int(total)

    @staticmethod
    def _coerce_error(response: httpx.Response) -> SupabaseError:
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            message = response.text or f"HTTP {response.status_code}"
            return SupabaseError(message, status_code=response.status_code)

        message = (
            payload.get("message")
            or payload.get("msg")
            or payload.get("error_description")
            or payload.get("error")
            or f"HTTP {response.status_code}"
        )
        code = payload.get("code") or payload.get("error_code")
        return SupabaseError(
            str(message),
            code=str(code) if code is not None else None,
            details=payload.get("details"),
            status_code=response.status_code,
        )
