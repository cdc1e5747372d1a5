"""Hosted Backend Client — table queries, counts and health over the resilient fetch.

Invariants:
    - Every HTTP call goes through ResilientFetch (single retry/timeout policy)
    - Non-2xx responses raise BackendError carrying the backend's code/message/details/hint
    - Transport failures left after the retry budget raise BackendUnavailableError
    - Requests authenticate with the anon key unless a user access_token is passed
    - update()/delete() refuse to run without at least one filter

Design Decisions:
    - Explicitly constructed client (built in the FastAPI lifespan, closed on shutdown):
      no module-level singleton
    - httpx timeout disabled: the per-attempt deadline in ResilientFetch is the only clock
    - TableQuery is a small fluent builder over PostgREST query params
      (col=eq.value, order=col.desc, limit=n) rather than a full SDK
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from seminary_site.core.errors import (
    BackendError, BackendUnavailableError, ErrorContext,
)
from seminary_site.infrastructure.auth import AuthClient
from seminary_site.infrastructure.storage import DEFAULT_CHUNK_SIZE, StorageClient
from seminary_site.infrastructure.resilient_fetch import (
    MAX_RETRIES,
    RETRY_DELAY_MS,
    TIMEOUT_SECONDS,
    TRANSIENT_ERRORS,
    ResilientFetch,
)

logger = logging.getLogger(__name__)

_OBJECT_ACCEPT = "application/vnd.pgrst.object+json"


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def backend_error_from_response(
    response: httpx.Response, resource: str | None = None,
) -> BackendError:
    """Build BackendError from a PostgREST, GoTrue or Storage error payload."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    message = (
        body.get("message")
        or body.get("error_description")
        or body.get("msg")
        or body.get("error")
        or response.reason_phrase
        or f"HTTP {response.status_code}"
    )
    code = body.get("code") if isinstance(body.get("code"), str) else None
    return BackendError(
        str(message),
        backend_code=code,
        details=body.get("details"),
        hint=body.get("hint"),
        status_code=response.status_code,
        context=ErrorContext(resource=resource),
    )


class HostedBackendClient:
    """HTTP client for the hosted backend's table, storage and auth APIs."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        max_retries: int = MAX_RETRIES,
        timeout_seconds: float = TIMEOUT_SECONDS,
        retry_delay_ms: int = RETRY_DELAY_MS,
        retry_client_errors: bool = False,
        upload_chunk_size: int = DEFAULT_CHUNK_SIZE,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"apikey": api_key},
            transport=transport,
            timeout=None,
        )
        self.fetch = ResilientFetch(
            self._http,
            max_retries=max_retries,
            timeout_seconds=timeout_seconds,
            retry_delay_ms=retry_delay_ms,
            retry_client_errors=retry_client_errors,
            sleep=sleep,
        )
        self.auth = AuthClient(self)
        self.storage = StorageClient(self, upload_chunk_size)

    def auth_headers(self, access_token: str | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {access_token or self.api_key}"}

    async def request(
        self,
        method: str,
        path: str,
        *,
        access_token: str | None = None,
        headers: dict[str, str] | None = None,
        resource: str | None = None,
        **options,
    ) -> httpx.Response:
        """Send a request; map transport failures and error payloads to SiteErrors."""
        merged = {**self.auth_headers(access_token), **(headers or {})}
        try:
            response = await self.fetch(
                path, method=method, headers=merged, **options,
            )
        except TRANSIENT_ERRORS as e:
            raise BackendUnavailableError(
                f"Failed to fetch {path}: {e}",
                context=ErrorContext(resource=resource),
            ) from e
        if response.is_error:
            error = backend_error_from_response(response, resource)
            logger.warning(
                f"Backend rejected {method} {path}: {error.message}",
                extra={
                    "status_code": response.status_code,
                    "error_code": error.backend_code,
                    "table": resource,
                },
            )
            raise error
        return response

    def table(self, name: str) -> "TableQuery":
        return TableQuery(self, name)

    async def count(self, table: str, access_token: str | None = None) -> int:
        """Exact row count for a table (Content-Range total)."""
        response = await self.request(
            "HEAD", f"/rest/v1/{table}",
            params={"select": "id"},
            headers={"Prefer": "count=exact"},
            access_token=access_token,
            resource=table,
        )
        content_range = response.headers.get("content-range", "")
        total = content_range.rpartition("/")[2]
        return int(total) if total.isdigit() else 0

    async def health_check(self) -> bool:
        """Check hosted backend connectivity (for readiness probes)."""
        try:
            await self.request("GET", "/rest/v1/")
            return True
        except Exception as e:
            logger.error(f"Backend health check failed: {e}")
            return False

    async def aclose(self) -> None:
        await self._http.aclose()


class TableQuery:
    """Fluent PostgREST query for one table."""

    def __init__(self, client: HostedBackendClient, table: str):
        self._client = client
        self.table = table
        self._method = "GET"
        self._columns = "*"
        self._filters: list[tuple[str, str]] = []
        self._orders: list[str] = []
        self._limit: int | None = None
        self._single = False
        self._body: Any = None

    # -- Verbs -----------------------------------------------------------------

    def select(self, columns: str = "*") -> "TableQuery":
        self._method = "GET"
        self._columns = columns
        return self

    def insert(self, rows: dict | list[dict]) -> "TableQuery":
        self._method = "POST"
        self._body = rows
        return self

    def update(self, values: dict) -> "TableQuery":
        self._method = "PATCH"
        self._body = values
        return self

    def delete(self) -> "TableQuery":
        self._method = "DELETE"
        return self

    # -- Modifiers -------------------------------------------------------------

    def eq(self, column: str, value: Any) -> "TableQuery":
        if value is None:
            self._filters.append((column, "is.null"))
        else:
            self._filters.append((column, f"eq.{_filter_value(value)}"))
        return self

    def neq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"neq.{_filter_value(value)}"))
        return self

    def ilike(self, column: str, pattern: str) -> "TableQuery":
        self._filters.append((column, f"ilike.{pattern}"))
        return self

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self._orders.append(f"{column}.{'asc' if ascending else 'desc'}")
        return self

    def limit(self, count: int) -> "TableQuery":
        self._limit = count
        return self

    def single(self) -> "TableQuery":
        self._single = True
        return self

    # -- Execution -------------------------------------------------------------

    def build_params(self) -> list[tuple[str, str]]:
        params = [("select", self._columns)]
        params.extend(self._filters)
        if self._orders:
            params.append(("order", ",".join(self._orders)))
        if self._limit is not None:
            params.append(("limit", str(self._limit)))
        return params

    def build_headers(self) -> dict[str, str]:
        headers = {}
        if self._method != "GET":
            headers["Prefer"] = "return=representation"
        if self._single:
            headers["Accept"] = _OBJECT_ACCEPT
        return headers

    async def execute(self, access_token: str | None = None) -> Any:
        """Run the query. Returns a list of rows, or one row for single()."""
        if self._method in ("PATCH", "DELETE") and not self._filters:
            raise ValueError(f"{self._method} on {self.table} requires a filter")
        options: dict[str, Any] = {}
        if self._body is not None:
            options["json"] = self._body
        response = await self._client.request(
            self._method,
            f"/rest/v1/{self.table}",
            params=self.build_params(),
            headers=self.build_headers(),
            access_token=access_token,
            resource=self.table,
            **options,
        )
        if not response.content:
            return None if self._single else []
        return response.json()
