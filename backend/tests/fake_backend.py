"""Fake Hosted Backend — in-memory table, auth and storage APIs behind httpx.MockTransport.

Invariants:
    - Tables are lists of dict rows; inserted rows get an id and increasing created_at
    - Filters understood: eq., neq., is.null, ilike.*term*; order=col.asc|desc; limit
    - Single-object requests with no row answer 406 + PGRST116 like PostgREST
    - Deleting a parent row still referenced by a foreign key answers 409 + 23503
    - fail_tables[table] = (status, payload) makes every request to that table fail
    - fail_storage = (status, payload) makes every storage request fail

Design Decisions:
    - One handler covers /rest/v1, /auth/v1 and /storage/v1 so the real
      HostedBackendClient (retries, error mapping) is exercised end to end
    - Flat class, no inheritance: easy to read in a failing test
"""

import json
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone

import httpx

BASE_URL = "http://backend.test"
ADMIN_EMAIL = "admin@seminary.test"
ADMIN_PASSWORD = "correct-horse"
ADMIN_TOKEN = "admin-access-token"
REFRESH_TOKEN = "admin-refresh-token"

_OBJECT_ACCEPT = "application/vnd.pgrst.object+json"
_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)

# (child table, column, parent table, constraint name)
FOREIGN_KEYS = [
    ("registrations", "course_id", "courses", "registrations_course_id_fkey"),
    ("student_registrations", "course_id", "courses", "student_registrations_course_id_fkey"),
]


def _as_param(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _json(status: int, payload, headers: dict | None = None) -> httpx.Response:
    return httpx.Response(status, json=payload, headers=headers)


class FakeBackend:
    def __init__(self):
        self.tables: dict[str, list[dict]] = defaultdict(list)
        self.objects: dict[str, dict[str, bytes]] = defaultdict(dict)
        self.fail_tables: dict[str, tuple[int, dict]] = {}
        self.fail_storage: tuple[int, dict] | None = None
        self.requests: list[httpx.Request] = []
        self.down = False
        self._clock = 0

    # -- Seeding ---------------------------------------------------------------

    def seed(self, table: str, *rows: dict) -> list[dict]:
        stored = [self._stamp(dict(row)) for row in rows]
        self.tables[table].extend(stored)
        return stored

    def _stamp(self, row: dict) -> dict:
        self._clock += 1
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", (_EPOCH + timedelta(minutes=self._clock)).isoformat())
        return row

    def requests_to(self, path_prefix: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith(path_prefix)]

    # -- Transport -------------------------------------------------------------

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        await request.aread()
        self.requests.append(request)
        if self.down:
            raise httpx.ConnectError("Connection refused", request=request)
        path = request.url.path
        if path.startswith("/rest/v1"):
            return self._rest(request, path.removeprefix("/rest/v1").strip("/"))
        if path.startswith("/auth/v1"):
            return self._auth(request, path.removeprefix("/auth/v1").strip("/"))
        if path.startswith("/storage/v1/object"):
            return self._storage(request, path.removeprefix("/storage/v1/object").strip("/"))
        return _json(404, {"message": f"No route for {path}"})

    # -- /rest/v1 --------------------------------------------------------------

    def _rest(self, request: httpx.Request, table: str) -> httpx.Response:
        if not table:
            return _json(200, {"swagger": "2.0"})
        if table in self.fail_tables:
            status, payload = self.fail_tables[table]
            return _json(status, payload)

        filters, order, limit = self._parse_query(request)
        rows = [r for r in self.tables[table] if all(f(r) for f in filters)]
        method = request.method

        if method in ("GET", "HEAD"):
            for column, ascending in reversed(order):
                rows.sort(key=lambda r: (r.get(column) is None, r.get(column)), reverse=not ascending)
            if limit is not None:
                rows = rows[:limit]
            if method == "HEAD":
                total = len(rows)
                span = f"0-{total - 1}" if total else "*"
                return httpx.Response(200, headers={"Content-Range": f"{span}/{total}"})
            return self._rows_response(request, rows)

        body = json.loads(request.content) if request.content else None
        if method == "POST":
            new_rows = body if isinstance(body, list) else [body]
            stored = self.seed(table, *new_rows)
            return self._rows_response(request, stored, status=201)
        if method == "PATCH":
            for row in rows:
                row.update(body)
            return self._rows_response(request, rows)
        if method == "DELETE":
            for row in rows:
                violation = self._foreign_key_violation(table, row)
                if violation:
                    return _json(409, violation)
            ids = {r["id"] for r in rows}
            self.tables[table] = [r for r in self.tables[table] if r["id"] not in ids]
            return self._rows_response(request, rows)
        return _json(405, {"message": f"{method} not allowed"})

    def _parse_query(self, request: httpx.Request):
        filters, order, limit = [], [], None
        for key, value in request.url.params.multi_items():
            if key == "select":
                continue
            if key == "order":
                for part in value.split(","):
                    column, _, direction = part.partition(".")
                    order.append((column, direction != "desc"))
            elif key == "limit":
                limit = int(value)
            else:
                filters.append(self._filter(key, value))
        return filters, order, limit

    @staticmethod
    def _filter(column: str, expression: str):
        op, _, operand = expression.partition(".")
        if op == "eq":
            return lambda r: r.get(column) is not None and _as_param(r.get(column)) == operand
        if op == "neq":
            return lambda r: _as_param(r.get(column)) != operand
        if op == "is" and operand == "null":
            return lambda r: r.get(column) is None
        if op == "ilike":
            term = operand.strip("*%").lower()
            return lambda r: term in str(r.get(column) or "").lower()
        raise AssertionError(f"Unsupported filter {column}={expression}")

    def _rows_response(self, request: httpx.Request, rows: list[dict], status: int = 200):
        if request.headers.get("accept") == _OBJECT_ACCEPT:
            if len(rows) != 1:
                return _json(406, {
                    "code": "PGRST116",
                    "message": "JSON object requested, multiple (or no) rows returned",
                    "details": f"The result contains {len(rows)} rows",
                    "hint": None,
                })
            return _json(status, rows[0])
        return _json(status, rows)

    def _foreign_key_violation(self, table: str, row: dict) -> dict | None:
        for child, column, parent, constraint in FOREIGN_KEYS:
            if parent != table:
                continue
            if any(c.get(column) == row["id"] for c in self.tables[child]):
                return {
                    "code": "23503",
                    "message": (
                        f'update or delete on table "{parent}" violates foreign key '
                        f'constraint "{constraint}" on table "{child}"'
                    ),
                    "details": f'Key (id)=({row["id"]}) is still referenced from table "{child}".',
                    "hint": None,
                }
        return None

    # -- /auth/v1 --------------------------------------------------------------

    def _auth(self, request: httpx.Request, endpoint: str) -> httpx.Response:
        token = request.headers.get("authorization", "").removeprefix("Bearer ")
        if endpoint == "token":
            body = json.loads(request.content)
            grant = request.url.params.get("grant_type")
            ok = (
                grant == "password"
                and body.get("email") == ADMIN_EMAIL
                and body.get("password") == ADMIN_PASSWORD
            ) or (grant == "refresh_token" and body.get("refresh_token") == REFRESH_TOKEN)
            if not ok:
                return _json(400, {
                    "error": "invalid_grant",
                    "error_description": "Invalid login credentials",
                })
            return _json(200, {
                "access_token": ADMIN_TOKEN,
                "refresh_token": REFRESH_TOKEN,
                "expires_in": 3600,
                "user": {"id": "admin-1", "email": ADMIN_EMAIL},
            })
        if endpoint == "user":
            if token != ADMIN_TOKEN:
                return _json(401, {"msg": "invalid JWT"})
            return _json(200, {"id": "admin-1", "email": ADMIN_EMAIL})
        if endpoint == "logout":
            return httpx.Response(204)
        return _json(404, {"message": f"Unknown auth endpoint {endpoint}"})

    # -- /storage/v1/object ----------------------------------------------------

    def _storage(self, request: httpx.Request, rest: str) -> httpx.Response:
        bucket, _, path = rest.partition("/")
        if self.fail_storage is not None:
            return _json(*self.fail_storage)
        if request.method == "POST":
            if path in self.objects[bucket]:
                return _json(400, {"statusCode": "409", "error": "Duplicate", "message": "The resource already exists"})
            self.objects[bucket][path] = request.content
            return _json(200, {"Key": f"{bucket}/{path}"})
        if request.method == "DELETE":
            prefixes = json.loads(request.content)["prefixes"]
            removed = [p for p in prefixes if self.objects[bucket].pop(p, None) is not None]
            return _json(200, [{"name": p} for p in removed])
        return _json(405, {"message": "not allowed"})
