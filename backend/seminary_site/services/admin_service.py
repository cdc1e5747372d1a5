"""Admin Service — authenticated CRUD over the managed tables.

Invariants:
    - Every call carries the admin's access token (row-level security applies)
    - update/delete always filter by id; an id that matches no row raises 404
    - Deleting a record removes its stored files after the row is gone
    - New banners are appended: order_index defaults to the current banner count
    - Registrations are never created here, only listed, marked contacted and deleted

Design Decisions:
    - One generic service over ResourceSpec instead of one class per table
    - Storage cleanup failures are logged, not raised: the row is already deleted
      and an orphaned object is invisible to visitors
"""

import asyncio
import logging

from pydantic import BaseModel

from seminary_site.core.error_messages import NO_ROWS_CODE, describe_error
from seminary_site.core.errors import (
    BackendError, FormValidationError, ResourceNotFoundError, SiteError,
)
from seminary_site.core.listing_filters import (
    attach_course_titles, filter_courses, filter_registrations,
)
from seminary_site.core.ordering import Direction, plan_move
from seminary_site.infrastructure.backend_client import HostedBackendClient, TableQuery
from seminary_site.schemas.content import Banner, Course
from seminary_site.schemas.parsing import parse_row, parse_rows
from seminary_site.schemas.registration import Registration, RegistrationView
from seminary_site.services.resources import ResourceSpec

logger = logging.getLogger(__name__)


class AdminService:
    """CRUD for one admin session."""

    def __init__(
        self,
        backend: HostedBackendClient,
        access_token: str,
        resources: dict[str, ResourceSpec],
    ):
        self.backend = backend
        self.access_token = access_token
        self.resources = resources

    def spec(self, slug: str) -> ResourceSpec:
        if slug not in self.resources:
            raise ResourceNotFoundError("Resource", slug)
        return self.resources[slug]

    # -- Generic CRUD ----------------------------------------------------------

    async def list_records(self, slug: str) -> list[BaseModel]:
        spec = self.spec(slug)
        query = self.backend.table(spec.table).select()
        for column, ascending in spec.order:
            query = query.order(column, ascending)
        return parse_rows(spec.model, await self._run(query), spec.table)

    async def get(self, slug: str, record_id: str) -> BaseModel:
        spec = self.spec(slug)
        query = self.backend.table(spec.table).select().eq("id", record_id).single()
        try:
            row = await self._run(query)
        except BackendError as e:
            if e.backend_code == NO_ROWS_CODE:
                raise ResourceNotFoundError(spec.slug, record_id) from e
            raise
        return parse_row(spec.model, row, spec.table)

    async def create(self, slug: str, payload: BaseModel) -> BaseModel:
        spec = self.writable_spec(slug)
        row = payload.model_dump(mode="json")
        if spec.slug == "banners" and row.get("order_index") is None:
            row["order_index"] = len(await self.list_records("banners"))
        rows = await self._run(self.backend.table(spec.table).insert(row))
        record = parse_rows(spec.model, rows, spec.table)[0]
        logger.info(f"Created {spec.slug} record", extra={"table": spec.table})
        return record

    async def update(self, slug: str, record_id: str, payload: BaseModel) -> BaseModel:
        spec = self.writable_spec(slug)
        values = payload.model_dump(mode="json", exclude_unset=True)
        if spec.slug == "banners" and values.get("order_index") is None:
            values.pop("order_index", None)
        if not values:
            raise FormValidationError("Nothing to update", "body")
        return await self._update_row(spec, record_id, values)

    async def delete(self, slug: str, record_id: str) -> None:
        spec = self.spec(slug)
        record = await self.get(slug, record_id)
        rows = await self._run(
            self.backend.table(spec.table).delete().eq("id", record_id),
        )
        if not rows:
            raise ResourceNotFoundError(spec.slug, record_id)
        logger.info(f"Deleted {spec.slug} record", extra={"table": spec.table})
        await self._remove_files(spec, record)

    # -- Banners ---------------------------------------------------------------

    async def move_banner(self, banner_id: str, direction: Direction) -> list[Banner]:
        """Swap a banner with its neighbour; returns the banners in their new order."""
        banners = await self.list_records("banners")
        for target_id, order_index in plan_move(banners, banner_id, direction):
            await self._update_row(
                self.spec("banners"), target_id, {"order_index": order_index},
            )
        return await self.list_records("banners")

    # -- Courses ---------------------------------------------------------------

    async def courses(self, search: str = "", program_type: str | None = None) -> list[Course]:
        return filter_courses(await self.list_records("courses"), search, program_type)

    # -- Registrations ---------------------------------------------------------

    async def registrations(
        self,
        search: str = "",
        program_interest: str | None = None,
        course_id: str | None = None,
        contacted: bool | None = None,
    ) -> list[RegistrationView]:
        registrations, courses = await asyncio.gather(
            self.list_records("registrations"), self.list_records("courses"),
        )
        views = attach_course_titles(registrations, courses)
        return filter_registrations(views, search, program_interest, course_id, contacted)

    async def set_contacted(self, registration_id: str, contacted: bool) -> Registration:
        return await self._update_row(
            self.spec("registrations"), registration_id, {"contacted": contacted},
        )

    # -- Dashboard -------------------------------------------------------------

    async def dashboard_counts(self) -> dict[str, int]:
        """Row count per managed resource."""
        slugs = list(self.resources)
        counts = await asyncio.gather(*(
            self.backend.count(self.resources[s].table, self.access_token)
            for s in slugs
        ))
        return dict(zip(slugs, counts))

    # -- Helpers ---------------------------------------------------------------

    def writable_spec(self, slug: str) -> ResourceSpec:
        spec = self.spec(slug)
        if spec.write_model is None:
            raise FormValidationError(f"{slug} records cannot be edited here", "resource")
        return spec

    async def _run(self, query: TableQuery):
        return await query.execute(access_token=self.access_token)

    async def _update_row(self, spec: ResourceSpec, record_id: str, values: dict) -> BaseModel:
        rows = await self._run(
            self.backend.table(spec.table).update(values).eq("id", record_id),
        )
        records = parse_rows(spec.model, rows, spec.table)
        if not records:
            raise ResourceNotFoundError(spec.slug, record_id)
        return records[0]

    async def _remove_files(self, spec: ResourceSpec, record: BaseModel) -> None:
        if spec.bucket is None:
            return
        bucket = self.backend.storage.bucket(spec.bucket, self.access_token)
        paths = [
            path
            for name in spec.file_fields
            if (url := getattr(record, name, None))
            and (path := bucket.path_from_public_url(url))
        ]
        if not paths:
            return
        try:
            await bucket.remove(paths)
        except SiteError as e:
            logger.warning(
                f"Stored files left behind after delete: {describe_error(e)}",
                extra={"bucket": spec.bucket, "table": spec.table},
            )
