"""Admin API — authenticated management of site content, registrations and uploads.

Invariants:
    - Every route depends on get_admin_service (valid Bearer token required)
    - Specific routes (dashboard, registrations, courses, banner moves, uploads)
      are registered before the generic /{resource} routes
    - Write bodies are validated against the resource's write model before any IO
    - Upload progress is streamed as SSE; a client disconnect cancels the upload

Design Decisions:
    - StreamingResponse for upload progress: upload_progress events then exactly
      one upload_done or upload_failed
    - CSV export built in memory: registrations are a few hundred rows at most
"""

import json
import logging

from fastapi import APIRouter, Body, Depends, File, Form, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response, StreamingResponse
from pydantic import BaseModel, ValidationError

from seminary_site.api.dependencies import get_admin_service
from seminary_site.core.errors import FormValidationError
from seminary_site.core.listing_filters import (
    program_interests, registrations_csv, registrations_csv_filename,
)
from seminary_site.core.ordering import Direction
from seminary_site.infrastructure.storage import UploadOperation, new_object_path
from seminary_site.schemas.content import Banner, Course
from seminary_site.schemas.registration import (
    ContactedUpdate, Registration, RegistrationView,
)
from seminary_site.services.admin_service import AdminService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/admin", tags=["admin"])

# SSE headers prevent proxy/browser buffering of streamed events.
_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "X-Accel-Buffering": "no",
    "Connection": "keep-alive",
}


def _sse_line(event: dict) -> str:
    return f"data: {json.dumps(event, ensure_ascii=False)}\n\n"


def _validate_body(model: type[BaseModel], body: dict) -> BaseModel:
    try:
        return model.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e


class MoveRequest(BaseModel):
    direction: Direction


async def upload_events(operation: UploadOperation):
    """SSE lines for an upload; closing the stream early cancels the upload."""
    try:
        async for event in operation:
            yield _sse_line(event.to_sse_event())
    finally:
        if not operation.done:
            operation.cancel()
            logger.info(
                "Client disconnected from upload stream",
                extra={"bucket": operation.bucket.name, "object_path": operation.path},
            )


# -- Dashboard -----------------------------------------------------------------

@router.get("/dashboard")
async def dashboard(admin: AdminService = Depends(get_admin_service)):
    """Record counts per managed resource."""
    return {"counts": await admin.dashboard_counts()}


# -- Registrations -------------------------------------------------------------

@router.get("/registrations")
async def list_registrations(
    search: str = Query("", max_length=200),
    program_interest: str | None = Query(None),
    course_id: str | None = Query(None),
    contacted: bool | None = Query(None),
    admin: AdminService = Depends(get_admin_service),
):
    registrations = await admin.registrations(search, program_interest, course_id, contacted)
    return {
        "registrations": registrations,
        "program_interests": program_interests(registrations),
        "total": len(registrations),
    }


@router.get("/registrations/export")
async def export_registrations(
    search: str = Query("", max_length=200),
    program_interest: str | None = Query(None),
    course_id: str | None = Query(None),
    contacted: bool | None = Query(None),
    admin: AdminService = Depends(get_admin_service),
):
    """Download the filtered registrations as CSV."""
    registrations: list[RegistrationView] = await admin.registrations(
        search, program_interest, course_id, contacted,
    )
    return Response(
        content=registrations_csv(registrations),
        media_type="text/csv",
        headers={
            "Content-Disposition":
                f'attachment; filename="{registrations_csv_filename()}"',
        },
    )


@router.patch("/registrations/{registration_id}/contacted", response_model=Registration)
async def set_contacted(
    registration_id: str,
    body: ContactedUpdate,
    admin: AdminService = Depends(get_admin_service),
):
    return await admin.set_contacted(registration_id, body.contacted)


# -- Courses -------------------------------------------------------------------

@router.get("/courses", response_model=list[Course])
async def list_courses(
    search: str = Query("", max_length=200),
    program_type: str | None = Query(None),
    admin: AdminService = Depends(get_admin_service),
):
    return await admin.courses(search, program_type)


# -- Banners -------------------------------------------------------------------

@router.post("/banners/{banner_id}/move", response_model=list[Banner])
async def move_banner(
    banner_id: str,
    body: MoveRequest,
    admin: AdminService = Depends(get_admin_service),
):
    return await admin.move_banner(banner_id, body.direction)


# -- Uploads -------------------------------------------------------------------

@router.post("/uploads/{resource}")
async def upload_file(
    resource: str,
    file: UploadFile = File(...),
    folder: str = Form(""),
    admin: AdminService = Depends(get_admin_service),
):
    """Upload a file into the resource's bucket, streaming progress as SSE."""
    spec = admin.spec(resource)
    if spec.bucket is None:
        raise FormValidationError(f"{resource} records have no file storage", "resource")
    data = await file.read()
    bucket = admin.backend.storage.bucket(spec.bucket, admin.access_token)
    operation = bucket.upload(
        new_object_path(folder or resource, file.filename or "upload"),
        data,
        file.content_type or "application/octet-stream",
    )

    return StreamingResponse(
        upload_events(operation),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


# -- Generic resources ---------------------------------------------------------

@router.get("/{resource}")
async def list_records(resource: str, admin: AdminService = Depends(get_admin_service)):
    return await admin.list_records(resource)


@router.get("/{resource}/{record_id}")
async def get_record(
    resource: str, record_id: str, admin: AdminService = Depends(get_admin_service),
):
    return await admin.get(resource, record_id)


@router.post("/{resource}", status_code=status.HTTP_201_CREATED)
async def create_record(
    resource: str,
    body: dict = Body(...),
    admin: AdminService = Depends(get_admin_service),
):
    spec = admin.writable_spec(resource)
    return await admin.create(resource, _validate_body(spec.write_model, body))


@router.put("/{resource}/{record_id}")
async def update_record(
    resource: str,
    record_id: str,
    body: dict = Body(...),
    admin: AdminService = Depends(get_admin_service),
):
    spec = admin.writable_spec(resource)
    return await admin.update(resource, record_id, _validate_body(spec.write_model, body))


@router.delete("/{resource}/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_record(
    resource: str, record_id: str, admin: AdminService = Depends(get_admin_service),
):
    """Delete a record and its stored files; 409 when other records reference it."""
    await admin.delete(resource, record_id)
