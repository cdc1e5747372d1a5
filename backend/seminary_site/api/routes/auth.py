"""Admin Auth — password sign-in, token refresh, sign-out and current user.

Invariants:
    - Credentials are forwarded to the hosted backend, never stored
    - Rejected credentials or tokens answer 401 (AuthenticationError)
"""

import logging

from fastapi import APIRouter, Depends, status

from seminary_site.api.dependencies import get_backend, require_admin_token
from seminary_site.config import Settings, get_settings
from seminary_site.infrastructure.auth import AuthSession
from seminary_site.infrastructure.backend_client import HostedBackendClient
from seminary_site.schemas.auth import LoginRequest, RefreshRequest, SessionResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


def _session_response(session: AuthSession, settings: Settings) -> SessionResponse:
    return SessionResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=session.expires_at,
        refresh_at=session.refresh_at(settings.admin_session_refresh_margin_seconds),
        user_id=session.user_id,
        email=session.email,
    )


@router.post("/login", response_model=SessionResponse)
async def login(
    body: LoginRequest,
    backend: HostedBackendClient = Depends(get_backend),
    settings: Settings = Depends(get_settings),
):
    session = await backend.auth.sign_in_with_password(body.email, body.password)
    return _session_response(session, settings)


@router.post("/refresh", response_model=SessionResponse)
async def refresh(
    body: RefreshRequest,
    backend: HostedBackendClient = Depends(get_backend),
    settings: Settings = Depends(get_settings),
):
    session = await backend.auth.refresh_session(body.refresh_token)
    return _session_response(session, settings)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str = Depends(require_admin_token),
    backend: HostedBackendClient = Depends(get_backend),
):
    await backend.auth.sign_out(token)
    logger.info("Admin signed out")


@router.get("/me")
async def current_user(
    token: str = Depends(require_admin_token),
    backend: HostedBackendClient = Depends(get_backend),
):
    user = await backend.auth.get_user(token)
    return {"id": user.get("id"), "email": user.get("email")}
