"""Request Dependencies — backend client, services and admin authentication.

Invariants:
    - The backend client is created once in the lifespan and read from app.state
    - Admin routes require "Authorization: Bearer <access token>" validated by the backend
    - Services are cheap per-request wrappers; they hold no state between requests
"""

from fastapi import Depends, Header, Request

from seminary_site.config import Settings, get_settings
from seminary_site.core.errors import AuthenticationError
from seminary_site.infrastructure.backend_client import HostedBackendClient
from seminary_site.services.admin_service import AdminService
from seminary_site.services.content_service import ContentService
from seminary_site.services.registration_service import RegistrationService
from seminary_site.services.resources import build_resources


def get_backend(request: Request) -> HostedBackendClient:
    return request.app.state.backend


def get_content_service(
    backend: HostedBackendClient = Depends(get_backend),
) -> ContentService:
    return ContentService(backend)


def get_registration_service(
    backend: HostedBackendClient = Depends(get_backend),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    return RegistrationService(backend, settings)


async def require_admin_token(
    authorization: str | None = Header(None),
    backend: HostedBackendClient = Depends(get_backend),
) -> str:
    """Bearer token of a signed-in admin; raises AuthenticationError otherwise."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError()
    token = token.strip()
    await backend.auth.get_user(token)
    return token


def get_admin_service(
    token: str = Depends(require_admin_token),
    backend: HostedBackendClient = Depends(get_backend),
    settings: Settings = Depends(get_settings),
) -> AdminService:
    return AdminService(backend, token, build_resources(settings))
