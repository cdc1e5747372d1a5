"""Auth Client — admin sign-in, token refresh, user lookup and sign-out.

Invariants:
    - Rejected credentials or tokens (400/401/403) raise AuthenticationError
    - Any other backend failure propagates unchanged (BackendError / BackendUnavailableError)
    - AuthSession.expires_at is absolute UTC, derived from expires_at or expires_in

Design Decisions:
    - No session persistence server-side: tokens travel with the admin client,
      the API only validates (get_user) and refreshes them on request
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

from seminary_site.core.errors import AuthenticationError, BackendError

if TYPE_CHECKING:
    from seminary_site.infrastructure.backend_client import HostedBackendClient

logger = logging.getLogger(__name__)

_REJECTED_STATUSES = (400, 401, 403)


@dataclass
class AuthSession:
    """Tokens for one signed-in admin."""
    access_token: str
    refresh_token: str
    expires_at: datetime
    user_id: str | None = None
    email: str | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "AuthSession":
        if payload.get("expires_at"):
            expires_at = datetime.fromtimestamp(int(payload["expires_at"]), timezone.utc)
        else:
            expires_at = datetime.now(timezone.utc) + timedelta(
                seconds=int(payload.get("expires_in", 3600)),
            )
        user = payload.get("user") or {}
        return cls(
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token", ""),
            expires_at=expires_at,
            user_id=user.get("id"),
            email=user.get("email"),
        )

    def refresh_at(self, margin_seconds: int = 60) -> datetime:
        """When the admin client should exchange its refresh token."""
        return self.expires_at - timedelta(seconds=margin_seconds)

    def needs_refresh(self, margin_seconds: int = 60, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.refresh_at(margin_seconds)


class AuthClient:
    """Hosted backend auth endpoints (password grant + refresh)."""

    def __init__(self, backend: "HostedBackendClient"):
        self._backend = backend

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        payload = await self._token(
            "password", {"email": email, "password": password},
        )
        logger.info("Admin signed in", extra={"path": "/auth/v1/token"})
        return AuthSession.from_payload(payload)

    async def refresh_session(self, refresh_token: str) -> AuthSession:
        payload = await self._token(
            "refresh_token", {"refresh_token": refresh_token},
        )
        return AuthSession.from_payload(payload)

    async def get_user(self, access_token: str) -> dict:
        """Validate an access token; returns the backend's user record."""
        try:
            response = await self._backend.request(
                "GET", "/auth/v1/user", access_token=access_token,
            )
        except BackendError as e:
            if e.status_code in _REJECTED_STATUSES:
                raise AuthenticationError("Session expired or invalid") from e
            raise
        return response.json()

    async def sign_out(self, access_token: str) -> None:
        try:
            await self._backend.request(
                "POST", "/auth/v1/logout", access_token=access_token,
            )
        except BackendError as e:
            # An already-revoked token is as signed out as it gets
            if e.status_code not in _REJECTED_STATUSES:
                raise

    async def _token(self, grant_type: str, body: dict) -> dict:
        try:
            response = await self._backend.request(
                "POST", "/auth/v1/token",
                params={"grant_type": grant_type},
                json=body,
            )
        except BackendError as e:
            if e.status_code in _REJECTED_STATUSES:
                raise AuthenticationError(e.message) from e
            raise
        return response.json()
