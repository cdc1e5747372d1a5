"""Auth Schemas — admin login/refresh payloads."""

from datetime import datetime

from pydantic import BaseModel, Field

from seminary_site.schemas.registration import EMAIL_PATTERN


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN, max_length=320)
    password: str = Field(min_length=1, max_length=200)


class RefreshRequest(BaseModel):
    refresh_token: str = Field(min_length=1)


class SessionResponse(BaseModel):
    access_token: str
    refresh_token: str
    expires_at: datetime
    refresh_at: datetime
    user_id: str | None = None
    email: str | None = None
