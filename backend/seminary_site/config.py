"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The hosted backend anon key comes from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - backend_url never ends with a slash (paths are joined with a leading "/")

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Retry/timeout knobs live here so ResilientFetch stays free of env lookups
    - fetch_retry_client_errors defaults to False: 4xx responses are deterministic,
      retrying them only delays the error the caller will show anyway
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Hosted backend
    backend_url: str = "http://localhost:54321"
    backend_anon_key: str = "anon-key-placeholder"

    @field_validator("backend_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Resilient fetch
    fetch_max_retries: int = 3
    fetch_timeout_seconds: float = 15.0
    fetch_retry_delay_ms: int = 1000
    fetch_retry_client_errors: bool = False

    # Storage buckets
    banner_bucket: str = "banner-images"
    teacher_bucket: str = "teacher-images"
    gallery_bucket: str = "gallery-images"
    alumni_bucket: str = "alumni-images"
    downloads_bucket: str = "downloads"
    donation_bucket: str = "donation-images"
    logo_bucket: str = "logo-images"
    payment_bucket: str = "payment-screenshots"
    upload_chunk_size: int = 64 * 1024

    # Admin sessions
    admin_session_refresh_margin_seconds: int = 60

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
