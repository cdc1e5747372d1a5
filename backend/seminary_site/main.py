"""Seminary Site API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SiteError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Hosted backend client created on startup and closed on shutdown (lifespan)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Backend client on app.state rather than a module global: tests swap it
      for one built on httpx.MockTransport
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from seminary_site.api.error_handlers import register_error_handlers
from seminary_site.api.routes import admin, auth, forms, health, pages
from seminary_site.config import Settings, get_settings
from seminary_site.infrastructure.backend_client import HostedBackendClient
from seminary_site.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def build_backend(settings: Settings) -> HostedBackendClient:
    return HostedBackendClient(
        settings.backend_url,
        settings.backend_anon_key,
        max_retries=settings.fetch_max_retries,
        timeout_seconds=settings.fetch_timeout_seconds,
        retry_delay_ms=settings.fetch_retry_delay_ms,
        retry_client_errors=settings.fetch_retry_client_errors,
        upload_chunk_size=settings.upload_chunk_size,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.backend = build_backend(settings)
    logger.info("Seminary site API started")
    yield
    logger.info("Seminary site API shutting down")
    await app.state.backend.aclose()


app = FastAPI(
    title="Seminary Site API", version="1.0.0", lifespan=lifespan,
)

# CORS origins come from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes
app.include_router(health.router)
app.include_router(pages.router)
app.include_router(forms.router)
app.include_router(auth.router)
app.include_router(admin.router)

register_error_handlers(app)
