"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from certis.config import AuthSettings, Settings
from certis.domain.error import DomainError
from certis.domain.service import NotificationService
from certis.interface.api.error import domain_error_handler
from certis.interface.api.routes import (
    auth,
    certificates,
    courses,
    health,
    invitations,
    members,
    organizations,
)
from certis.util.di.container import create_container, setup_di
from certis.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Fail fast on missing configuration, flush notifications on shutdown."""
    container: AsyncContainer = app.state.dishka_container

    # Raises ConfigurationError when no signing key is configured
    await container.get(AuthSettings)
    logfire.info("Certis API started")

    yield

    notification_service = await container.get(NotificationService)
    await notification_service.drain()
    await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container when omitted
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Certis API",
        description="Multi-tenant certificate management: organizations, "
        "roles, invitations and certificates",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,
    )

    # Every DomainError subclass is handled here
    app_instance.add_exception_handler(DomainError, domain_error_handler)

    # Settings are loaded from environment automatically
    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(organizations.router)
    app_instance.include_router(invitations.router)
    app_instance.include_router(members.router)
    app_instance.include_router(certificates.router)
    app_instance.include_router(courses.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
