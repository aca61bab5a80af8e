"""FastAPI application factory

Run with: uvicorn --factory vault_gateway.api.main:create_app
"""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from vault_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from vault_gateway.api.v1 import dashboard, session
from vault_gateway.application.reconciliation import ReconciliationLoop
from vault_gateway.application.session import SessionManager
from vault_gateway.infrastructure.clients.record_store import RecordStoreClient
from vault_gateway.infrastructure.observability.logging import setup_logging
from vault_gateway.presentation.dashboard import DashboardRenderer
from vault_gateway.config import Settings, get_settings


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the gateway application.

    One SessionManager, renderer and ReconciliationLoop are built per app and
    shared by every request; the loop runs for the lifetime of the app.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level, service_name=settings.service_name)

    client = RecordStoreClient(settings=settings, transport=transport)
    renderer = DashboardRenderer(avatar_base_url=settings.avatar_base_url)
    session_manager = SessionManager(client, renderer=renderer)
    reconciliation_loop = ReconciliationLoop(
        session_manager,
        client,
        interval_seconds=settings.poll_interval_seconds,
        renderer=renderer,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        reconciliation_loop.start()
        try:
            yield
        finally:
            await reconciliation_loop.stop()

    app = FastAPI(
        title=settings.app_name,
        description="Session-synchronized gateway to the user record vault",
        version=settings.version,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.renderer = renderer
    app.state.session_manager = session_manager
    app.state.reconciliation_loop = reconciliation_loop

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {
            "status": "ok",
            "service": settings.service_name,
            "version": settings.version,
            "sync_running": reconciliation_loop.running,
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(session.router, prefix="/v1", tags=["session"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])

    return app
