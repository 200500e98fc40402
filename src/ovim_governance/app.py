"""OVIM governance application.

FastAPI application exposing the admission webhook and the reporting,
ledger and placement routes.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .__version__ import __version__
from .api.container import GovernanceContainer
from .api.exception_handlers import register_exception_handlers
from .api.routers import admission_router, organizations_router, zones_router
from .config.settings import GovernanceSettings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[GovernanceSettings] = None,
    container: Optional[GovernanceContainer] = None,
) -> FastAPI:
    """Create the governance API.

    Args:
        settings: Settings to use; read from the environment when omitted
        container: Prebuilt services; built from settings at startup when omitted

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        owned = container is None
        app.state.container = container or await GovernanceContainer.from_settings(settings)
        logger.info(
            f"{settings.app_name} {__version__} started "
            f"(storage={settings.storage_backend}, environment={settings.environment})"
        )

        yield

        # Cleanup
        if owned:
            await app.state.container.close()
        logger.info(f"{settings.app_name} stopped")

    app = FastAPI(
        title="OVIM Governance API",
        version=__version__,
        description="Zone quota governance, VDC placement and namespace admission control",
        debug=settings.debug,
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container

    register_exception_handlers(app, is_production=settings.is_production)

    app.include_router(admission_router)
    app.include_router(zones_router, prefix="/api/v1")
    app.include_router(organizations_router, prefix="/api/v1")

    @app.get("/healthz", tags=["System"])
    async def healthz(request: Request):
        database = request.app.state.container.database
        if database is not None and not await database.health_check():
            return JSONResponse(
                status_code=503,
                content={"status": "degraded", "database": "unavailable", "version": __version__},
            )
        return {"status": "ok", "version": __version__}

    return app
