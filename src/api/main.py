"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse

from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultStartupProbe
from infrastructure.settings import Settings, get_settings
from infrastructure.version import __version__
from permissions.application.services import ServerAdminsBootstrapService
from permissions.dependencies import get_permission_store
from permissions.infrastructure.store_factory import create_permission_store
from permissions.ports.repositories import IPermissionStore
from permissions.presentation import router as permissions_router
from permissions.presentation.models import HealthResponse


@asynccontextmanager
async def perms_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Permission store construction and shutdown
    - server_admins bootstrap in the configured namespace
    """
    settings = get_settings()
    configure_logging(debug=settings.debug)
    probe = DefaultStartupProbe()

    store = create_permission_store(settings, startup_probe=probe)
    try:
        # A store failure here aborts startup; an empty server_admins only warns.
        await ServerAdminsBootstrapService(store=store, probe=probe).ensure_server_admins(
            settings.namespace
        )
    except Exception:
        await store.close()
        raise

    app.state.permission_store = store
    try:
        yield
    finally:
        app.state.permission_store = None
        await store.close()
        probe.permission_store_closed(settings.store_backend.value)


app = FastAPI(
    title="Perms API",
    description="Namespaced permission groups and group-membership authorization",
    version=__version__,
    lifespan=perms_lifespan,
)

app.include_router(permissions_router)


@app.get("/health")
def health() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get(
    "/health/store",
    response_model=HealthResponse,
    responses={503: {"description": "Permission store unreachable"}},
)
async def health_store(
    store: Annotated[IPermissionStore, Depends(get_permission_store)],
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Check permission store connectivity."""
    if await store.ping():
        return HealthResponse(status="ok", backend=settings.store_backend.value)
    return JSONResponse(
        status_code=503,
        content=HealthResponse(
            status="unavailable", backend=settings.store_backend.value
        ).model_dump(),
    )
