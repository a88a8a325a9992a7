"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from infrastructure.logging import configure_logging
from infrastructure.settings import get_dashboard_settings, get_settings
from infrastructure.version import __version__
from tenancy.bootstrap import build_tenancy_shell
from tenancy.presentation import router as tenancy_router


@asynccontextmanager
async def dashboard_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration
    - Tenant context creation, initialization and teardown
    - Background polling of durable selection storage
    """
    settings = get_dashboard_settings()
    configure_logging(settings.log_level, settings.log_format)

    shell = build_tenancy_shell(settings)
    await shell.start()
    app.state.tenancy = shell

    yield

    await shell.stop()
    app.state.tenancy = None


app = FastAPI(
    title=get_settings().app_name,
    description="Multi-tenant analytics dashboard shell",
    version=__version__,
    lifespan=dashboard_lifespan,
)

# Include Tenancy bounded context routes
app.include_router(tenancy_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}
