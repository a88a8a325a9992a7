"""FastAPI dependencies for the tenancy bounded context.

The tenancy shell is built once in the application lifespan and stored on
``app.state``; these functions hand its parts to route handlers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from tenancy.application.services import TenantContextManager
from tenancy.bootstrap import TenancyShell
from tenancy.domain.api_routing import ApiUrlBuilder
from tenancy.infrastructure.branding import InMemoryBrandingSink


def get_tenancy_shell(request: Request) -> TenancyShell:
    """Get the tenancy shell created at application startup.

    Raises:
        RuntimeError: If the application lifespan has not run
    """
    shell: TenancyShell | None = getattr(request.app.state, "tenancy", None)
    if shell is None:
        raise RuntimeError(
            "Tenancy shell not initialized. Ensure app startup completed successfully."
        )
    return shell


def get_tenant_context_manager(
    shell: Annotated[TenancyShell, Depends(get_tenancy_shell)],
) -> TenantContextManager:
    """Get the tenant context manager of this execution context."""
    return shell.context


def get_api_url_builder(
    shell: Annotated[TenancyShell, Depends(get_tenancy_shell)],
) -> ApiUrlBuilder:
    return shell.url_builder


def get_branding_sink(
    shell: Annotated[TenancyShell, Depends(get_tenancy_shell)],
) -> InMemoryBrandingSink:
    return shell.branding
