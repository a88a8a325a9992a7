"""HTTP routes for the tenant context of the dashboard shell.

Handlers are coroutines so that every state transition runs on the event
loop that owns the context, one at a time.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tenancy.application.services import TenantContextManager
from tenancy.dependencies import (
    get_api_url_builder,
    get_branding_sink,
    get_tenant_context_manager,
)
from tenancy.domain.api_routing import ApiUrlBuilder
from tenancy.infrastructure.branding import InMemoryBrandingSink
from tenancy.presentation.models import (
    ApiUrlResponse,
    BrandingResponse,
    BrandingStateResponse,
    FeatureResponse,
    LayoutChromeResponse,
    SwitchTenantRequest,
    TenantContextResponse,
    TenantOptionResponse,
)

router = APIRouter(
    prefix="/tenancy",
    tags=["tenancy"],
)


@router.get("/tenants")
async def list_tenants(
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> list[TenantOptionResponse]:
    """List every tenant for the switcher, in registry order.

    The active tenant is flagged with ``active: true``.
    """
    active_key = manager.current_key
    return [
        TenantOptionResponse.from_domain(option, active_key)
        for option in manager.available_tenants()
    ]


@router.get("/context")
async def get_context(
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> TenantContextResponse:
    """Get the active tenant with loading and error state."""
    return TenantContextResponse.from_domain(manager.state)


@router.post("/switch")
async def switch_tenant(
    request: SwitchTenantRequest,
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> TenantContextResponse:
    """Switch the active tenant.

    Switching to the active tenant is a no-op. Unknown keys resolve to the
    default tenant.

    Args:
        request: Requested tenant key and reload flag
        manager: Tenant context manager

    Returns:
        TenantContextResponse after the switch

    Raises:
        HTTPException: 409 if the selection could not be persisted; the
            previous tenant stays active
        HTTPException: 500 for unexpected errors
    """
    try:
        previous = manager.state
        state = manager.switch(request.tenant_key, force_reload=request.force_reload)
    except Exception:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to switch tenant",
        )

    # A no-op returns the previous snapshot untouched, including a stale error
    if state is not previous and state.last_error is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=state.last_error,
        )
    return TenantContextResponse.from_domain(state)


@router.post("/refresh")
async def refresh_context(
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> TenantContextResponse:
    """Re-sync with the persisted selection and invalidate tenant caches."""
    return TenantContextResponse.from_domain(manager.refresh())


@router.delete(
    "/error",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
)
async def clear_error(
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> None:
    """Clear the error left by a failed switch."""
    manager.clear_error()


@router.get("/features")
async def list_features(
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> list[FeatureResponse]:
    """List the feature flags of the active tenant."""
    return [
        FeatureResponse.from_flag(name, enabled)
        for name, enabled in manager.current_config.features.items()
    ]


@router.get("/features/{name}")
async def get_feature(
    name: str,
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> FeatureResponse:
    """Query one feature flag. Unrecognized names are reported as disabled."""
    return FeatureResponse.from_flag(name, manager.has_feature(name))


@router.get("/api-url")
async def preview_api_url(
    endpoint: Annotated[str, Query(min_length=1, description="Endpoint name")],
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
    builder: Annotated[ApiUrlBuilder, Depends(get_api_url_builder)],
    brand: Annotated[str | None, Query(description="Optional brand parameter")] = None,
) -> ApiUrlResponse:
    """Show the URL an endpoint resolves to for the active tenant."""
    params: dict[str, Any] = {"brand": brand} if brand else {}
    return ApiUrlResponse(
        endpoint=endpoint,
        url=builder.build_url(endpoint, manager.current_key, params),
        tenant_agnostic=builder.is_tenant_agnostic(endpoint),
    )


@router.get("/branding")
async def get_branding(
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> BrandingResponse:
    """Get the branding tokens of the active tenant."""
    return BrandingResponse.from_domain(manager.current_config.branding)


@router.get("/branding/document")
async def get_document_branding(
    sink: Annotated[InMemoryBrandingSink, Depends(get_branding_sink)],
) -> BrandingStateResponse:
    """Get the document title and favicon last applied by the shell."""
    return BrandingStateResponse(
        tenant_key=sink.tenant_key,
        document_title=sink.document_title,
        favicon=sink.favicon,
    )


@router.get("/layout")
async def get_layout_chrome(
    manager: Annotated[TenantContextManager, Depends(get_tenant_context_manager)],
) -> LayoutChromeResponse:
    """Get what the layout header renders for the active tenant."""
    return LayoutChromeResponse.from_domain(manager.state)
