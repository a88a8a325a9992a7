"""Tenancy presentation layer.

HTTP consumers of the tenant context: the tenant switcher, the layout
chrome and feature-gated views.
"""

from tenancy.presentation.routes import router

__all__ = ["router"]
