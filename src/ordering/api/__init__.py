"""Ordering domain API package."""

from ordering.api.routes import admin_order_router, admin_settings_router, storefront_router

__all__ = ["storefront_router", "admin_settings_router", "admin_order_router"]
