"""Catalogue domain API package."""

from catalogue.api.routes import (
    admin_category_router,
    admin_highlight_router,
    admin_item_router,
    storefront_router,
)

__all__ = ["storefront_router", "admin_category_router", "admin_item_router", "admin_highlight_router"]
