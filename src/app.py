"""LSDrinks FastAPI application.

Storefront and back office in one web server. Each request is wrapped in the
Protean domain context that owns its URL prefix; ``/admin`` routes sit behind
the signed session gate.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# Domains are initialized at module level so uvicorn workers share them.
# PROTEAN_ENV selects the domain.toml overlay.
from catalogue.domain import catalogue  # noqa: E402
from catalogue.utils.logging import add_context, clear_context
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from ordering.domain import ordering  # noqa: E402

catalogue.init()
ordering.init()

from api_errors import register_exception_handlers  # noqa: E402
from backoffice.api import build_auth_router  # noqa: E402
from backoffice.session import SessionSigner, install_session_gate  # noqa: E402
from config import AppConfig  # noqa: E402

config = AppConfig.from_env()

# ---------------------------------------------------------------------------
# Route-to-domain mapping
# ---------------------------------------------------------------------------
_ROUTE_DOMAIN_MAP = {
    "/categories": catalogue,
    "/items": catalogue,
    "/highlights": catalogue,
    "/admin/categories": catalogue,
    "/admin/items": catalogue,
    "/admin/highlights": catalogue,
    "/store": ordering,
    "/checkout": ordering,
    "/orders": ordering,
    "/admin/settings": ordering,
    "/admin/orders": ordering,
}


def _resolve_domain(path: str):
    """Return the domain for the given request path, or None."""
    for prefix, domain in _ROUTE_DOMAIN_MAP.items():
        if path == prefix or path.startswith(prefix + "/"):
            return domain
    return None


# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="LSDrinks API",
    description="Drink delivery storefront and back office",
)

register_exception_handlers(app)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the correct Protean domain context for each request."""
    domain = _resolve_domain(request.url.path)
    add_context(path=request.url.path, method=request.method)
    try:
        if domain is not None:
            with domain.domain_context():
                return await call_next(request)
        # No domain match: auth, health, docs
        return await call_next(request)
    finally:
        clear_context()


signer = SessionSigner(config.secret_key, config.session_max_age)
install_session_gate(app, signer)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
from catalogue.api import (  # noqa: E402
    admin_category_router,
    admin_highlight_router,
    admin_item_router,
)
from catalogue.api import storefront_router as catalogue_storefront_router  # noqa: E402
from ordering.api import admin_order_router, admin_settings_router  # noqa: E402
from ordering.api import storefront_router as ordering_storefront_router  # noqa: E402

app.include_router(build_auth_router(config, signer))
app.include_router(catalogue_storefront_router)
app.include_router(ordering_storefront_router)
app.include_router(admin_category_router)
app.include_router(admin_item_router)
app.include_router(admin_highlight_router)
app.include_router(admin_settings_router)
app.include_router(admin_order_router)


# ---------------------------------------------------------------------------
# Health / root
# ---------------------------------------------------------------------------
@app.get("/admin")
async def admin_home():
    return {
        "sections": ["categories", "items", "highlights", "settings", "orders"],
    }


@app.get("/health")
async def health():
    return JSONResponse(
        content={
            "status": "ok",
            "domains": {
                "catalogue": {"name": catalogue.name},
                "ordering": {"name": ordering.name},
            },
        }
    )


if config.seed_demo_data:
    from manage import seed  # noqa: E402

    seed()
