import os

import pytest


@pytest.fixture(scope="session")
def _catalogue_domain(request):
    """Initialize the catalogue domain once per session."""
    os.environ["PROTEAN_ENV"] = request.config.option.env

    from catalogue.domain import catalogue

    catalogue.init()
    return catalogue


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    ctx.pop()


@pytest.fixture()
def api_client(_catalogue_domain):
    """FastAPI app with the catalogue routers, wired like ``app.py``."""
    from api_errors import register_exception_handlers
    from catalogue.api import (
        admin_category_router,
        admin_highlight_router,
        admin_item_router,
        storefront_router,
    )
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    app = FastAPI()
    register_exception_handlers(app)

    @app.middleware("http")
    async def domain_context(request, call_next):
        with _catalogue_domain.domain_context():
            return await call_next(request)

    app.include_router(storefront_router)
    app.include_router(admin_category_router)
    app.include_router(admin_item_router)
    app.include_router(admin_highlight_router)
    return TestClient(app)
