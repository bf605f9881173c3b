import pytest
from protean.integrations.pytest import DomainFixture


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def gateway():
    """A fresh fake gateway installed as the active adapter."""
    from ordering.gateway import reset_gateway, set_gateway
    from ordering.gateway.fake_adapter import FakeGateway

    fake = FakeGateway()
    set_gateway(fake)
    yield fake
    reset_gateway()


@pytest.fixture()
def store_settings():
    """Persist the default store settings (delivery fee 5.00)."""
    from ordering.settings.store import SaveStoreSettings
    from protean import current_domain

    current_domain.process(SaveStoreSettings(store_name="LSDrinks", delivery_fee=5.0), asynchronous=False)


@pytest.fixture()
def enable_payments():
    """Turn payment methods on: ``enable_payments(card=True, on_delivery=True)``."""
    from ordering.settings.payment import SavePaymentSettings
    from protean import current_domain

    def _enable(card=False, on_delivery=False, secret_key="sk_test_settings_key"):
        current_domain.process(
            SavePaymentSettings(
                is_live=card,
                stripe_public_key="pk_test_123" if card else None,
                stripe_secret_key=secret_key if card else None,
                is_payment_on_delivery_enabled=on_delivery,
                pix_key="pix@lsdrinks.com.br",
            ),
            asynchronous=False,
        )

    return _enable


@pytest.fixture()
def api_client(ordering_bed):
    """FastAPI app with the ordering routers, wired like ``app.py``."""
    from api_errors import register_exception_handlers
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from ordering.api import admin_order_router, admin_settings_router, storefront_router
    from ordering.domain import ordering

    app = FastAPI()
    register_exception_handlers(app)

    @app.middleware("http")
    async def domain_context(request, call_next):
        with ordering.domain_context():
            return await call_next(request)

    app.include_router(storefront_router)
    app.include_router(admin_settings_router)
    app.include_router(admin_order_router)
    return TestClient(app)
