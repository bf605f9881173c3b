"""Store settings singleton: storefront name and delivery fee.

A single document with the fixed id ``"store"``. Reads fall back to the
defaults when nothing has been saved yet; saves merge the given fields.
"""

from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Float, String
from protean.utils.globals import current_domain

from ordering.domain import ordering

logger = structlog.get_logger(__name__)

STORE_SETTINGS_ID = "store"
DEFAULT_STORE_NAME = "LSDrinks"
DEFAULT_DELIVERY_FEE = 5.0


@ordering.aggregate
class StoreSettings:
    store_name = String(required=True, min_length=1, max_length=100, default=DEFAULT_STORE_NAME)
    delivery_fee = Float(required=True, min_value=0.0, default=DEFAULT_DELIVERY_FEE)
    updated_at = DateTime()

    @classmethod
    def fallback(cls):
        return cls(id=STORE_SETTINGS_ID)

    def merge(self, store_name=None, delivery_fee=None):
        if store_name is not None:
            self.store_name = store_name.strip()
        if delivery_fee is not None:
            self.delivery_fee = round(delivery_fee, 2)
        self.updated_at = datetime.now(UTC)


@ordering.command(part_of="StoreSettings")
class SaveStoreSettings:
    store_name = String(max_length=100)
    delivery_fee = Float(min_value=0.0)


def get_store_settings():
    """The saved store settings, or unsaved defaults."""
    try:
        return current_domain.repository_for(StoreSettings).get(STORE_SETTINGS_ID)
    except ObjectNotFoundError:
        return StoreSettings.fallback()


def serialize_store_settings(settings):
    return {"store_name": settings.store_name, "delivery_fee": settings.delivery_fee}


@ordering.command_handler(part_of=StoreSettings)
class StoreSettingsHandler:
    @handle(SaveStoreSettings)
    def save_store_settings(self, command):
        settings = get_store_settings()
        settings.merge(store_name=command.store_name, delivery_fee=command.delivery_fee)
        current_domain.repository_for(StoreSettings).add(settings)

        logger.info(
            "Store settings saved",
            store_name=settings.store_name,
            delivery_fee=settings.delivery_fee,
        )
