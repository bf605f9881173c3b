"""Payment settings singleton: which payment methods the checkout offers.

Card payments need ``is_live`` and a Stripe secret key; on-delivery payments
(cash or PIX) need ``is_payment_on_delivery_enabled``. With neither enabled
the checkout offers nothing.

The secret key may be stored in the settings document, but the
``STRIPE_SECRET_KEY`` environment variable wins whenever it is set, and the
stored key never leaves the server unmasked.
"""

import os
from datetime import UTC, datetime

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, String
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import PaymentMethod

logger = structlog.get_logger(__name__)

PAYMENT_SETTINGS_ID = "payment"
SECRET_KEY_ENV_VAR = "STRIPE_SECRET_KEY"


def mask_secret(value):
    if not value:
        return None
    return f"****{value[-4:]}" if len(value) > 8 else "****"


@ordering.aggregate
class PaymentSettings:
    is_live = Boolean(default=False)
    stripe_public_key = String(max_length=255)
    stripe_secret_key = String(max_length=255)
    pix_key = String(max_length=140)
    is_payment_on_delivery_enabled = Boolean(default=False)
    updated_at = DateTime()

    @classmethod
    def fallback(cls):
        return cls(id=PAYMENT_SETTINGS_ID)

    @property
    def secret_key(self):
        """The key used for gateway calls: environment first, then the document."""
        return os.getenv(SECRET_KEY_ENV_VAR) or self.stripe_secret_key or None

    @property
    def card_enabled(self):
        return bool(self.is_live)

    @property
    def on_delivery_enabled(self):
        return bool(self.is_payment_on_delivery_enabled)

    def available_methods(self):
        methods = []
        if self.card_enabled:
            methods.append(PaymentMethod.CARD.value)
        if self.on_delivery_enabled:
            methods.append(PaymentMethod.ON_DELIVERY.value)
        return methods

    def merge(self, **fields):
        for name, value in fields.items():
            if value is not None:
                setattr(self, name, value)
        self.updated_at = datetime.now(UTC)


@ordering.command(part_of="PaymentSettings")
class SavePaymentSettings:
    is_live = Boolean()
    stripe_public_key = String(max_length=255)
    stripe_secret_key = String(max_length=255)
    pix_key = String(max_length=140)
    is_payment_on_delivery_enabled = Boolean()


def get_payment_settings():
    """The saved payment settings, or unsaved defaults with every method off."""
    try:
        return current_domain.repository_for(PaymentSettings).get(PAYMENT_SETTINGS_ID)
    except ObjectNotFoundError:
        return PaymentSettings.fallback()


def serialize_payment_settings(settings):
    """Admin view of the payment settings. The secret key is masked."""
    return {
        "is_live": bool(settings.is_live),
        "stripe_public_key": settings.stripe_public_key,
        "stripe_secret_key": mask_secret(settings.stripe_secret_key),
        "secret_key_from_env": bool(os.getenv(SECRET_KEY_ENV_VAR)),
        "pix_key": settings.pix_key,
        "is_payment_on_delivery_enabled": bool(settings.is_payment_on_delivery_enabled),
    }


def public_payment_methods(settings):
    """What the storefront needs to render the payment step."""
    return {
        "methods": settings.available_methods(),
        "stripe_public_key": settings.stripe_public_key if settings.card_enabled else None,
        "pix_key": settings.pix_key if settings.on_delivery_enabled else None,
    }


@ordering.command_handler(part_of=PaymentSettings)
class PaymentSettingsHandler:
    @handle(SavePaymentSettings)
    def save_payment_settings(self, command):
        settings = get_payment_settings()
        settings.merge(
            is_live=command.is_live,
            stripe_public_key=command.stripe_public_key,
            stripe_secret_key=command.stripe_secret_key,
            pix_key=command.pix_key,
            is_payment_on_delivery_enabled=command.is_payment_on_delivery_enabled,
        )
        current_domain.repository_for(PaymentSettings).add(settings)

        if command.stripe_secret_key:
            logger.warning(
                "Stripe secret key stored in the settings document; prefer the environment variable",
                env_var=SECRET_KEY_ENV_VAR,
                env_override=bool(os.getenv(SECRET_KEY_ENV_VAR)),
            )
        logger.info(
            "Payment settings saved",
            is_live=settings.is_live,
            is_payment_on_delivery_enabled=settings.is_payment_on_delivery_enabled,
        )
