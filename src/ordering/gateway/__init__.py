"""Payment gateway factory.

``get_gateway()`` returns the active adapter: the fake by default, Stripe when
``PAYMENT_GATEWAY=stripe``. Tests swap adapters with ``set_gateway()``.
"""

import os

from ordering.gateway.fake_adapter import FakeGateway
from ordering.gateway.port import PaymentGateway
from ordering.gateway.stripe_adapter import StripeGateway

_current_gateway: PaymentGateway | None = None


def _default_gateway() -> PaymentGateway:
    if os.getenv("PAYMENT_GATEWAY", "fake").lower() == "stripe":
        return StripeGateway()
    return FakeGateway()


def get_gateway() -> PaymentGateway:
    global _current_gateway
    if _current_gateway is None:
        _current_gateway = _default_gateway()
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    global _current_gateway
    _current_gateway = None
