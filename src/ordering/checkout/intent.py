"""Card payment intent creation.

Reads nothing from the client except the cart lines: the delivery fee and the
gateway key come from the settings, the amount is recomputed here and the
order number is reserved up front so it can travel in the intent metadata.
"""

import structlog
from protean.exceptions import ValidationError

from ordering.gateway import get_gateway
from ordering.order.numbering import allocate_order_number
from ordering.order.pricing import parse_lines, subtotal_of, to_minor_units, total_with_fee
from ordering.settings.payment import get_payment_settings
from ordering.settings.store import get_store_settings

logger = structlog.get_logger(__name__)

CURRENCY = "brl"


def create_payment_intent(raw_lines):
    """Open a gateway intent for the cart total.

    Returns the client secret the card form confirms against, plus the
    intent id and the reserved order number. Raises ``ValidationError`` when
    card payments are off or the cart is invalid, and ``PaymentGatewayError``
    when the gateway call fails.
    """
    lines = parse_lines(raw_lines)

    payment_settings = get_payment_settings()
    if not payment_settings.card_enabled:
        raise ValidationError({"payment_method": ["Card payments are not enabled"]})
    secret_key = payment_settings.secret_key
    if not secret_key:
        raise ValidationError({"payment_method": ["Card payments are not configured"]})

    subtotal = subtotal_of(lines)
    delivery_fee = get_store_settings().delivery_fee
    total = total_with_fee(subtotal, delivery_fee)
    order_number = allocate_order_number()

    intent = get_gateway().create_payment_intent(
        amount=to_minor_units(total),
        currency=CURRENCY,
        metadata={"orderId": order_number},
        secret_key=secret_key,
    )

    logger.info(
        "Payment intent created",
        intent_id=intent.intent_id,
        order_number=order_number,
        amount=intent.amount,
    )
    return {
        "client_secret": intent.client_secret,
        "intent_id": intent.intent_id,
        "order_number": order_number,
        "subtotal": subtotal,
        "delivery_fee": delivery_fee,
        "total_amount": total,
        "amount": intent.amount,
        "currency": CURRENCY,
    }
