"""Order placement: the server side of the checkout's finalizing step.

Everything the storefront computed is recomputed here. The chosen payment
method must still be enabled, totals come from the submitted lines and the
current delivery fee, and card orders are only written once the gateway
reports the intent as succeeded for exactly that amount.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.gateway import get_gateway
from ordering.order.numbering import allocate_order_number, order_number_taken
from ordering.order.order import DeliveryPaymentMethod, Order, PaymentMethod, PaymentStatus
from ordering.order.pricing import parse_lines, subtotal_of, to_minor_units, total_with_fee
from ordering.settings.payment import get_payment_settings
from ordering.settings.store import get_store_settings

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class PlaceOrder:
    items = Text(required=True)  # JSON: list of cart line dicts
    customer_name = String(required=True, max_length=100)
    customer_phone = String(required=True, max_length=20)
    customer_address = String(required=True, max_length=300)
    payment_method = String(required=True, max_length=50)
    delivery_payment_method = String(max_length=20)
    cash_tendered = Float()
    stripe_payment_intent_id = String(max_length=255)


def _on_delivery_terms(command, total):
    allowed = [member.value for member in DeliveryPaymentMethod]
    if command.delivery_payment_method not in allowed:
        raise ValidationError({"delivery_payment_method": [f"Choose one of {allowed}"]})

    if command.delivery_payment_method == DeliveryPaymentMethod.CASH.value:
        if command.cash_tendered is None:
            raise ValidationError({"cash_tendered": ["Inform the cash amount for change"]})
        if command.cash_tendered < total:
            raise ValidationError({"cash_tendered": [f"Cash amount must be at least {total:.2f}"]})
        return command.cash_tendered
    return None


def _confirmed_intent(command, settings, total):
    if not command.stripe_payment_intent_id:
        raise ValidationError({"stripe_payment_intent_id": ["Card orders need a confirmed payment intent"]})

    intent = get_gateway().retrieve_payment_intent(command.stripe_payment_intent_id, settings.secret_key)
    if not intent.succeeded:
        raise ValidationError({"stripe_payment_intent_id": [f"Payment not completed (status: {intent.status})"]})
    if intent.amount != to_minor_units(total):
        logger.warning(
            "Payment intent amount mismatch",
            intent_id=intent.intent_id,
            intent_amount=intent.amount,
            expected_amount=to_minor_units(total),
        )
        raise ValidationError({"stripe_payment_intent_id": ["Paid amount does not match the order total"]})
    return intent


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        raw_lines = json.loads(command.items) if isinstance(command.items, str) else command.items
        lines = parse_lines(raw_lines)

        payment_settings = get_payment_settings()
        if command.payment_method not in payment_settings.available_methods():
            raise ValidationError({"payment_method": [f"{command.payment_method} is not available"]})

        delivery_fee = get_store_settings().delivery_fee
        total = total_with_fee(subtotal_of(lines), delivery_fee)
        customer = {
            "name": command.customer_name,
            "phone": command.customer_phone,
            "address": command.customer_address,
        }

        if command.payment_method == PaymentMethod.CARD.value:
            intent = _confirmed_intent(command, payment_settings, total)
            order_number = intent.metadata.get("orderId")
            if not order_number or order_number_taken(order_number):
                order_number = allocate_order_number()
            order = Order.place(
                order_number=order_number,
                lines=lines,
                customer=customer,
                delivery_fee=delivery_fee,
                payment_method=PaymentMethod.CARD.value,
                payment_status=PaymentStatus.PAID.value,
                stripe_payment_intent_id=intent.intent_id,
            )
        else:
            cash_tendered = _on_delivery_terms(command, total)
            order = Order.place(
                order_number=allocate_order_number(),
                lines=lines,
                customer=customer,
                delivery_fee=delivery_fee,
                payment_method=PaymentMethod.ON_DELIVERY.value,
                payment_status=PaymentStatus.PENDING.value,
                delivery_payment_method=command.delivery_payment_method,
                cash_tendered=cash_tendered,
            )

        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            order_number=order.order_number,
            total_amount=order.total_amount,
            payment_method=order.payment_method,
        )
        return str(order.id)
