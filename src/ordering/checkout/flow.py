"""Checkout flow: the storefront's step-by-step path from cart to order.

Steps::

    summary -> delivery -> payment -> finalizing -> success
                              ^            |
                              +- failure <-+

Leaving ``summary`` needs a non-empty cart. ``delivery`` validates the
contact form. ``payment`` offers only the methods the payment settings
enable. ``finalizing`` places the order; success clears the cart and records
the order in the device's history, failure keeps the cart and records the
error so the customer can try again from ``payment``.

Input problems (bad form, disabled method, not enough cash) raise
``ValidationError`` without moving the flow. Only failures while placing the
order move it to ``failure``. Errors other than validation or gateway
failures are re-raised once the flow is at ``failure``.
"""

import json
from enum import Enum

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from ordering.checkout.intent import create_payment_intent
from ordering.gateway.port import PaymentGatewayError
from ordering.order.order import Customer, DeliveryPaymentMethod, PaymentMethod
from ordering.order.placement import PlaceOrder
from ordering.settings.payment import get_payment_settings
from ordering.settings.store import get_store_settings

logger = structlog.get_logger(__name__)


class CheckoutStep(Enum):
    SUMMARY = "summary"
    DELIVERY = "delivery"
    PAYMENT = "payment"
    FINALIZING = "finalizing"
    SUCCESS = "success"
    FAILURE = "failure"


_PAYING_STEPS = {CheckoutStep.PAYMENT, CheckoutStep.FAILURE}

ORDER_NOT_SAVED_MESSAGE = "Não foi possível registrar o pedido. Tente novamente."


def _error_message(exc):
    if isinstance(exc, PaymentGatewayError):
        return exc.message
    if isinstance(exc, ValidationError):
        return "; ".join(message for messages in exc.messages.values() for message in messages)
    return str(exc)


class CheckoutFlow:
    def __init__(self, cart_store, history_store) -> None:
        self.cart_store = cart_store
        self.history_store = history_store
        self.cart = cart_store.load()
        self.step = CheckoutStep.SUMMARY
        self.delivery: dict | None = None
        self.intent: dict | None = None
        self.order_id: str | None = None
        self.last_error: str | None = None

    def _require_step(self, *steps):
        if self.step not in steps:
            allowed = ", ".join(step.value for step in steps)
            raise ValidationError({"step": [f"Expected step {allowed}, flow is at {self.step.value}"]})

    # -------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------
    def proceed_to_delivery(self):
        self._require_step(CheckoutStep.SUMMARY)
        if self.cart.is_empty:
            raise ValidationError({"cart": ["Cart is empty"]})
        self.step = CheckoutStep.DELIVERY

    def submit_delivery(self, name, phone, address):
        self._require_step(CheckoutStep.DELIVERY)
        customer = Customer(name=(name or "").strip(), phone=(phone or "").strip(), address=(address or "").strip())
        self.delivery = {"name": customer.name, "phone": customer.phone, "address": customer.address}
        self.step = CheckoutStep.PAYMENT

    def back(self):
        """Return to the previous step; an open card intent is discarded."""
        previous = {
            CheckoutStep.DELIVERY: CheckoutStep.SUMMARY,
            CheckoutStep.PAYMENT: CheckoutStep.DELIVERY,
            CheckoutStep.FAILURE: CheckoutStep.DELIVERY,
        }
        self._require_step(*previous)
        self.intent = None
        self.step = previous[self.step]

    def retry(self):
        self._require_step(CheckoutStep.FAILURE)
        self.step = CheckoutStep.PAYMENT

    # -------------------------------------------------------------------
    # Payment
    # -------------------------------------------------------------------
    def available_methods(self):
        return get_payment_settings().available_methods()

    def total_amount(self):
        return self.cart.total_with_fee(get_store_settings().delivery_fee)

    def begin_card_payment(self):
        """Open a payment intent for the card form; returns its client details."""
        self._require_step(*_PAYING_STEPS)
        if PaymentMethod.CARD.value not in self.available_methods():
            raise ValidationError({"payment_method": ["Card payments are not enabled"]})

        self.step = CheckoutStep.PAYMENT
        self.intent = create_payment_intent(self.cart.to_lines())
        return self.intent

    def confirm_card_payment(self):
        """Place the order after the card form confirmed the open intent."""
        self._require_step(CheckoutStep.PAYMENT)
        if not self.intent:
            raise ValidationError({"payment_method": ["Start the card payment first"]})

        intent_id = self.intent["intent_id"]
        # An intent is never reused across attempts
        self.intent = None
        return self._finalize(
            payment_method=PaymentMethod.CARD.value,
            stripe_payment_intent_id=intent_id,
        )

    def pay_on_delivery(self, delivery_payment_method, cash_tendered=None):
        self._require_step(*_PAYING_STEPS)
        if PaymentMethod.ON_DELIVERY.value not in self.available_methods():
            raise ValidationError({"payment_method": ["Payment on delivery is not enabled"]})

        if delivery_payment_method == DeliveryPaymentMethod.CASH.value:
            total = self.total_amount()
            if cash_tendered is None or cash_tendered < total:
                raise ValidationError({"cash_tendered": [f"Cash amount must be at least {total:.2f}"]})
        elif delivery_payment_method != DeliveryPaymentMethod.PIX.value:
            raise ValidationError({"delivery_payment_method": ["Choose PIX or Dinheiro"]})
        else:
            cash_tendered = None

        self.step = CheckoutStep.PAYMENT
        self.intent = None
        return self._finalize(
            payment_method=PaymentMethod.ON_DELIVERY.value,
            delivery_payment_method=delivery_payment_method,
            cash_tendered=cash_tendered,
        )

    def change_due(self, cash_tendered):
        return round(cash_tendered - self.total_amount(), 2)

    # -------------------------------------------------------------------
    # Finalizing
    # -------------------------------------------------------------------
    def _finalize(self, **payment):
        self.step = CheckoutStep.FINALIZING
        self.last_error = None
        try:
            command = PlaceOrder(
                items=json.dumps(self.cart.to_lines()),
                customer_name=self.delivery["name"],
                customer_phone=self.delivery["phone"],
                customer_address=self.delivery["address"],
                **payment,
            )
            order_id = current_domain.process(command, asynchronous=False)
        except (ValidationError, PaymentGatewayError) as exc:
            self.step = CheckoutStep.FAILURE
            self.last_error = _error_message(exc)
            logger.warning("Checkout failed", error=self.last_error, payment_method=payment["payment_method"])
            return None
        except Exception:
            self.step = CheckoutStep.FAILURE
            self.last_error = ORDER_NOT_SAVED_MESSAGE
            logger.exception("Checkout failed unexpectedly", payment_method=payment["payment_method"])
            raise

        self.order_id = order_id
        self.history_store.add(order_id)
        self.cart.clear()
        self.cart_store.clear()
        self.step = CheckoutStep.SUCCESS

        logger.info("Checkout completed", order_id=order_id, payment_method=payment["payment_method"])
        return order_id
