"""Stripe payment gateway adapter.

Uses the stripe-python SDK with a per-request ``api_key`` so the key can come
from the environment or from the payment settings document.
"""

import stripe
import structlog

from ordering.gateway.port import PaymentGateway, PaymentGatewayError, PaymentIntentResult

logger = structlog.get_logger(__name__)


def _field(obj, name, default=None):
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _to_result(intent) -> PaymentIntentResult:
    order_id = _field(_field(intent, "metadata") or {}, "orderId")
    return PaymentIntentResult(
        intent_id=_field(intent, "id"),
        client_secret=_field(intent, "client_secret"),
        status=_field(intent, "status"),
        amount=_field(intent, "amount"),
        currency=_field(intent, "currency") or "brl",
        metadata={"orderId": order_id} if order_id else {},
    )


class StripeGateway(PaymentGateway):
    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict,
        secret_key: str | None,
    ) -> PaymentIntentResult:
        if not secret_key:
            raise PaymentGatewayError(reason="Stripe secret key is not configured")
        try:
            intent = stripe.PaymentIntent.create(
                amount=amount,
                currency=currency,
                automatic_payment_methods={"enabled": True},
                metadata=metadata,
                api_key=secret_key,
            )
        except stripe.StripeError as exc:
            logger.error("Stripe payment intent creation failed", amount=amount, error=str(exc))
            raise PaymentGatewayError(reason=str(exc)) from exc
        return _to_result(intent)

    def retrieve_payment_intent(self, intent_id: str, secret_key: str | None) -> PaymentIntentResult:
        if not secret_key:
            raise PaymentGatewayError(reason="Stripe secret key is not configured")
        try:
            intent = stripe.PaymentIntent.retrieve(intent_id, api_key=secret_key)
        except stripe.StripeError as exc:
            logger.error("Stripe payment intent lookup failed", intent_id=intent_id, error=str(exc))
            raise PaymentGatewayError(reason=str(exc)) from exc
        return _to_result(intent)
