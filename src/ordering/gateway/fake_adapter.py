"""Configurable fake payment gateway for development and testing.

Simulates intent creation and confirmation without any external calls. Every
call is recorded in ``calls``; ``configure`` switches between success and
failure, and ``confirm`` marks an intent as paid the way the card form would.
"""

from uuid import uuid4

from ordering.gateway.port import PaymentGateway, PaymentGatewayError, PaymentIntentResult


class FakeGateway(PaymentGateway):
    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Gateway unavailable"
        self.auto_confirm: bool = False
        self.calls: list[dict] = []
        self.intents: dict[str, PaymentIntentResult] = {}

    def configure(
        self,
        should_succeed: bool,
        failure_reason: str = "Gateway unavailable",
        auto_confirm: bool = False,
    ) -> None:
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason
        self.auto_confirm = auto_confirm

    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict,
        secret_key: str | None,
    ) -> PaymentIntentResult:
        self.calls.append(
            {
                "method": "create_payment_intent",
                "amount": amount,
                "currency": currency,
                "metadata": dict(metadata),
                "secret_key": secret_key,
            }
        )
        if not self.should_succeed:
            raise PaymentGatewayError(reason=self.failure_reason)

        intent_id = f"pi_fake_{uuid4().hex[:16]}"
        intent = PaymentIntentResult(
            intent_id=intent_id,
            client_secret=f"{intent_id}_secret_{uuid4().hex[:8]}",
            status="succeeded" if self.auto_confirm else "requires_payment_method",
            amount=amount,
            currency=currency,
            metadata=dict(metadata),
        )
        self.intents[intent_id] = intent
        return intent

    def retrieve_payment_intent(self, intent_id: str, secret_key: str | None) -> PaymentIntentResult:
        self.calls.append({"method": "retrieve_payment_intent", "intent_id": intent_id, "secret_key": secret_key})
        if not self.should_succeed:
            raise PaymentGatewayError(reason=self.failure_reason)
        if intent_id not in self.intents:
            raise PaymentGatewayError(reason=f"No such payment_intent: {intent_id}")
        return self.intents[intent_id]

    def confirm(self, intent_id: str, status: str = "succeeded") -> PaymentIntentResult:
        """Stand-in for the customer completing the card form."""
        intent = self.intents[intent_id]
        confirmed = PaymentIntentResult(
            intent_id=intent.intent_id,
            client_secret=intent.client_secret,
            status=status,
            amount=intent.amount,
            currency=intent.currency,
            metadata=intent.metadata,
        )
        self.intents[intent_id] = confirmed
        return confirmed
