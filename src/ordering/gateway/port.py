"""Payment gateway port (abstract interface).

The checkout only ever talks to a gateway through this contract, so the
Stripe adapter and the in-process fake are interchangeable.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

GATEWAY_UNAVAILABLE_MESSAGE = "Não foi possível comunicar com o processador de pagamentos."


class PaymentGatewayError(Exception):
    """A gateway call failed. ``message`` is safe to show to customers."""

    def __init__(self, message: str = GATEWAY_UNAVAILABLE_MESSAGE, *, reason: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason


@dataclass(frozen=True)
class PaymentIntentResult:
    """Gateway-side view of a payment intent. ``amount`` is in minor units."""

    intent_id: str
    client_secret: str | None
    status: str
    amount: int
    currency: str = "brl"
    metadata: dict = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status == "succeeded"


class PaymentGateway(ABC):
    @abstractmethod
    def create_payment_intent(
        self,
        amount: int,
        currency: str,
        metadata: dict,
        secret_key: str | None,
    ) -> PaymentIntentResult:
        """Open an intent for ``amount`` minor units with automatic payment methods."""
        ...

    @abstractmethod
    def retrieve_payment_intent(self, intent_id: str, secret_key: str | None) -> PaymentIntentResult:
        """Re-read an intent to learn whether the customer confirmed it."""
        ...
