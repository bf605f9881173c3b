"""Order aggregate: a placed drink order and its back-office status.

Orders are written once at checkout with their totals locked; afterwards only
the payment status and the fulfilment status change, from the admin console.

Payment status:  Pendente -> Pago (set directly for card orders)
Order status:    Aguardando -> Confirmado -> Enviado -> Entregue (any order)
"""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged
from ordering.order.pricing import subtotal_of, total_with_fee


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class PaymentStatus(Enum):
    PENDING = "Pendente"
    PAID = "Pago"


class OrderStatus(Enum):
    AWAITING = "Aguardando"
    CONFIRMED = "Confirmado"
    SHIPPED = "Enviado"
    DELIVERED = "Entregue"


class PaymentMethod(Enum):
    CARD = "Cartão de Crédito"
    ON_DELIVERY = "Na Entrega"


class DeliveryPaymentMethod(Enum):
    PIX = "PIX"
    CASH = "Dinheiro"


# Admin-facing field names for status updates
STATUS_FIELDS = {
    "paymentStatus": ("payment_status", PaymentStatus),
    "payment_status": ("payment_status", PaymentStatus),
    "orderStatus": ("order_status", OrderStatus),
    "order_status": ("order_status", OrderStatus),
}


def resolve_status_field(field, value):
    """Map an admin field name and value onto the aggregate attribute.

    Raises ``ValidationError`` for an unknown field or a value outside the
    field's choices.
    """
    if field not in STATUS_FIELDS:
        raise ValidationError({"field": [f"Unknown status field: {field}"]})

    attribute, choices = STATUS_FIELDS[field]
    allowed = [member.value for member in choices]
    if value not in allowed:
        raise ValidationError({"value": [f"{value!r} is not one of {allowed}"]})
    return attribute


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class Customer:
    """Delivery contact captured by the checkout form."""

    name = String(required=True, min_length=3, max_length=100)
    phone = String(required=True, min_length=10, max_length=20)
    address = String(required=True, min_length=10, max_length=300)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A menu item snapshot at the price it was sold for."""

    item_id = Identifier(required=True)
    title = String(required=True, max_length=120)
    price = Float(required=True)
    quantity = Integer(required=True, min_value=1)
    image_url = String(max_length=2048)
    category_id = Identifier()


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_number = String(required=True, max_length=5)
    items = HasMany(OrderItem)
    customer = ValueObject(Customer, required=True)
    subtotal = Float(required=True, min_value=0.0)
    delivery_fee = Float(default=0.0, min_value=0.0)
    total_amount = Float(required=True, min_value=0.0)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    order_status = String(choices=OrderStatus, default=OrderStatus.AWAITING.value)
    payment_method = String(choices=PaymentMethod, required=True)
    delivery_payment_method = String(choices=DeliveryPaymentMethod)
    cash_tendered = Float()
    change_due = Float()
    stripe_payment_intent_id = String(max_length=255)
    created_at = DateTime()
    updated_at = DateTime()

    @property
    def status(self):
        """The payment status, under the name the storefront uses."""
        return self.payment_status

    @invariant.post
    def lines_must_be_priced(self):
        if any(line.price is None or line.price <= 0 for line in self.items):
            raise ValidationError({"items": ["Every line must have a price greater than zero"]})

    @invariant.post
    def total_must_match_lines_and_fee(self):
        if not self.items or any(line.price is None for line in self.items):
            return
        subtotal = round(sum(line.price * line.quantity for line in self.items), 2)
        expected = total_with_fee(subtotal, self.delivery_fee or 0.0)
        if abs(expected - self.total_amount) >= 0.005:
            raise ValidationError({"total_amount": [f"Total {self.total_amount} does not match {expected}"]})

    @invariant.post
    def cash_must_cover_total(self):
        if self.delivery_payment_method != DeliveryPaymentMethod.CASH.value:
            return
        if self.cash_tendered is None or self.cash_tendered < self.total_amount:
            raise ValidationError({"cash_tendered": ["Cash amount must cover the order total"]})

    @classmethod
    def place(
        cls,
        order_number,
        lines,
        customer,
        delivery_fee,
        payment_method,
        payment_status,
        delivery_payment_method=None,
        cash_tendered=None,
        stripe_payment_intent_id=None,
    ):
        """Create an order from validated checkout lines.

        ``lines`` are ``OrderLine`` snapshots; totals are computed here and
        locked for the lifetime of the order.
        """
        now = datetime.now(UTC)
        subtotal = subtotal_of(lines)
        total = total_with_fee(subtotal, delivery_fee)

        change_due = None
        if delivery_payment_method == DeliveryPaymentMethod.CASH.value and cash_tendered is not None:
            change_due = round(cash_tendered - total, 2)

        order = cls(
            order_number=order_number,
            items=[
                OrderItem(
                    item_id=line.item_id,
                    title=line.title,
                    price=line.price,
                    quantity=line.quantity,
                    image_url=line.image_url,
                    category_id=line.category_id,
                )
                for line in lines
            ],
            customer=Customer(**customer),
            subtotal=subtotal,
            delivery_fee=delivery_fee,
            total_amount=total,
            payment_status=payment_status,
            payment_method=payment_method,
            delivery_payment_method=delivery_payment_method,
            cash_tendered=cash_tendered if delivery_payment_method == DeliveryPaymentMethod.CASH.value else None,
            change_due=change_due,
            stripe_payment_intent_id=stripe_payment_intent_id,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order_number,
                total_amount=total,
                payment_method=payment_method,
                payment_status=payment_status,
                placed_at=now,
            )
        )
        return order

    def update_status(self, field, value):
        attribute = resolve_status_field(field, value)
        previous = getattr(self, attribute)
        if previous == value:
            return

        setattr(self, attribute, value)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                status_field=attribute,
                previous_value=previous,
                value=value,
            )
        )

