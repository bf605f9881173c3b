"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer completed checkout."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    total_amount = Float(required=True)
    payment_method = String(required=True)
    payment_status = String(required=True)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """The back office moved an order's payment or fulfilment status."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    status_field = String(required=True)
    previous_value = String()
    value = String(required=True)
