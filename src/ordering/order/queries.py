"""Read side for orders: admin console listing and customer order history."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from ordering.order.order import Order
from shared.scan import scan

# Upper bound on ids per ``in`` lookup
ID_BATCH_SIZE = 30


def serialize_order(order):
    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "items": [
            {
                "item_id": str(line.item_id),
                "title": line.title,
                "price": line.price,
                "quantity": line.quantity,
                "image_url": line.image_url,
                "category_id": str(line.category_id) if line.category_id else None,
            }
            for line in order.items
        ],
        "customer": {
            "name": order.customer.name,
            "phone": order.customer.phone,
            "address": order.customer.address,
        },
        "subtotal": order.subtotal,
        "delivery_fee": order.delivery_fee,
        "total_amount": order.total_amount,
        "status": order.status,
        "payment_status": order.payment_status,
        "order_status": order.order_status,
        "payment_method": order.payment_method,
        "delivery_payment_method": order.delivery_payment_method,
        "cash_tendered": order.cash_tendered,
        "change_due": order.change_due,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }


def _matches(order, needle):
    return needle in order.order_number.lower() or needle in order.customer.name.lower()


def list_orders(payment_status=None, order_status=None, search=None):
    """Orders for the admin console, newest first."""
    needle = (search or "").strip().lower()
    orders = []
    for order in scan(current_domain.repository_for(Order)._dao.query.order_by("-created_at")):
        if payment_status and order.payment_status != payment_status:
            continue
        if order_status and order.order_status != order_status:
            continue
        if needle and not _matches(order, needle):
            continue
        orders.append(serialize_order(order))
    return orders


def get_orders_by_ids(order_ids):
    """Orders from a customer's local history, newest first. Unknown ids are skipped."""
    ids = list(dict.fromkeys(str(order_id) for order_id in order_ids if order_id))
    dao = current_domain.repository_for(Order)._dao

    orders = []
    for start in range(0, len(ids), ID_BATCH_SIZE):
        batch = ids[start : start + ID_BATCH_SIZE]
        orders.extend(dao.query.filter(id__in=batch).limit(len(batch)).all().items)

    orders.sort(key=lambda order: order.created_at, reverse=True)
    return [serialize_order(order) for order in orders]


def get_order(order_ref):
    """Look an order up by id, falling back to its order number."""
    repo = current_domain.repository_for(Order)
    try:
        return serialize_order(repo.get(order_ref))
    except ObjectNotFoundError:
        matches = repo._dao.query.filter(order_number=str(order_ref).upper()).limit(1).all().items
        if not matches:
            raise
        return serialize_order(matches[0])
