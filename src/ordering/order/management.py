"""Back-office order management: status updates and deletions.

Bulk operations are all-or-nothing. Every id is loaded before anything is
changed; one unknown id fails the whole batch and nothing is written.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order, resolve_status_field

logger = structlog.get_logger(__name__)


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status_field = String(required=True, max_length=20)
    value = String(required=True, max_length=20)


@ordering.command(part_of="Order")
class BulkUpdateOrders:
    order_ids = Text(required=True)  # JSON: list of order ids
    status_field = String(required=True, max_length=20)
    value = String(required=True, max_length=20)


@ordering.command(part_of="Order")
class BulkDeleteOrders:
    order_ids = Text(required=True)  # JSON: list of order ids


def _parse_ids(raw):
    ids = json.loads(raw) if isinstance(raw, str) else raw
    if not ids:
        raise ValidationError({"order_ids": ["Select at least one order"]})
    # Preserve order, drop duplicates
    return list(dict.fromkeys(str(order_id) for order_id in ids))


def _load_all(repo, order_ids):
    found, missing = [], []
    for order_id in order_ids:
        try:
            found.append(repo.get(order_id))
        except ObjectNotFoundError:
            missing.append(order_id)
    if missing:
        raise ObjectNotFoundError(f"Orders not found: {', '.join(missing)}")
    return found


@ordering.command_handler(part_of=Order)
class ManageOrderHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(command.status_field, command.value)
        repo.add(order)

        logger.info(
            "Order status updated",
            order_id=str(order.id),
            status_field=command.status_field,
            value=command.value,
        )

    @handle(BulkUpdateOrders)
    def bulk_update_orders(self, command):
        resolve_status_field(command.status_field, command.value)
        order_ids = _parse_ids(command.order_ids)

        repo = current_domain.repository_for(Order)
        orders = _load_all(repo, order_ids)
        for order in orders:
            order.update_status(command.status_field, command.value)
            repo.add(order)

        logger.info(
            "Orders updated in bulk",
            count=len(orders),
            status_field=command.status_field,
            value=command.value,
        )
        return len(orders)

    @handle(BulkDeleteOrders)
    def bulk_delete_orders(self, command):
        order_ids = _parse_ids(command.order_ids)

        repo = current_domain.repository_for(Order)
        orders = _load_all(repo, order_ids)
        for order in orders:
            repo._dao.delete(order)

        logger.info("Orders deleted in bulk", count=len(orders))
        return len(orders)
