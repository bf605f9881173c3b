"""Application tests for back-office order management and order queries."""

import json
from datetime import UTC, datetime, timedelta

import pytest
from ordering.order.management import BulkDeleteOrders, BulkUpdateOrders, UpdateOrderStatus
from ordering.order.order import Order, PaymentMethod, PaymentStatus
from ordering.order.pricing import OrderLine
from ordering.order.queries import get_order, get_orders_by_ids, list_orders
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

BASE_TIME = datetime(2024, 3, 1, 20, 0, tzinfo=UTC)


def _store_order(number, name="Maria Souza", minutes=0, payment_status=PaymentStatus.PENDING.value):
    order = Order.place(
        order_number=number,
        lines=[OrderLine(item_id="beer", title="Cerveja Pilsen", price=10.0, quantity=1)],
        customer={"name": name, "phone": "11987654321", "address": "Rua das Flores, 123"},
        delivery_fee=5.0,
        payment_method=PaymentMethod.ON_DELIVERY.value,
        payment_status=payment_status,
        delivery_payment_method="PIX",
    )
    order.created_at = BASE_TIME + timedelta(minutes=minutes)
    current_domain.repository_for(Order).add(order)
    return str(order.id)


def _get(order_id):
    return current_domain.repository_for(Order).get(order_id)


class TestUpdateOrderStatus:
    def test_update(self):
        order_id = _store_order("A1000")
        current_domain.process(
            UpdateOrderStatus(order_id=order_id, status_field="orderStatus", value="Confirmado"),
            asynchronous=False,
        )
        assert _get(order_id).order_status == "Confirmado"

    def test_invalid_value(self):
        order_id = _store_order("A1000")
        with pytest.raises(ValidationError):
            current_domain.process(
                UpdateOrderStatus(order_id=order_id, status_field="paymentStatus", value="Estornado"),
                asynchronous=False,
            )

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateOrderStatus(order_id="missing", status_field="paymentStatus", value="Pago"),
                asynchronous=False,
            )


class TestBulkUpdateOrders:
    def test_updates_every_order(self):
        ids = [_store_order(f"B{1000 + n}", minutes=n) for n in range(3)]

        affected = current_domain.process(
            BulkUpdateOrders(order_ids=json.dumps(ids), status_field="paymentStatus", value="Pago"),
            asynchronous=False,
        )

        assert affected == 3
        assert {_get(order_id).status for order_id in ids} == {"Pago"}

    def test_missing_id_writes_nothing(self):
        ids = [_store_order("C1000"), _store_order("C1001", minutes=1)]

        with pytest.raises(ObjectNotFoundError) as exc:
            current_domain.process(
                BulkUpdateOrders(
                    order_ids=json.dumps([ids[0], "missing", ids[1]]),
                    status_field="orderStatus",
                    value="Enviado",
                ),
                asynchronous=False,
            )

        assert "missing" in str(exc.value)
        assert {_get(order_id).order_status for order_id in ids} == {"Aguardando"}

    def test_invalid_field_writes_nothing(self):
        order_id = _store_order("C2000")
        with pytest.raises(ValidationError):
            current_domain.process(
                BulkUpdateOrders(order_ids=json.dumps([order_id]), status_field="customer", value="x"),
                asynchronous=False,
            )
        assert _get(order_id).order_status == "Aguardando"

    def test_empty_selection(self):
        with pytest.raises(ValidationError):
            current_domain.process(
                BulkUpdateOrders(order_ids=json.dumps([]), status_field="orderStatus", value="Enviado"),
                asynchronous=False,
            )


class TestBulkDeleteOrders:
    def test_deletes_every_order(self):
        ids = [_store_order("D1000"), _store_order("D1001", minutes=1)]
        keep = _store_order("D1002", minutes=2)

        affected = current_domain.process(BulkDeleteOrders(order_ids=json.dumps(ids)), asynchronous=False)

        assert affected == 2
        assert [order["id"] for order in list_orders()] == [keep]

    def test_missing_id_deletes_nothing(self):
        ids = [_store_order("E1000"), _store_order("E1001", minutes=1)]

        with pytest.raises(ObjectNotFoundError):
            current_domain.process(BulkDeleteOrders(order_ids=json.dumps([*ids, "missing"])), asynchronous=False)

        assert len(list_orders()) == 2


class TestOrderQueries:
    def test_list_newest_first(self):
        older = _store_order("F1000", minutes=0)
        newer = _store_order("F1001", minutes=5)
        assert [order["id"] for order in list_orders()] == [newer, older]

    def test_filters(self):
        _store_order("G1000", name="Maria Souza")
        paid = _store_order("G1001", name="Joao Lima", minutes=1, payment_status="Pago")

        assert [order["id"] for order in list_orders(payment_status="Pago")] == [paid]
        assert [order["id"] for order in list_orders(search="joao")] == [paid]
        assert [order["id"] for order in list_orders(search="g1001")] == [paid]
        assert list_orders(order_status="Entregue") == []

    def test_orders_by_ids_batches_and_skips_unknown(self):
        ids = [_store_order(f"H{1000 + n}", minutes=n) for n in range(35)]

        orders = get_orders_by_ids([*ids, "unknown"])

        assert len(orders) == 35
        assert [order["id"] for order in orders] == list(reversed(ids))

    def test_orders_by_ids_empty(self):
        assert get_orders_by_ids([]) == []

    def test_get_by_id_or_number(self):
        order_id = _store_order("J4321")
        assert get_order(order_id)["order_number"] == "J4321"
        assert get_order("j4321")["id"] == order_id

    def test_get_unknown(self):
        with pytest.raises(ObjectNotFoundError):
            get_order("Z0000")

    def test_serialized_shape(self):
        order = get_order(_store_order("K1000"))
        assert order["status"] == order["payment_status"] == "Pendente"
        assert order["customer"]["name"] == "Maria Souza"
        assert order["items"][0]["quantity"] == 1
        assert order["total_amount"] == 15.0
