"""BDD tests for checkout with payment on delivery."""

import pytest
from ordering.cart.cart import Cart
from ordering.cart.storage import InMemoryCartStore, InMemoryOrderHistoryStore
from ordering.checkout.flow import CheckoutFlow
from ordering.order.order import Order
from ordering.settings.payment import SavePaymentSettings
from ordering.settings.store import SaveStoreSettings
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/checkout.feature")


@given(parsers.cfparse("the delivery fee is {fee:f}"))
def _(fee):
    current_domain.process(SaveStoreSettings(delivery_fee=fee), asynchronous=False)


@given("payment on delivery is enabled")
def _():
    current_domain.process(SavePaymentSettings(is_payment_on_delivery_enabled=True), asynchronous=False)


@given(
    parsers.cfparse('a cart with {quantity:d} units of "{title}" at {price:f}'),
    target_fixture="flow",
)
def _(quantity, title, price):
    cart = Cart()
    cart.add({"id": "item-1", "title": title, "price": price}, quantity=quantity)
    flow = CheckoutFlow(InMemoryCartStore(cart), InMemoryOrderHistoryStore())
    flow.proceed_to_delivery()
    flow.submit_delivery("Maria Souza", "11987654321", "Rua das Flores, 123")
    return flow


@when(parsers.cfparse("the customer checks out paying {cash:f} in cash"), target_fixture="order")
def _(flow, cash):
    order_id = flow.pay_on_delivery("Dinheiro", cash_tendered=cash)
    return current_domain.repository_for(Order).get(order_id)


@when(parsers.cfparse("the customer tries to pay {cash:f} in cash"), target_fixture="rejection")
def _(flow, cash):
    with pytest.raises(ValidationError) as exc:
        flow.pay_on_delivery("Dinheiro", cash_tendered=cash)
    return exc.value


@then(parsers.cfparse("the order total is {total:f}"))
def _(order, total):
    assert order.total_amount == pytest.approx(total)


@then(parsers.cfparse("the change due is {change:f}"))
def _(order, change):
    assert order.change_due == pytest.approx(change)


@then(parsers.cfparse('the payment status is "{status}"'))
def _(order, status):
    assert order.status == status


@then("the cart is empty")
def _(flow):
    assert flow.cart_store.load().is_empty


@then("the checkout is rejected")
def _(rejection):
    assert "cash_tendered" in rejection.messages


@then("no order is placed")
def _():
    assert current_domain.repository_for(Order)._dao.query.all().total == 0
