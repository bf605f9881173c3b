"""Tests for the client-local cart and its stores."""

import pytest
from ordering.cart.cart import Cart, CartItem
from ordering.cart.storage import ORDER_HISTORY_KEY, InMemoryCartStore, InMemoryOrderHistoryStore
from protean.exceptions import ValidationError

BEER = {"id": "beer", "title": "Cerveja Pilsen", "price": 10.0}
WINE = {"id": "wine", "title": "Vinho Tinto", "price": 45.5}


class TestCart:
    def test_add_merges_same_item(self):
        cart = Cart()
        cart.add(BEER)
        cart.add(BEER, quantity=2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 3

    def test_count_and_subtotal(self):
        cart = Cart()
        cart.add(BEER, quantity=2)
        cart.add(WINE)
        assert cart.count == 3
        assert cart.subtotal == 65.5
        assert cart.total_with_fee(5.0) == 70.5

    def test_set_quantity(self):
        cart = Cart()
        cart.add(BEER)
        cart.set_quantity("beer", 4)
        assert cart.items[0].quantity == 4

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_set_quantity_to_zero_or_below_removes(self, quantity):
        cart = Cart()
        cart.add(BEER)
        cart.set_quantity("beer", quantity)
        assert cart.is_empty

    def test_set_quantity_for_unknown_item(self):
        with pytest.raises(ValidationError):
            Cart().set_quantity("nope", 1)

    def test_add_rejects_non_positive_quantity(self):
        with pytest.raises(ValidationError):
            Cart().add(BEER, quantity=0)

    def test_add_rejects_free_item(self):
        with pytest.raises(ValidationError):
            Cart().add({**BEER, "price": 0})

    def test_remove_and_clear(self):
        cart = Cart()
        cart.add(BEER)
        cart.add(WINE)
        cart.remove("beer")
        assert [item.item_id for item in cart.items] == ["wine"]
        cart.clear()
        assert cart.is_empty
        assert cart.subtotal == 0

    def test_to_lines(self):
        cart = Cart([CartItem(item_id="beer", title="Cerveja Pilsen", price=10.0, quantity=2)])
        assert cart.to_lines()[0] == {
            "item_id": "beer",
            "title": "Cerveja Pilsen",
            "price": 10.0,
            "quantity": 2,
            "image_url": None,
            "category_id": None,
        }


class TestStores:
    def test_cart_store_round_trip(self):
        store = InMemoryCartStore()
        cart = store.load()
        cart.add(BEER, quantity=2)
        store.save(cart)

        assert store.load().count == 2
        store.clear()
        assert store.load().is_empty

    def test_order_history_appends_once(self):
        storage = {}
        history = InMemoryOrderHistoryStore(storage)
        history.add("o1")
        history.add("o2")
        history.add("o1")

        assert history.load() == ["o1", "o2"]
        assert storage[ORDER_HISTORY_KEY] == ["o1", "o2"]
