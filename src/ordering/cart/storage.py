"""Client-local persistence ports for the cart and the placed-order history.

The browser keeps both in local storage; these interfaces stand in for it on
the server side and in tests.
"""

from abc import ABC, abstractmethod

from ordering.cart.cart import Cart

ORDER_HISTORY_KEY = "myOrderIds"


class CartStore(ABC):
    @abstractmethod
    def load(self) -> Cart: ...

    @abstractmethod
    def save(self, cart: Cart) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...


class OrderHistoryStore(ABC):
    """Ids of the orders placed from this device, oldest first."""

    @abstractmethod
    def load(self) -> list[str]: ...

    @abstractmethod
    def add(self, order_id: str) -> None: ...


class InMemoryCartStore(CartStore):
    def __init__(self, cart: Cart | None = None) -> None:
        self._items = list(cart.items) if cart else []

    def load(self) -> Cart:
        return Cart(self._items)

    def save(self, cart: Cart) -> None:
        self._items = list(cart.items)

    def clear(self) -> None:
        self._items = []


class InMemoryOrderHistoryStore(OrderHistoryStore):
    def __init__(self, storage: dict | None = None) -> None:
        self._storage = storage if storage is not None else {}

    def load(self) -> list[str]:
        return list(self._storage.get(ORDER_HISTORY_KEY, []))

    def add(self, order_id: str) -> None:
        ids = self.load()
        if order_id not in ids:
            ids.append(order_id)
        self._storage[ORDER_HISTORY_KEY] = ids
