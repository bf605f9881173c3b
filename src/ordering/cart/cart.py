"""Client-local shopping cart.

The cart never reaches the document store: it lives on the customer's device
behind a ``CartStore`` and is only submitted, as line snapshots, when the
checkout places the order.
"""

from dataclasses import dataclass, replace

from protean.exceptions import ValidationError

from ordering.order.pricing import subtotal_of, total_with_fee


@dataclass(frozen=True)
class CartItem:
    """A menu item snapshot plus the quantity the customer wants."""

    item_id: str
    title: str
    price: float
    quantity: int = 1
    image_url: str | None = None
    category_id: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "title": self.title,
            "price": self.price,
            "quantity": self.quantity,
            "image_url": self.image_url,
            "category_id": self.category_id,
        }

    @classmethod
    def from_item(cls, item: dict, quantity: int = 1) -> "CartItem":
        """Build a line from a serialized catalogue item."""
        return cls(
            item_id=str(item.get("item_id") or item["id"]),
            title=item["title"],
            price=float(item["price"]),
            quantity=quantity,
            image_url=item.get("image_url"),
            category_id=item.get("category_id"),
        )


class Cart:
    def __init__(self, items=None) -> None:
        self._items: dict[str, CartItem] = {}
        for item in items or []:
            self._items[item.item_id] = item

    @property
    def items(self) -> list[CartItem]:
        return list(self._items.values())

    def add(self, item, quantity: int = 1) -> CartItem:
        """Add ``quantity`` of ``item``; adding an item already in the cart increases its quantity."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        line = item if isinstance(item, CartItem) else CartItem.from_item(item)
        if line.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

        existing = self._items.get(line.item_id)
        if existing:
            line = replace(existing, quantity=existing.quantity + quantity)
        else:
            line = replace(line, quantity=quantity)
        self._items[line.item_id] = line
        return line

    def set_quantity(self, item_id: str, quantity: int) -> None:
        """Set a line's quantity. Zero or less removes the line."""
        if item_id not in self._items:
            raise ValidationError({"item_id": ["Item not found in cart"]})
        if quantity <= 0:
            self.remove(item_id)
            return
        self._items[item_id] = replace(self._items[item_id], quantity=quantity)

    def remove(self, item_id: str) -> None:
        self._items.pop(item_id, None)

    def clear(self) -> None:
        self._items.clear()

    @property
    def subtotal(self) -> float:
        return subtotal_of(self.items)

    def total_with_fee(self, delivery_fee: float) -> float:
        return total_with_fee(self.subtotal, delivery_fee)

    @property
    def is_empty(self) -> bool:
        return not self._items

    @property
    def count(self) -> int:
        """Number of units across all lines (the badge on the cart icon)."""
        return sum(item.quantity for item in self._items.values())

    def to_lines(self) -> list[dict]:
        return [item.to_dict() for item in self.items]
