"""Order line normalization and the checkout total law.

``total = round(sum(price * quantity) + delivery_fee, 2)``; gateways receive
the total in minor units (centavos).
"""

from dataclasses import asdict, dataclass

from protean.exceptions import ValidationError


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of a cart line as submitted at checkout."""

    item_id: str
    title: str
    price: float
    quantity: int
    image_url: str | None = None
    category_id: str | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity

    def to_dict(self) -> dict:
        return asdict(self)


def parse_lines(raw_lines) -> list[OrderLine]:
    """Validate submitted lines. Raises ``ValidationError`` on an empty or malformed cart."""
    if not raw_lines:
        raise ValidationError({"items": ["Cart is empty"]})

    lines = []
    for index, raw in enumerate(raw_lines):
        item_id = raw.get("item_id") or raw.get("id")
        title = (raw.get("title") or "").strip()
        try:
            price = float(raw.get("price"))
            quantity = int(raw.get("quantity", 1))
        except (TypeError, ValueError) as exc:
            raise ValidationError({"items": [f"Line {index}: price and quantity must be numbers"]}) from exc

        if not item_id or not title:
            raise ValidationError({"items": [f"Line {index}: item id and title are required"]})
        if price <= 0:
            raise ValidationError({"items": [f"Line {index}: price must be greater than zero"]})
        if quantity < 1:
            raise ValidationError({"items": [f"Line {index}: quantity must be at least 1"]})

        lines.append(
            OrderLine(
                item_id=str(item_id),
                title=title,
                price=price,
                quantity=quantity,
                image_url=raw.get("image_url"),
                category_id=raw.get("category_id"),
            )
        )
    return lines


def subtotal_of(lines) -> float:
    return round(sum(line.line_total for line in lines), 2)


def total_with_fee(subtotal: float, delivery_fee: float) -> float:
    return round(subtotal + delivery_fee, 2)


def to_minor_units(amount: float) -> int:
    return int(round(amount * 100))
