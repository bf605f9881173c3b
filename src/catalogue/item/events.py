"""Domain events for the Item aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Item")
class ItemCreated:
    """A new item was added to the menu."""

    __version__ = 1

    item_id: Identifier(required=True)
    title: String(required=True)
    price: Float(required=True)
    category_id: Identifier()
    created_at: DateTime(required=True)


@catalogue.event(part_of="Item")
class ItemDetailsUpdated:
    """An item's title, description, price, image or category changed."""

    __version__ = 1

    item_id: Identifier(required=True)
    title: String(required=True)
    previous_price: Float()
    price: Float(required=True)
    category_id: Identifier()
