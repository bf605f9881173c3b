"""Domain events for the Category aggregate."""

from protean.fields import DateTime, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Category")
class CategoryCreated:
    """A new category was added to the menu."""

    __version__ = 1

    category_id: Identifier(required=True)
    name: String(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Category")
class CategoryRenamed:
    """A category's display name was changed."""

    __version__ = 1

    category_id: Identifier(required=True)
    previous_name: String(required=True)
    name: String(required=True)
