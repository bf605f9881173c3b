"""Category aggregate root for grouping menu items."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from catalogue.domain import catalogue


@catalogue.aggregate
class Category:
    """A flat grouping of menu items (e.g. "Cervejas", "Destilados").

    Items point at a category through ``category_id``. Deleting a category does
    not touch its items; listings render those items as uncategorized.
    """

    name: String(required=True, min_length=2, max_length=100)
    created_at: DateTime()
    updated_at: DateTime()

    @classmethod
    def create(cls, name):
        from catalogue.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name.strip(),
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=category.id,
                name=category.name,
                created_at=now,
            )
        )
        return category

    def rename(self, name):
        from catalogue.category.events import CategoryRenamed

        previous_name = self.name
        self.name = name.strip()
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryRenamed(
                category_id=self.id,
                previous_name=previous_name,
                name=self.name,
            )
        )

