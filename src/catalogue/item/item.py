"""Item aggregate root: a drink or product on the storefront menu."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue
from catalogue.shared.url import is_http_url


@catalogue.aggregate
class Item:
    """A sellable menu item.

    Items are created from the admin form, updated in place and deleted
    independently of their category. There is no versioning: concurrent edits
    are last-write-wins.
    """

    title: String(required=True, min_length=3, max_length=120)
    description: String(required=True, min_length=10, max_length=2000)
    price: Float(required=True)
    image_url: String(max_length=2048)
    category_id: Identifier()
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def price_must_be_positive(self):
        if self.price is not None and self.price <= 0:
            raise ValidationError({"price": ["Price must be greater than zero"]})

    @invariant.post
    def image_url_must_be_http(self):
        if self.image_url and not is_http_url(self.image_url):
            raise ValidationError({"image_url": ["Image URL must be an absolute http(s) URL"]})

    @classmethod
    def create(cls, title, description, price, image_url=None, category_id=None):
        from catalogue.item.events import ItemCreated

        now = datetime.now(UTC)
        item = cls(
            title=title,
            description=description,
            price=price,
            image_url=image_url,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        item.raise_(
            ItemCreated(
                item_id=item.id,
                title=item.title,
                price=item.price,
                category_id=category_id,
                created_at=now,
            )
        )
        return item

    def update_details(self, title=None, description=None, price=None, image_url=None, category_id=None):
        from catalogue.item.events import ItemDetailsUpdated

        previous_price = self.price
        with atomic_change(self):
            if title is not None:
                self.title = title
            if description is not None:
                self.description = description
            if price is not None:
                self.price = price
            if image_url is not None:
                self.image_url = image_url
            if category_id is not None:
                self.category_id = category_id
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ItemDetailsUpdated(
                item_id=self.id,
                title=self.title,
                previous_price=previous_price,
                price=self.price,
                category_id=self.category_id,
            )
        )
