"""Tests for the Item aggregate root."""

import pytest
from catalogue.item.events import ItemCreated, ItemDetailsUpdated
from catalogue.item.item import Item
from protean.exceptions import ValidationError
from protean.utils.reflection import declared_fields


def _item(**overrides):
    defaults = {
        "title": "Heineken Long Neck",
        "description": "Cerveja lager puro malte, 330ml.",
        "price": 7.5,
        "image_url": "https://cdn.example.com/heineken.png",
        "category_id": "cat-beer",
    }
    defaults.update(overrides)
    return Item.create(**defaults)


class TestItemConstruction:
    def test_element_type(self):
        from protean.utils import DomainObjects

        assert Item.element_type == DomainObjects.AGGREGATE

    def test_declared_fields(self):
        fields = declared_fields(Item)
        for name in ("title", "description", "price", "image_url", "category_id", "created_at", "updated_at"):
            assert name in fields

    def test_create_item(self):
        item = _item()
        assert item.title == "Heineken Long Neck"
        assert item.price == 7.5
        assert item.category_id == "cat-beer"
        assert item.created_at is not None
        assert item.created_at == item.updated_at

    def test_create_without_category(self):
        item = _item(category_id=None)
        assert item.category_id is None

    def test_create_raises_event(self):
        item = _item()
        assert len(item._events) == 1
        event = item._events[0]
        assert isinstance(event, ItemCreated)
        assert event.title == "Heineken Long Neck"
        assert event.price == 7.5


class TestItemValidation:
    @pytest.mark.parametrize("price", [0, 0.0, -1, -0.01])
    def test_price_must_be_positive(self, price):
        with pytest.raises(ValidationError) as exc:
            _item(price=price)
        assert "price" in exc.value.messages

    def test_price_is_required(self):
        with pytest.raises(ValidationError):
            _item(price=None)

    def test_title_minimum_length(self):
        with pytest.raises(ValidationError) as exc:
            _item(title="Ab")
        assert "title" in exc.value.messages

    def test_description_minimum_length(self):
        with pytest.raises(ValidationError) as exc:
            _item(description="Curta")
        assert "description" in exc.value.messages

    def test_image_url_must_be_http(self):
        with pytest.raises(ValidationError) as exc:
            _item(image_url="ftp://cdn.example.com/a.png")
        assert "image_url" in exc.value.messages

    def test_image_url_is_optional(self):
        assert _item(image_url=None).image_url is None


class TestItemUpdate:
    def test_partial_update_keeps_other_fields(self):
        item = _item()
        item.update_details(price=8.0)

        assert item.price == 8.0
        assert item.title == "Heineken Long Neck"
        assert item.category_id == "cat-beer"

    def test_update_raises_event_with_previous_price(self):
        item = _item()
        item._events.clear()

        item.update_details(title="Heineken 600ml", price=12.0)

        event = item._events[-1]
        assert isinstance(event, ItemDetailsUpdated)
        assert event.previous_price == 7.5
        assert event.price == 12.0
        assert event.title == "Heineken 600ml"

    def test_update_to_non_positive_price_is_rejected(self):
        item = _item()
        with pytest.raises(ValidationError):
            item.update_details(price=0)

    def test_update_moves_category(self):
        item = _item()
        item.update_details(category_id="cat-spirits")
        assert item.category_id == "cat-spirits"
