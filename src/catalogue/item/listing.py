"""Item listing: cursor pagination, category filter and title search.

Two strategies, picked by whether a search term is present:

* Plain listing is a cursor-range query ordered by ``created_at`` descending,
  with the item id breaking ties. The cursor is the id of the last item the
  caller has seen; the next page starts strictly after that item in this
  order. One extra record is fetched to decide ``has_more``.
* Search cannot be combined with a cursor range in the store, so the whole
  (optionally category-filtered) result set is loaded, matched on title
  (case-insensitive substring) in memory, and sliced after the cursor's
  position. This is O(n) per page and only suits a small catalogue.
"""

from dataclasses import dataclass, field

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from catalogue.category.lookup import category_label, category_names
from catalogue.item.item import Item
from shared.scan import scan

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_LIMIT = 15


@dataclass(frozen=True)
class ItemPage:
    """One page of serialized items plus the cursor for the next call."""

    items: list[dict] = field(default_factory=list)
    cursor: str | None = None
    has_more: bool = False


def serialize_item(item, names):
    return {
        "id": str(item.id),
        "title": item.title,
        "description": item.description,
        "price": item.price,
        "image_url": item.image_url,
        "category_id": str(item.category_id) if item.category_id else None,
        "category_name": category_label(item.category_id, names),
        "created_at": item.created_at.isoformat() if item.created_at else None,
    }


def _base_query(category_id=None):
    query = current_domain.repository_for(Item)._dao.query.order_by("-created_at")
    if category_id:
        query = query.filter(category_id=category_id)
    return query


def _title_matches(item, needle):
    return needle in (item.title or "").lower()


def _listing_order(items):
    return sorted(items, key=lambda item: (item.created_at, str(item.id)), reverse=True)


def _same_instant(category_id, created_at):
    return scan(_base_query(category_id).filter(created_at=created_at))


def _records_after(category_id, last_seen, count):
    """The first ``count`` or more items after ``last_seen`` in listing order.

    The store only orders by ``created_at``, so every group of items sharing
    a timestamp at an edge of the window is loaded whole and ordered by id.
    """
    query = _base_query(category_id)
    records = []
    if last_seen is not None:
        records = [
            item
            for item in _same_instant(category_id, last_seen.created_at)
            if str(item.id) < str(last_seen.id)
        ]
        query = query.filter(created_at__lt=last_seen.created_at)

    older = query.limit(count).all().items
    if older:
        fetched = {str(item.id) for item in older}
        older += [item for item in _same_instant(category_id, older[-1].created_at) if str(item.id) not in fetched]

    return _listing_order(records + older)


def list_items(category_id=None, search=None, page_limit=DEFAULT_PAGE_LIMIT, cursor=None):
    """Return the page of items following ``cursor``.

    Raises ``ObjectNotFoundError`` when the cursor does not identify an item
    in the current result set.
    """
    if page_limit is None or page_limit < 1:
        raise ValidationError({"page_limit": ["Page limit must be at least 1"]})

    names = category_names()
    needle = (search or "").strip().lower()
    if needle:
        return _search_page(needle, category_id, page_limit, cursor, names)

    last_seen = current_domain.repository_for(Item).get(cursor) if cursor else None
    records = _records_after(category_id, last_seen, page_limit + 1)
    page = records[:page_limit]

    return ItemPage(
        items=[serialize_item(item, names) for item in page],
        cursor=str(page[-1].id) if page else None,
        has_more=len(records) > page_limit,
    )


def _search_page(needle, category_id, page_limit, cursor, names):
    matches = _listing_order(item for item in scan(_base_query(category_id)) if _title_matches(item, needle))

    start = 0
    if cursor:
        ids = [str(item.id) for item in matches]
        if cursor not in ids:
            raise ObjectNotFoundError(f"Cursor item {cursor} is not part of this search")
        start = ids.index(cursor) + 1

    page = matches[start : start + page_limit]
    logger.debug(
        "Searched items in memory",
        search=needle,
        category_id=category_id,
        matched=len(matches),
        returned=len(page),
    )

    return ItemPage(
        items=[serialize_item(item, names) for item in page],
        cursor=str(page[-1].id) if page else None,
        has_more=start + page_limit < len(matches),
    )


def search_items(query_text):
    """Every item whose title contains ``query_text``, newest first."""
    needle = (query_text or "").strip().lower()
    if not needle:
        return []

    names = category_names()
    matches = [item for item in scan(_base_query()) if _title_matches(item, needle)]
    return [serialize_item(item, names) for item in _listing_order(matches)]


def get_item(item_id):
    item = current_domain.repository_for(Item).get(item_id)
    return serialize_item(item, category_names())
