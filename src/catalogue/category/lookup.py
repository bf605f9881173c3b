"""Read-side helpers for categories.

Category names are joined onto item listings at read time: every listing call
scans the whole category collection into an ``id -> name`` map.
"""

from protean.utils.globals import current_domain

from catalogue.category.category import Category
from shared.scan import scan

FALLBACK_CATEGORY_LABEL = "Sem Categoria"


def serialize_category(category):
    return {
        "id": str(category.id),
        "name": category.name,
        "created_at": category.created_at.isoformat() if category.created_at else None,
    }


def list_categories():
    """All categories, newest first."""
    query = current_domain.repository_for(Category)._dao.query.order_by("-created_at")
    return [serialize_category(category) for category in scan(query)]


def get_category(category_id):
    return serialize_category(current_domain.repository_for(Category).get(category_id))


def category_names():
    query = current_domain.repository_for(Category)._dao.query.order_by("-created_at")
    return {str(category.id): category.name for category in scan(query)}


def category_label(category_id, names):
    if not category_id:
        return FALLBACK_CATEGORY_LABEL
    return names.get(str(category_id), FALLBACK_CATEGORY_LABEL)
