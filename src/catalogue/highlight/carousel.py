"""Read-side helpers for the storefront carousel."""

from protean.utils.globals import current_domain

from catalogue.highlight.highlight import Highlight
from shared.scan import scan


def serialize_highlight(highlight):
    return {
        "id": str(highlight.id),
        "title": highlight.title,
        "description": highlight.description,
        "image_url": highlight.image_url,
        "link": highlight.link,
        "is_active": highlight.is_active,
        "position": highlight.position,
        "created_at": highlight.created_at.isoformat() if highlight.created_at else None,
    }


def _ordered_highlights():
    query = current_domain.repository_for(Highlight)._dao.query.order_by("position")
    return list(scan(query))


def list_highlights():
    """Every highlight, newest first. Used by the back office."""
    query = current_domain.repository_for(Highlight)._dao.query.order_by("-created_at")
    return [serialize_highlight(highlight) for highlight in scan(query)]


def list_active_highlights():
    """Only the highlights the storefront carousel should show."""
    return [serialize_highlight(highlight) for highlight in _ordered_highlights() if highlight.is_active]


def get_highlight(highlight_id):
    return serialize_highlight(current_domain.repository_for(Highlight).get(highlight_id))


def next_position():
    """One past the highest position in use, or 0 for an empty carousel."""
    query = current_domain.repository_for(Highlight)._dao.query.order_by("-position").limit(1)
    top = query.all().items
    return top[0].position + 1 if top else 0
