"""Catalogue bounded context: categories, menu items and storefront highlights.

Owns everything the storefront browses: the category list, the item catalogue
with its paginated listing, and the promotional highlight carousel.
"""

from protean.domain import Domain

from catalogue.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

catalogue = Domain(name="catalogue")
