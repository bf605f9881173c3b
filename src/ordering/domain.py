"""Ordering bounded context: settings, checkout and order management.

Holds the store and payment settings singletons, the card and on-delivery
checkout paths that turn a client-side cart into an Order, and the
back-office operations over placed orders.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
