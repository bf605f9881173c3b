"""Human-readable order numbers: one letter and four digits, e.g. ``K4821``.

The space is small (26 * 9000), so every candidate is checked against stored
orders before use.
"""

import random
import string

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

logger = structlog.get_logger(__name__)

MAX_ATTEMPTS = 10

_random = random.SystemRandom()


def generate_order_number(rng=_random):
    return f"{rng.choice(string.ascii_uppercase)}{rng.randint(1000, 9999)}"


def order_number_taken(order_number):
    from ordering.order.order import Order

    query = current_domain.repository_for(Order)._dao.query.filter(order_number=order_number).limit(1)
    return bool(query.all().items)


def allocate_order_number(is_taken=order_number_taken, rng=_random, attempts=MAX_ATTEMPTS):
    """Return an unused order number, trying at most ``attempts`` candidates."""
    for attempt in range(1, attempts + 1):
        candidate = generate_order_number(rng)
        if not is_taken(candidate):
            return candidate
        logger.debug("Order number collision", candidate=candidate, attempt=attempt)

    logger.error("Could not allocate an order number", attempts=attempts)
    raise ValidationError({"order_number": ["Could not allocate a unique order number"]})
