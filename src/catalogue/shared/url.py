"""Validation helper for image and link URLs stored on catalogue documents."""

import re

_HTTP_URL = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def is_http_url(value: str | None) -> bool:
    """Return True when ``value`` looks like an absolute http(s) URL."""
    if not value:
        return False
    return bool(_HTTP_URL.match(value.strip()))
