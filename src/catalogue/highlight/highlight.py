"""Highlight aggregate root: promotional banners shown on the storefront carousel."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Integer, String

from catalogue.domain import catalogue
from catalogue.shared.url import is_http_url


@catalogue.aggregate
class Highlight:
    """A carousel banner with an image and an optional destination link.

    ``position`` orders the carousel ascending. New highlights are appended
    after the current maximum; positions are rearranged only by swapping two
    highlights, so gaps left by deletions are never compacted.
    """

    title: String(required=True, min_length=3, max_length=120)
    description: String(required=True, min_length=10, max_length=500)
    image_url: String(required=True, max_length=2048)
    link: String(max_length=2048)
    is_active: Boolean(default=False)
    position: Integer(required=True, min_value=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def urls_must_be_http(self):
        errors = {}
        if not is_http_url(self.image_url):
            errors["image_url"] = ["Image URL must be an absolute http(s) URL"]
        if self.link and not is_http_url(self.link):
            errors["link"] = ["Link must be an absolute http(s) URL"]
        if errors:
            raise ValidationError(errors)

    @classmethod
    def create(cls, title, description, image_url, position, link=None, is_active=False):
        from catalogue.highlight.events import HighlightCreated

        now = datetime.now(UTC)
        highlight = cls(
            title=title,
            description=description,
            image_url=image_url,
            link=link,
            is_active=bool(is_active),
            position=position,
            created_at=now,
            updated_at=now,
        )
        highlight.raise_(
            HighlightCreated(
                highlight_id=highlight.id,
                title=highlight.title,
                position=position,
                is_active=highlight.is_active,
            )
        )
        return highlight

    def update_details(self, title=None, description=None, image_url=None, link=None, is_active=None):
        from catalogue.highlight.events import HighlightUpdated

        with atomic_change(self):
            if title is not None:
                self.title = title
            if description is not None:
                self.description = description
            if image_url is not None:
                self.image_url = image_url
            if link is not None:
                self.link = link
            if is_active is not None:
                self.is_active = is_active
            self.updated_at = datetime.now(UTC)

        self.raise_(
            HighlightUpdated(
                highlight_id=self.id,
                title=self.title,
                is_active=self.is_active,
            )
        )

    def move_to(self, position):
        from catalogue.highlight.events import HighlightMoved

        previous_position = self.position
        self.position = position
        self.updated_at = datetime.now(UTC)

        self.raise_(
            HighlightMoved(
                highlight_id=self.id,
                previous_position=previous_position,
                position=position,
            )
        )
