"""Domain events for the Highlight aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Highlight")
class HighlightCreated:
    """A highlight was appended to the carousel."""

    __version__ = 1

    highlight_id: Identifier(required=True)
    title: String(required=True)
    position: Integer(required=True)
    is_active: Boolean(default=False)


@catalogue.event(part_of="Highlight")
class HighlightUpdated:
    __version__ = 1

    highlight_id: Identifier(required=True)
    title: String(required=True)
    is_active: Boolean(default=False)


@catalogue.event(part_of="Highlight")
class HighlightMoved:
    """A highlight took a new carousel position during a swap."""

    __version__ = 1

    highlight_id: Identifier(required=True)
    previous_position: Integer()
    position: Integer(required=True)
