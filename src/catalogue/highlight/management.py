"""Highlight management: create, update and delete carousel banners."""

import structlog
from protean import handle
from protean.fields import Boolean, Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.highlight.carousel import next_position
from catalogue.highlight.highlight import Highlight

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Highlight")
class CreateHighlight:
    title: String(required=True, max_length=120)
    description: String(required=True, max_length=500)
    image_url: String(required=True, max_length=2048)
    link: String(max_length=2048)
    is_active: Boolean(default=False)


@catalogue.command(part_of="Highlight")
class UpdateHighlight:
    highlight_id: Identifier(required=True)
    title: String(max_length=120)
    description: String(max_length=500)
    image_url: String(max_length=2048)
    link: String(max_length=2048)
    is_active: Boolean()


@catalogue.command(part_of="Highlight")
class DeleteHighlight:
    highlight_id: Identifier(required=True)


@catalogue.command_handler(part_of=Highlight)
class ManageHighlightHandler:
    @handle(CreateHighlight)
    def create_highlight(self, command):
        highlight = Highlight.create(
            title=command.title,
            description=command.description,
            image_url=command.image_url,
            link=command.link,
            is_active=command.is_active,
            position=next_position(),
        )
        current_domain.repository_for(Highlight).add(highlight)

        logger.info(
            "Highlight created",
            highlight_id=str(highlight.id),
            position=highlight.position,
            is_active=highlight.is_active,
        )
        return str(highlight.id)

    @handle(UpdateHighlight)
    def update_highlight(self, command):
        repo = current_domain.repository_for(Highlight)
        highlight = repo.get(command.highlight_id)
        highlight.update_details(
            title=command.title,
            description=command.description,
            image_url=command.image_url,
            link=command.link,
            is_active=command.is_active,
        )
        repo.add(highlight)

    @handle(DeleteHighlight)
    def delete_highlight(self, command):
        repo = current_domain.repository_for(Highlight)
        highlight = repo.get(command.highlight_id)
        repo._dao.delete(highlight)

        logger.info("Highlight deleted", highlight_id=str(command.highlight_id))
