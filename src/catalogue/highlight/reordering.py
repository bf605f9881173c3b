"""Swapping two highlights' carousel positions.

Both highlights are loaded before either is changed, so a missing id aborts
the swap with nothing written. The two writes share the handler's unit of work.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.highlight.highlight import Highlight

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Highlight")
class SwapHighlightPositions:
    first_highlight_id: Identifier(required=True)
    second_highlight_id: Identifier(required=True)


@catalogue.command_handler(part_of=Highlight)
class SwapHighlightPositionsHandler:
    @handle(SwapHighlightPositions)
    def swap_positions(self, command):
        if str(command.first_highlight_id) == str(command.second_highlight_id):
            raise ValidationError({"second_highlight_id": ["Cannot swap a highlight with itself"]})

        repo = current_domain.repository_for(Highlight)
        first = repo.get(command.first_highlight_id)
        second = repo.get(command.second_highlight_id)

        first_position, second_position = first.position, second.position
        first.move_to(second_position)
        second.move_to(first_position)

        repo.add(first)
        repo.add(second)

        logger.info(
            "Highlight positions swapped",
            first_highlight_id=str(first.id),
            second_highlight_id=str(second.id),
            first_position=first.position,
            second_position=second.position,
        )
