"""Item management: create, update and delete menu items."""

import structlog
from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.item.item import Item

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Item")
class CreateItem:
    title: String(required=True, max_length=120)
    description: String(required=True, max_length=2000)
    price: Float(required=True)
    image_url: String(max_length=2048)
    category_id: Identifier()


@catalogue.command(part_of="Item")
class UpdateItem:
    item_id: Identifier(required=True)
    title: String(max_length=120)
    description: String(max_length=2000)
    price: Float()
    image_url: String(max_length=2048)
    category_id: Identifier()


@catalogue.command(part_of="Item")
class DeleteItem:
    item_id: Identifier(required=True)


@catalogue.command_handler(part_of=Item)
class ManageItemHandler:
    @handle(CreateItem)
    def create_item(self, command):
        item = Item.create(
            title=command.title,
            description=command.description,
            price=command.price,
            image_url=command.image_url,
            category_id=command.category_id,
        )
        current_domain.repository_for(Item).add(item)

        logger.info("Item created", item_id=str(item.id), price=item.price)
        return str(item.id)

    @handle(UpdateItem)
    def update_item(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        item.update_details(
            title=command.title,
            description=command.description,
            price=command.price,
            image_url=command.image_url,
            category_id=command.category_id,
        )
        repo.add(item)

    @handle(DeleteItem)
    def delete_item(self, command):
        repo = current_domain.repository_for(Item)
        item = repo.get(command.item_id)
        repo._dao.delete(item)

        logger.info("Item deleted", item_id=str(command.item_id))
