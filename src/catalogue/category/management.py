"""Category management: commands and handlers."""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from catalogue.category.category import Category
from catalogue.domain import catalogue

logger = structlog.get_logger(__name__)


@catalogue.command(part_of="Category")
class CreateCategory:
    name: String(required=True, min_length=2, max_length=100)


@catalogue.command(part_of="Category")
class RenameCategory:
    category_id: Identifier(required=True)
    name: String(required=True, min_length=2, max_length=100)


@catalogue.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@catalogue.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        category = Category.create(name=command.name)
        current_domain.repository_for(Category).add(category)

        logger.info("Category created", category_id=str(category.id), name=category.name)
        return str(category.id)

    @handle(RenameCategory)
    def rename_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.rename(command.name)
        repo.add(category)

    @handle(DeleteCategory)
    def delete_category(self, command):
        # Items keep their category_id; listings fall back to the uncategorized label.
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo._dao.delete(category)

        logger.info("Category deleted", category_id=str(command.category_id))
