"""FastAPI endpoints for the Catalogue domain.

``storefront_router`` serves the public read side. The ``admin_*`` routers
live under ``/admin`` and are only reachable through the session gate.
"""

from fastapi import APIRouter, Query
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CategoryIdResponse,
    CategoryRequest,
    CategoryResponse,
    CreateHighlightRequest,
    CreateItemRequest,
    HighlightIdResponse,
    HighlightResponse,
    ItemIdResponse,
    ItemPageResponse,
    ItemResponse,
    StatusResponse,
    SwapHighlightsRequest,
    UpdateHighlightRequest,
    UpdateItemRequest,
)
from catalogue.category.lookup import get_category, list_categories
from catalogue.category.management import CreateCategory, DeleteCategory, RenameCategory
from catalogue.highlight.carousel import get_highlight, list_active_highlights, list_highlights
from catalogue.highlight.management import CreateHighlight, DeleteHighlight, UpdateHighlight
from catalogue.highlight.reordering import SwapHighlightPositions
from catalogue.item.listing import DEFAULT_PAGE_LIMIT, get_item, list_items, search_items
from catalogue.item.management import CreateItem, DeleteItem, UpdateItem

storefront_router = APIRouter(tags=["storefront"])
admin_category_router = APIRouter(prefix="/admin/categories", tags=["admin:categories"])
admin_item_router = APIRouter(prefix="/admin/items", tags=["admin:items"])
admin_highlight_router = APIRouter(prefix="/admin/highlights", tags=["admin:highlights"])


def _item_page(category_id, search, limit, cursor) -> ItemPageResponse:
    page = list_items(category_id=category_id, search=search, page_limit=limit, cursor=cursor)
    return ItemPageResponse(items=page.items, cursor=page.cursor, has_more=page.has_more)


# --- Storefront endpoints ---


@storefront_router.get("/categories", response_model=list[CategoryResponse])
async def storefront_categories() -> list[CategoryResponse]:
    return list_categories()


@storefront_router.get("/items", response_model=ItemPageResponse)
async def storefront_items(
    category_id: str | None = None,
    search: str | None = None,
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=100),
    cursor: str | None = None,
) -> ItemPageResponse:
    return _item_page(category_id, search, limit, cursor)


@storefront_router.get("/items/search", response_model=list[ItemResponse])
async def storefront_search(q: str = Query("", max_length=120)) -> list[ItemResponse]:
    return search_items(q)


@storefront_router.get("/items/{item_id}", response_model=ItemResponse)
async def storefront_item(item_id: str) -> ItemResponse:
    return get_item(item_id)


@storefront_router.get("/highlights", response_model=list[HighlightResponse])
async def storefront_highlights() -> list[HighlightResponse]:
    return list_active_highlights()


# --- Admin: categories ---


@admin_category_router.get("", response_model=list[CategoryResponse])
async def admin_list_categories() -> list[CategoryResponse]:
    return list_categories()


@admin_category_router.post("", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CategoryRequest) -> CategoryIdResponse:
    result = current_domain.process(CreateCategory(name=body.name), asynchronous=False)
    return CategoryIdResponse(category_id=result)


@admin_category_router.get("/{category_id}", response_model=CategoryResponse)
async def admin_get_category(category_id: str) -> CategoryResponse:
    return get_category(category_id)


@admin_category_router.put("/{category_id}", response_model=StatusResponse)
async def rename_category(category_id: str, body: CategoryRequest) -> StatusResponse:
    current_domain.process(RenameCategory(category_id=category_id, name=body.name), asynchronous=False)
    return StatusResponse()


@admin_category_router.delete("/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- Admin: items ---


@admin_item_router.get("", response_model=ItemPageResponse)
async def admin_list_items(
    category_id: str | None = None,
    search: str | None = None,
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=100),
    cursor: str | None = None,
) -> ItemPageResponse:
    return _item_page(category_id, search, limit, cursor)


@admin_item_router.post("", status_code=201, response_model=ItemIdResponse)
async def create_item(body: CreateItemRequest) -> ItemIdResponse:
    command = CreateItem(
        title=body.title,
        description=body.description,
        price=body.price,
        image_url=body.image_url,
        category_id=body.category_id,
    )
    result = current_domain.process(command, asynchronous=False)
    return ItemIdResponse(item_id=result)


@admin_item_router.get("/{item_id}", response_model=ItemResponse)
async def admin_get_item(item_id: str) -> ItemResponse:
    return get_item(item_id)


@admin_item_router.put("/{item_id}", response_model=StatusResponse)
async def update_item(item_id: str, body: UpdateItemRequest) -> StatusResponse:
    command = UpdateItem(
        item_id=item_id,
        title=body.title,
        description=body.description,
        price=body.price,
        image_url=body.image_url,
        category_id=body.category_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_item_router.delete("/{item_id}", response_model=StatusResponse)
async def delete_item(item_id: str) -> StatusResponse:
    current_domain.process(DeleteItem(item_id=item_id), asynchronous=False)
    return StatusResponse()


# --- Admin: highlights ---


@admin_highlight_router.get("", response_model=list[HighlightResponse])
async def admin_list_highlights() -> list[HighlightResponse]:
    return list_highlights()


@admin_highlight_router.post("", status_code=201, response_model=HighlightIdResponse)
async def create_highlight(body: CreateHighlightRequest) -> HighlightIdResponse:
    command = CreateHighlight(
        title=body.title,
        description=body.description,
        image_url=body.image_url,
        link=body.link,
        is_active=body.is_active,
    )
    result = current_domain.process(command, asynchronous=False)
    return HighlightIdResponse(highlight_id=result)


@admin_highlight_router.post("/swap", response_model=StatusResponse)
async def swap_highlights(body: SwapHighlightsRequest) -> StatusResponse:
    command = SwapHighlightPositions(
        first_highlight_id=body.first_highlight_id,
        second_highlight_id=body.second_highlight_id,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_highlight_router.get("/{highlight_id}", response_model=HighlightResponse)
async def admin_get_highlight(highlight_id: str) -> HighlightResponse:
    return get_highlight(highlight_id)


@admin_highlight_router.put("/{highlight_id}", response_model=StatusResponse)
async def update_highlight(highlight_id: str, body: UpdateHighlightRequest) -> StatusResponse:
    command = UpdateHighlight(
        highlight_id=highlight_id,
        title=body.title,
        description=body.description,
        image_url=body.image_url,
        link=body.link,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_highlight_router.delete("/{highlight_id}", response_model=StatusResponse)
async def delete_highlight(highlight_id: str) -> StatusResponse:
    current_domain.process(DeleteHighlight(highlight_id=highlight_id), asynchronous=False)
    return StatusResponse()
