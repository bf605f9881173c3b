"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Category Schemas ---


class CategoryRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"name": "Cervejas"}]}}

    name: str = Field(..., min_length=2, max_length=100)


class CategoryResponse(BaseModel):
    id: str
    name: str
    created_at: str | None = None


class CategoryIdResponse(BaseModel):
    category_id: str


# --- Item Schemas ---


class CreateItemRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Heineken Long Neck",
                    "description": "Cerveja lager puro malte, garrafa 330ml.",
                    "price": 7.5,
                    "image_url": "https://cdn.example.com/heineken.png",
                    "category_id": "c8f2b1f0-0000-4000-8000-000000000001",
                }
            ]
        }
    }

    title: str = Field(..., min_length=3, max_length=120)
    description: str = Field(..., min_length=10, max_length=2000)
    price: float = Field(..., gt=0)
    image_url: str | None = Field(None, max_length=2048)
    category_id: str | None = None


class UpdateItemRequest(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=120)
    description: str | None = Field(None, min_length=10, max_length=2000)
    price: float | None = Field(None, gt=0)
    image_url: str | None = Field(None, max_length=2048)
    category_id: str | None = None


class ItemResponse(BaseModel):
    id: str
    title: str
    description: str
    price: float
    image_url: str | None = None
    category_id: str | None = None
    category_name: str
    created_at: str | None = None


class ItemPageResponse(BaseModel):
    items: list[ItemResponse]
    cursor: str | None = None
    has_more: bool


class ItemIdResponse(BaseModel):
    item_id: str


# --- Highlight Schemas ---


class CreateHighlightRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "Happy Hour",
                    "description": "Chopp em dobro das 18h as 20h.",
                    "image_url": "https://cdn.example.com/banners/happy-hour.jpg",
                    "link": "https://lsdrinks.example.com/items?category_id=chopp",
                    "is_active": True,
                }
            ]
        }
    }

    title: str = Field(..., min_length=3, max_length=120)
    description: str = Field(..., min_length=10, max_length=500)
    image_url: str = Field(..., max_length=2048)
    link: str | None = Field(None, max_length=2048)
    is_active: bool = False


class UpdateHighlightRequest(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=120)
    description: str | None = Field(None, min_length=10, max_length=500)
    image_url: str | None = Field(None, max_length=2048)
    link: str | None = Field(None, max_length=2048)
    is_active: bool | None = None


class SwapHighlightsRequest(BaseModel):
    first_highlight_id: str
    second_highlight_id: str


class HighlightResponse(BaseModel):
    id: str
    title: str
    description: str
    image_url: str
    link: str | None = None
    is_active: bool
    position: int
    created_at: str | None = None


class HighlightIdResponse(BaseModel):
    highlight_id: str


# --- Common ---


class StatusResponse(BaseModel):
    status: str = "ok"
