"""Pydantic request/response schemas for the Ordering API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Settings ---


class StoreSettingsRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"store_name": "LSDrinks", "delivery_fee": 5.0}]}}

    store_name: str | None = Field(None, min_length=1, max_length=100)
    delivery_fee: float | None = Field(None, ge=0)


class StoreSettingsResponse(BaseModel):
    store_name: str
    delivery_fee: float


class PaymentSettingsRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "is_live": True,
                    "stripe_public_key": "pk_live_123",
                    "pix_key": "pix@lsdrinks.com.br",
                    "is_payment_on_delivery_enabled": True,
                }
            ]
        }
    }

    is_live: bool | None = None
    stripe_public_key: str | None = Field(None, max_length=255)
    stripe_secret_key: str | None = Field(None, max_length=255)
    pix_key: str | None = Field(None, max_length=140)
    is_payment_on_delivery_enabled: bool | None = None


class PaymentSettingsResponse(BaseModel):
    is_live: bool
    stripe_public_key: str | None = None
    stripe_secret_key: str | None = None
    secret_key_from_env: bool = False
    pix_key: str | None = None
    is_payment_on_delivery_enabled: bool


class PaymentMethodsResponse(BaseModel):
    methods: list[str]
    stripe_public_key: str | None = None
    pix_key: str | None = None


# --- Checkout ---


class CartLine(BaseModel):
    item_id: str
    title: str = Field(..., min_length=1, max_length=120)
    price: float = Field(..., gt=0)
    quantity: int = Field(..., ge=1)
    image_url: str | None = None
    category_id: str | None = None


class PaymentIntentRequest(BaseModel):
    items: list[CartLine] = Field(..., min_length=1)


class PaymentIntentResponse(BaseModel):
    client_secret: str | None
    intent_id: str
    order_number: str
    subtotal: float
    delivery_fee: float
    total_amount: float
    amount: int
    currency: str


class CustomerInfo(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    phone: str = Field(..., min_length=10, max_length=20)
    address: str = Field(..., min_length=10, max_length=300)


class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"item_id": "i-1", "title": "Heineken Long Neck", "price": 10.0, "quantity": 2}],
                    "customer": {"name": "Maria Souza", "phone": "11987654321", "address": "Rua das Flores, 123"},
                    "payment_method": "Na Entrega",
                    "delivery_payment_method": "Dinheiro",
                    "cash_tendered": 30.0,
                }
            ]
        }
    }

    items: list[CartLine] = Field(..., min_length=1)
    customer: CustomerInfo
    payment_method: str
    delivery_payment_method: str | None = None
    cash_tendered: float | None = Field(None, gt=0)
    payment_intent_id: str | None = None


# --- Orders ---


class OrderLineResponse(BaseModel):
    item_id: str
    title: str
    price: float
    quantity: int
    image_url: str | None = None
    category_id: str | None = None


class OrderResponse(BaseModel):
    id: str
    order_number: str
    items: list[OrderLineResponse]
    customer: CustomerInfo
    subtotal: float
    delivery_fee: float
    total_amount: float
    status: str
    payment_status: str
    order_status: str
    payment_method: str
    delivery_payment_method: str | None = None
    cash_tendered: float | None = None
    change_due: float | None = None
    created_at: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    field: str = Field(..., description="paymentStatus or orderStatus")
    value: str


class BulkUpdateOrdersRequest(BaseModel):
    order_ids: list[str] = Field(..., min_length=1)
    field: str = Field(..., description="paymentStatus or orderStatus")
    value: str


class BulkDeleteOrdersRequest(BaseModel):
    order_ids: list[str] = Field(..., min_length=1)


class BulkResultResponse(BaseModel):
    affected: int


class StatusResponse(BaseModel):
    status: str = "ok"
