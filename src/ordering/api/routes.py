"""FastAPI routes for the Ordering domain: settings, checkout and orders.

``storefront_router`` is public. ``admin_settings_router`` and
``admin_order_router`` live under ``/admin`` behind the session gate.
"""

import json

from fastapi import APIRouter, Query
from fastapi.concurrency import run_in_threadpool
from protean.utils.globals import current_domain

from ordering.api.schemas import (
    BulkDeleteOrdersRequest,
    BulkResultResponse,
    BulkUpdateOrdersRequest,
    OrderResponse,
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentMethodsResponse,
    PaymentSettingsRequest,
    PaymentSettingsResponse,
    PlaceOrderRequest,
    StatusResponse,
    StoreSettingsRequest,
    StoreSettingsResponse,
    UpdateOrderStatusRequest,
)
from ordering.checkout.intent import create_payment_intent
from ordering.order.management import BulkDeleteOrders, BulkUpdateOrders, UpdateOrderStatus
from ordering.order.placement import PlaceOrder
from ordering.order.queries import get_order, get_orders_by_ids, list_orders
from ordering.settings.payment import (
    SavePaymentSettings,
    get_payment_settings,
    public_payment_methods,
    serialize_payment_settings,
)
from ordering.settings.store import SaveStoreSettings, get_store_settings, serialize_store_settings

storefront_router = APIRouter(tags=["checkout"])
admin_settings_router = APIRouter(prefix="/admin/settings", tags=["admin:settings"])
admin_order_router = APIRouter(prefix="/admin/orders", tags=["admin:orders"])


# --- Storefront endpoints ---


@storefront_router.get("/store/settings", response_model=StoreSettingsResponse)
async def store_settings() -> StoreSettingsResponse:
    return serialize_store_settings(get_store_settings())


@storefront_router.get("/store/payment-methods", response_model=PaymentMethodsResponse)
async def payment_methods() -> PaymentMethodsResponse:
    return public_payment_methods(get_payment_settings())


@storefront_router.post("/checkout/payment-intent", status_code=201, response_model=PaymentIntentResponse)
async def open_payment_intent(body: PaymentIntentRequest) -> PaymentIntentResponse:
    # Stripe calls block; the domain context travels with the copied contextvars
    return await run_in_threadpool(create_payment_intent, [line.model_dump() for line in body.items])


@storefront_router.post("/checkout/orders", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest) -> OrderResponse:
    command = PlaceOrder(
        items=json.dumps([line.model_dump() for line in body.items]),
        customer_name=body.customer.name,
        customer_phone=body.customer.phone,
        customer_address=body.customer.address,
        payment_method=body.payment_method,
        delivery_payment_method=body.delivery_payment_method,
        cash_tendered=body.cash_tendered,
        stripe_payment_intent_id=body.payment_intent_id,
    )
    order_id = await run_in_threadpool(current_domain.process, command, asynchronous=False)
    return get_order(order_id)


@storefront_router.get("/orders", response_model=list[OrderResponse])
async def my_orders(ids: str = Query("", description="Comma-separated order ids")) -> list[OrderResponse]:
    return get_orders_by_ids([order_id.strip() for order_id in ids.split(",") if order_id.strip()])


# --- Admin: settings ---


@admin_settings_router.get("/store", response_model=StoreSettingsResponse)
async def admin_store_settings() -> StoreSettingsResponse:
    return serialize_store_settings(get_store_settings())


@admin_settings_router.put("/store", response_model=StoreSettingsResponse)
async def save_store_settings(body: StoreSettingsRequest) -> StoreSettingsResponse:
    command = SaveStoreSettings(store_name=body.store_name, delivery_fee=body.delivery_fee)
    current_domain.process(command, asynchronous=False)
    return serialize_store_settings(get_store_settings())


@admin_settings_router.get("/payment", response_model=PaymentSettingsResponse)
async def admin_payment_settings() -> PaymentSettingsResponse:
    return serialize_payment_settings(get_payment_settings())


@admin_settings_router.put("/payment", response_model=PaymentSettingsResponse)
async def save_payment_settings(body: PaymentSettingsRequest) -> PaymentSettingsResponse:
    command = SavePaymentSettings(
        is_live=body.is_live,
        stripe_public_key=body.stripe_public_key,
        stripe_secret_key=body.stripe_secret_key,
        pix_key=body.pix_key,
        is_payment_on_delivery_enabled=body.is_payment_on_delivery_enabled,
    )
    current_domain.process(command, asynchronous=False)
    return serialize_payment_settings(get_payment_settings())


# --- Admin: orders ---


@admin_order_router.get("", response_model=list[OrderResponse])
async def admin_list_orders(
    payment_status: str | None = None,
    order_status: str | None = None,
    search: str | None = None,
) -> list[OrderResponse]:
    return list_orders(payment_status=payment_status, order_status=order_status, search=search)


@admin_order_router.post("/bulk-update", response_model=BulkResultResponse)
async def bulk_update_orders(body: BulkUpdateOrdersRequest) -> BulkResultResponse:
    command = BulkUpdateOrders(
        order_ids=json.dumps(body.order_ids),
        status_field=body.field,
        value=body.value,
    )
    affected = current_domain.process(command, asynchronous=False)
    return BulkResultResponse(affected=affected)


@admin_order_router.post("/bulk-delete", response_model=BulkResultResponse)
async def bulk_delete_orders(body: BulkDeleteOrdersRequest) -> BulkResultResponse:
    affected = current_domain.process(BulkDeleteOrders(order_ids=json.dumps(body.order_ids)), asynchronous=False)
    return BulkResultResponse(affected=affected)


@admin_order_router.get("/{order_id}", response_model=OrderResponse)
async def admin_get_order(order_id: str) -> OrderResponse:
    return get_order(order_id)


@admin_order_router.patch("/{order_id}", response_model=StatusResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> StatusResponse:
    command = UpdateOrderStatus(order_id=order_id, status_field=body.field, value=body.value)
    current_domain.process(command, asynchronous=False)
    return StatusResponse()
