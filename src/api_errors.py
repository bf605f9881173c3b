"""HTTP mapping for domain errors.

Every handled error renders as ``{"error": <kind>, "messages": {...}}``.
"""

import structlog
from fastapi import Request
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError

from ordering.gateway.port import PaymentGatewayError

logger = structlog.get_logger(__name__)


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "ValidationError", "messages": exc.messages})


async def not_found_handler(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": "NotFound", "messages": {"_entity": [str(exc)]}})


async def gateway_error_handler(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    logger.error("Payment gateway error", path=request.url.path, reason=exc.reason)
    return JSONResponse(
        status_code=502,
        content={"error": "PaymentGatewayError", "messages": {"payment": [exc.message]}},
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(ObjectNotFoundError, not_found_handler)
    app.add_exception_handler(PaymentGatewayError, gateway_error_handler)
