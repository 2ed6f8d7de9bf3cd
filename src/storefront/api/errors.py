"""Exception handlers for failures outside Protean's own error mapping."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from storefront.gateway.port import GatewayError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    logger.error("payment_gateway_error", path=request.url.path, error=exc.message, code=exc.gateway_code)
    return JSONResponse(status_code=502, content={"error": exc.message})


def register_gateway_error_handler(app: FastAPI) -> None:
    """Answer payment gateway failures with 502 and a JSON error body."""
    app.add_exception_handler(GatewayError, gateway_error_handler)
