"""
Request translators for the client-facing routes.

Each translator owns one route: it decodes the client body, calls the
credential checker or the upstream service, and maps the outcome onto the
response the browser sees. Upstream payloads are always decoded and then
re-encoded; the ``transform_*`` hooks are where reshaping belongs.
"""

from typing import List, Optional, Type, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from shared.errors import BadRequestError, UpstreamContractError, UpstreamUnavailableError
from shared.logging import get_logger

from ..adapters.upstream_client import UpstreamClient, UpstreamResponse
from .credentials import CredentialChecker
from .models import (
    LoginRequest,
    PlaceOrderRequest,
    PlaceOrderResponse,
    Product,
    ProductList,
    products_to_wire,
)

ALL_PRODUCTS_PATH = "/all-products"
PLACE_ORDER_PATH = "/place-order"

ModelT = TypeVar("ModelT", bound=BaseModel)

logger = get_logger("gateway.translators")


def decode_body(body: bytes, model: Type[ModelT], message: str) -> ModelT:
    """Decode a client JSON body or raise a 400 with a generic message.

    A JSON ``null`` body decodes to the model's defaults.
    """
    if body.strip() == b"null":
        return model()
    try:
        return model.model_validate_json(body)
    except ValidationError as exc:
        logger.warning(
            "Rejected undecodable request body",
            model=model.__name__,
            error_count=exc.error_count(),
        )
        raise BadRequestError(message, details={"model": model.__name__}) from exc


def upstream_status_error(upstream: UpstreamResponse) -> UpstreamUnavailableError:
    """502 carrying the upstream status code but never its body."""
    return UpstreamUnavailableError(
        f"Backend service error: {upstream.status_code}",
        upstream_status=upstream.status_code,
        details={"url": upstream.url, "status_code": upstream.status_code},
    )


class AuthTranslator:
    """POST /auth: passkey challenge/response, always 200 for a well-formed body."""

    def __init__(self, checker: CredentialChecker):
        self.checker = checker

    async def handle(self, body: bytes) -> JSONResponse:
        login = decode_body(body, LoginRequest, "Invalid request body")
        outcome = self.checker.check(login.passkey)
        return JSONResponse(outcome.to_wire(), status_code=200)


class CatalogTranslator:
    """GET /products: relay the upstream catalog with a fixed 200."""

    unavailable_message = "Failed to fetch products from backend service"
    parse_failure_message = "Failed to parse products data from backend"

    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    def transform_products(self, products: List[Product]) -> List[Product]:
        """Reshape the catalog before it is returned. Identity by default."""
        return products

    async def handle(self) -> JSONResponse:
        try:
            upstream = await self.upstream.get(ALL_PRODUCTS_PATH)
        except UpstreamUnavailableError as exc:
            raise UpstreamUnavailableError(self.unavailable_message, details=exc.details) from exc

        if not upstream.ok:
            raise upstream_status_error(upstream)

        try:
            products = ProductList.validate_json(upstream.content)
        except ValidationError as exc:
            raise UpstreamContractError(
                self.parse_failure_message,
                details={"url": upstream.url, "errors": exc.errors(include_url=False)},
            ) from exc

        products = self.transform_products(products)
        logger.info("Fetched products from upstream", url=upstream.url, count=len(products))
        return JSONResponse(products_to_wire(products), status_code=200)


class OrderTranslator:
    """POST /order: forward the order and pass the upstream status through.

    Unlike the catalog and auth routes, the client sees the upstream's own
    status code. A 4xx whose body is a structured order response is a
    business rejection (for example 409 with ``outOfStockItems``) and is
    relayed as-is; every other non-2xx becomes a 502.
    """

    invalid_body_message = "Invalid order request body"
    unavailable_message = "Failed to place order with backend service"
    parse_failure_message = "Failed to parse order response from backend"

    def __init__(self, upstream: UpstreamClient):
        self.upstream = upstream

    def transform_order_request(self, order: PlaceOrderRequest) -> PlaceOrderRequest:
        """Reshape the order before it is forwarded. Identity by default."""
        return order

    def transform_order_response(self, placed: PlaceOrderResponse) -> PlaceOrderResponse:
        """Reshape the upstream answer before it is returned. Identity by default."""
        return placed

    async def handle(self, body: bytes) -> JSONResponse:
        order = decode_body(body, PlaceOrderRequest, self.invalid_body_message)
        order = self.transform_order_request(order)

        try:
            upstream = await self.upstream.post_json(PLACE_ORDER_PATH, order.to_wire())
        except UpstreamUnavailableError as exc:
            raise UpstreamUnavailableError(self.unavailable_message, details=exc.details) from exc

        if upstream.is_success:
            placed = self._decode_placed(upstream)
        elif upstream.is_client_error:
            placed = self._decode_rejection(upstream)
            if placed is None:
                raise upstream_status_error(upstream)
            logger.info(
                "Upstream rejected order",
                url=upstream.url,
                status_code=upstream.status_code,
                out_of_stock_items=placed.out_of_stock_items,
            )
        else:
            raise upstream_status_error(upstream)

        placed = self.transform_order_response(placed)
        return JSONResponse(placed.to_wire(), status_code=upstream.status_code)

    def _decode_placed(self, upstream: UpstreamResponse) -> PlaceOrderResponse:
        try:
            return PlaceOrderResponse.model_validate_json(upstream.content)
        except ValidationError as exc:
            raise UpstreamContractError(
                self.parse_failure_message,
                details={"url": upstream.url, "status_code": upstream.status_code,
                         "errors": exc.errors(include_url=False)},
            ) from exc

    def _decode_rejection(self, upstream: UpstreamResponse) -> Optional[PlaceOrderResponse]:
        # Only bodies that carry the order response shape count as a business rejection
        try:
            data = upstream.json()
        except ValueError:
            return None
        if not isinstance(data, dict) or "success" not in data:
            return None
        try:
            return PlaceOrderResponse.model_validate(data)
        except ValidationError:
            return None
