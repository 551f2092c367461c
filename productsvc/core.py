# productsvc/core.py
import re
from typing import Any, Callable, Dict, Tuple

from pydantic import ValidationError

from productsvc.database import ProductStore
from productsvc.models import INT32_MAX, ErrorBody, ProductDetails
from productsvc.utils.logging import get_logger

# This file contains the routing and validation logic behind the HTTP layer.

logger = get_logger(__name__)

NOT_FOUND = "NOT_FOUND"
INVALID_INPUT = "INVALID_INPUT"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"

INVALID_INPUT_MESSAGE = "The provided input data is invalid"

_ID_RE = re.compile(r"[+-]?[0-9]+")


class ApiError(Exception):
    def __init__(self, status_code: int, error: str, message: str, details: str):
        super().__init__(f"{error}: {details}")
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details

    def body(self) -> Dict[str, str]:
        return ErrorBody(error=self.error, message=self.message, details=self.details).model_dump()


def route_not_found():
    return ApiError(404, NOT_FOUND, "Route not found", "Unknown path")


def product_not_found():
    return ApiError(404, NOT_FOUND, "Product not found", "No product exists with the given productId")


def invalid_input(details: str):
    return ApiError(400, INVALID_INPUT, INVALID_INPUT_MESSAGE, details)


def method_not_allowed():
    return ApiError(405, METHOD_NOT_ALLOWED, "Method not allowed", "Check HTTP method and path")


# ---------------------------
# Input parsing / validation
# ---------------------------
def parse_product_id(raw: str) -> int:
    """Base-10 int32, strictly positive. Anything else is INVALID_INPUT."""
    if not _ID_RE.fullmatch(raw):
        raise invalid_input("Product ID must be a positive integer")
    # int32 never needs more than 10 significant digits
    if len(raw.lstrip("+-").lstrip("0")) > 10:
        raise invalid_input("Product ID must be a positive integer")
    value = int(raw)
    if value <= 0 or value > INT32_MAX:
        raise invalid_input("Product ID must be a positive integer")
    return value


def decode_details(body: bytes) -> ProductDetails:
    try:
        return ProductDetails.model_validate_json(body)
    except ValidationError:
        raise invalid_input("Request body must be valid JSON and match schema")


def validate_details(details: ProductDetails) -> None:
    # minimal on purpose: some_other_id is free-form
    if (
        not details.sku
        or not details.manufacturer
        or details.category_id <= 0
        or details.weight <= 0
    ):
        raise invalid_input("Missing or invalid required fields")


# ---------------------------
# Router
# ---------------------------
Handler = Callable[[int, bytes], ProductDetails]


class ProductRouter:
    """Maps (method, path shape) to a handler bound to one store.

    A path shape is the request path with its id segment replaced by
    ``{id}``, e.g. ``products/{id}/details``.
    """

    def __init__(self, store: ProductStore):
        self.store = store
        self.routes: Dict[Tuple[str, str], Handler] = {
            ("GET", "products/{id}"): self.get_product,
            ("POST", "products/{id}/details"): self.put_details,
        }

    def get_product(self, product_id: int, body: bytes) -> ProductDetails:
        p, found = self.store.get(product_id)
        if not found:
            raise product_not_found()
        return p

    def put_details(self, product_id: int, body: bytes) -> ProductDetails:
        details = decode_details(body)
        validate_details(details)
        # path id wins over whatever product_id the body carried
        stored = self.store.put(product_id, details)
        logger.info("stored details for product %s (sku=%s)", product_id, stored.sku)
        return stored

    def resolve(self, method: str, path: str) -> Tuple[Handler, int]:
        parts = path.strip("/").split("/")
        if len(parts) < 2 or parts[0] != "products":
            raise route_not_found()

        product_id = parse_product_id(parts[1])
        shape = "/".join(["products", "{id}"] + parts[2:])
        handler = self.routes.get((method, shape))
        if handler is None:
            raise method_not_allowed()
        return handler, product_id

    def dispatch(self, method: str, path: str, body: bytes = b"") -> Dict[str, Any]:
        try:
            handler, product_id = self.resolve(method, path)
            return handler(product_id, body).model_dump()
        except ApiError as e:
            logger.debug("%s %s -> %s %s", method, path, e.status_code, e.error)
            raise
