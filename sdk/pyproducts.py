# sdk/pyproducts.py
import os
from typing import Any, Dict, Optional

import httpx
import requests
from rich import print

DEFAULT_URL = os.getenv("PRODUCTSVC_URL", "http://127.0.0.1:8080")


class ProductApiError(Exception):
    """The service answered with its error envelope."""

    def __init__(self, status_code: int, error: str, message: str, details: str):
        super().__init__(f"{status_code} {error}: {message} ({details})")
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details

    @classmethod
    def from_response(cls, status_code: int, body: Any) -> "ProductApiError":
        if not isinstance(body, dict):
            body = {}
        return cls(
            status_code,
            body.get("error", "UNKNOWN"),
            body.get("message", ""),
            body.get("details", ""),
        )


def _details_payload(sku: str, manufacturer: str, category_id: int, weight: int,
                     some_other_id: int = 0) -> Dict[str, Any]:
    return {
        "sku": sku,
        "manufacturer": manufacturer,
        "category_id": category_id,
        "weight": weight,
        "some_other_id": some_other_id,
    }


def _unwrap(status_code: int, parse_json):
    try:
        body = parse_json()
    except ValueError:
        body = None
    if status_code >= 400:
        raise ProductApiError.from_response(status_code, body)
    return body


class ProductClient:
    def __init__(self, base_url: str = DEFAULT_URL, timeout: int = 10,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return _unwrap(r.status_code, r.json)

    def put_details(self, product_id: int, sku: str, manufacturer: str, category_id: int,
                    weight: int, some_other_id: int = 0):
        payload = _details_payload(sku, manufacturer, category_id, weight, some_other_id)
        return self.put_raw(product_id, payload)

    def put_raw(self, product_id: int, payload: Dict[str, Any]):
        # no client-side validation; the service decides
        r = self.session.post(f"{self.base_url}/products/{product_id}/details",
                              json=payload, timeout=self.timeout)
        return _unwrap(r.status_code, r.json)

    # Async variants (used by the concurrency demo)
    async def get_product_async(self, product_id: int, client: Optional[httpx.AsyncClient] = None):
        if client is None:
            async with httpx.AsyncClient(timeout=self.timeout) as ac:
                return await self.get_product_async(product_id, ac)
        r = await client.get(f"{self.base_url}/products/{product_id}")
        return _unwrap(r.status_code, r.json)

    async def put_details_async(self, product_id: int, payload: Dict[str, Any],
                                client: Optional[httpx.AsyncClient] = None):
        if client is None:
            async with httpx.AsyncClient(timeout=self.timeout) as ac:
                return await self.put_details_async(product_id, payload, ac)
        r = await client.post(f"{self.base_url}/products/{product_id}/details", json=payload)
        return _unwrap(r.status_code, r.json)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Product details CLI")
    parser.add_argument("--url", default=DEFAULT_URL, help="Service base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True, help="ID of the product")

    pd = subparsers.add_parser("put-details", help="Create or replace a product's details")
    pd.add_argument("--product-id", type=int, required=True, help="ID of the product")
    pd.add_argument("--sku", required=True)
    pd.add_argument("--manufacturer", required=True)
    pd.add_argument("--category-id", type=int, required=True)
    pd.add_argument("--weight", type=int, required=True)
    pd.add_argument("--some-other-id", type=int, default=0)

    args = parser.parse_args()
    c = ProductClient(base_url=args.url)

    try:
        if args.command == "get-product":
            print(c.get_product(args.product_id))
        elif args.command == "put-details":
            print(c.put_details(args.product_id, args.sku, args.manufacturer,
                                args.category_id, args.weight, args.some_other_id))
    except ProductApiError as e:
        print(f"[red]{e.status_code} {e.error}[/red]: {e.message} - {e.details}")
        raise SystemExit(1)
