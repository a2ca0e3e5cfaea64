# sdk/productstore.py
from typing import Any, Dict, List, Optional

import httpx
import requests


class ProductStoreAPIError(Exception):
    def __init__(self, status_code: int, kind: str, message: str):
        super().__init__(f"HTTP {status_code} [{kind}]: {message}")
        self.status_code = status_code
        self.kind = kind
        self.message = message


def _raise_for_error(status_code: int, body: Any, text: str) -> None:
    if status_code < 400:
        return
    # Error envelope: {"error": {"kind": ..., "message": ...}}
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        err = body["error"]
        raise ProductStoreAPIError(status_code, err.get("kind", "unknown"), err.get("message", ""))
    if isinstance(body, dict) and "detail" in body:
        raise ProductStoreAPIError(status_code, "http_error", str(body["detail"]))
    raise ProductStoreAPIError(status_code, "http_error", text)


def _decode(r) -> Any:
    try:
        body = r.json()
    except ValueError:
        body = None
    _raise_for_error(r.status_code, body, r.text)
    return body


class ProductStoreClient:
    def __init__(self, base_url: str = "http://localhost:5000", timeout: int = 10, session: Optional[requests.Session] = None,
                 async_transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.async_transport = async_transport
        self.session = session or requests.Session()
        self.timeout = timeout

    def health(self) -> str:
        r = self.session.get(f"{self.base_url}/", timeout=self.timeout)
        return _decode(r)

    def create_product(self, name: str, description: str, price: float, quantity: int) -> Dict[str, Any]:
        r = self.session.post(f"{self.base_url}/products", json={
            "name": name, "description": description, "price": price, "quantity": quantity
        }, timeout=self.timeout)
        return _decode(r)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return _decode(r)

    def update_product(self, product_id: str, name: str, description: str, price: float, quantity: int) -> Dict[str, Any]:
        # Full replacement: every field is sent.
        r = self.session.put(f"{self.base_url}/products/{product_id}", json={
            "name": name, "description": description, "price": price, "quantity": quantity
        }, timeout=self.timeout)
        return _decode(r)

    def delete_product(self, product_id: str) -> str:
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        if r.status_code >= 400:
            _decode(r)
        return r.text

    def list_products(self) -> List[Dict[str, Any]]:
        r = self.session.get(f"{self.base_url}/products", timeout=self.timeout)
        return _decode(r)

    # Async read (example)
    async def get_product_async(self, product_id: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
            r = await client.get(f"{self.base_url}/products/{product_id}")
            return _decode(r)


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Product store client")
    parser.add_argument("--base-url", default="http://127.0.0.1:5000")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    args = parser.parse_args()
    c = ProductStoreClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products())
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
