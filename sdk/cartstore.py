# sdk/cartstore.py
import os
import requests
import httpx
from typing import Optional, Dict, Any
from rich import print

DEFAULT_BASE_URL = os.getenv("CARTSTORE_URL", "http://127.0.0.1:8080")


class StoreClient:
    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 10):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api{path}"

    # Products
    def list_products(self, limit: Optional[int] = None):
        params = {}
        if limit is not None:
            params["limit"] = limit
        r = self.session.get(self._url("/products"), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: int):
        r = self.session.get(self._url(f"/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, title: str, description: str, code: str, price: float, stock: int,
                       category: str, thumbnails: Optional[list] = None):
        payload: Dict[str, Any] = {
            "title": title, "description": description, "code": code,
            "price": price, "stock": stock, "category": category
        }
        if thumbnails:
            payload["thumbnails"] = list(thumbnails)
        r = self.session.post(self._url("/products"), json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: int, **fields):
        r = self.session.put(self._url(f"/products/{product_id}"), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: int):
        r = self.session.delete(self._url(f"/products/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Carts
    def list_carts(self):
        r = self.session.get(self._url("/carts"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_cart(self, cart_id: int):
        r = self.session.get(self._url(f"/carts/{cart_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_cart(self):
        r = self.session.post(self._url("/carts"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_cart(self, cart_id: int, **fields):
        r = self.session.put(self._url(f"/carts/{cart_id}"), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_cart(self, cart_id: int):
        r = self.session.delete(self._url(f"/carts/{cart_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def add_to_cart(self, cart_id: int, product_id: int):
        r = self.session.post(self._url(f"/carts/{cart_id}/product/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Async add (used by the concurrency demo)
    async def add_to_cart_async(self, cart_id: int, product_id: int):
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(self._url(f"/carts/{cart_id}/product/{product_id}"))
            # no raise_for_status here: callers look at 404s themselves
            return r


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="cartstore CLI")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="Base URL of the cartstore server")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # ---------------------------
    # Product commands
    # ---------------------------
    lp = subparsers.add_parser("list-products", help="List products")
    lp.add_argument("--limit", type=int, help="Return only the first N products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", type=int, required=True)

    cp = subparsers.add_parser("create-product", help="Create a product")
    cp.add_argument("--title", required=True)
    cp.add_argument("--description", required=True)
    cp.add_argument("--code", required=True)
    cp.add_argument("--price", type=float, required=True)
    cp.add_argument("--stock", type=int, required=True)
    cp.add_argument("--category", required=True)
    cp.add_argument("--thumbnail", action="append", dest="thumbnails", help="Thumbnail path (repeatable)")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("--product-id", type=int, required=True)
    up.add_argument("--title")
    up.add_argument("--description")
    up.add_argument("--price", type=float)
    up.add_argument("--stock", type=int)
    up.add_argument("--category")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", type=int, required=True)

    # ---------------------------
    # Cart commands
    # ---------------------------
    subparsers.add_parser("list-carts", help="List carts")

    gc = subparsers.add_parser("get-cart", help="Get a cart by its ID")
    gc.add_argument("--cart-id", type=int, required=True)

    subparsers.add_parser("create-cart", help="Create an empty cart")

    dc = subparsers.add_parser("delete-cart", help="Delete a cart")
    dc.add_argument("--cart-id", type=int, required=True)

    add = subparsers.add_parser("add-to-cart", help="Add one unit of a product to a cart")
    add.add_argument("--cart-id", type=int, required=True)
    add.add_argument("--product-id", type=int, required=True)

    # ---------------------------
    # Parse and execute
    # ---------------------------
    args = parser.parse_args()
    c = StoreClient(base_url=args.url)

    if args.command == "list-products":
        print(c.list_products(args.limit))
    elif args.command == "get-product":
        print(c.get_product(args.product_id))
    elif args.command == "create-product":
        print(c.create_product(args.title, args.description, args.code, args.price,
                               args.stock, args.category, args.thumbnails))
    elif args.command == "update-product":
        fields = {k: getattr(args, k) for k in ("title", "description", "price", "stock", "category")
                  if getattr(args, k) is not None}
        print(c.update_product(args.product_id, **fields))
    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
    elif args.command == "list-carts":
        print(c.list_carts())
    elif args.command == "get-cart":
        print(c.get_cart(args.cart_id))
    elif args.command == "create-cart":
        print(c.create_cart())
    elif args.command == "delete-cart":
        print(c.delete_cart(args.cart_id))
    elif args.command == "add-to-cart":
        print(c.add_to_cart(args.cart_id, args.product_id))
