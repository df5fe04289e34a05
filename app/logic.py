# app/logic.py
import logging
from typing import Optional, Dict, Any

from .core import (
    ProductIn, parse_int, parse_limit, next_id, find_index, merge,
    _make_product_dict, _make_cart_dict
)
from .database import CollectionRepository
from .errors import ValidationError, NotFound

logger = logging.getLogger(__name__)

# This file contains the logic behind every API endpoint. Each call works on
# a freshly loaded copy of the collection and writes the whole list back.
# These are plain functions: the routes run them in the threadpool, so file
# I/O never blocks the event loop and concurrent requests interleave freely.

PRODUCT_NOT_FOUND = "Product not found"
CART_NOT_FOUND = "Cart not found"
MISSING_FIELDS = "Missing required fields"


# Product endpoints
def list_products_logic(products: CollectionRepository, limit: Any = None):
    out = products.list()
    n = parse_limit(limit)
    if n is not None:
        return out[:n]
    return out

def get_product_logic(products: CollectionRepository, product_id: Any):
    p = products.get(parse_int(product_id))
    if p is None:
        raise NotFound(PRODUCT_NOT_FOUND)
    return p

def create_product_logic(products: CollectionRepository, payload: ProductIn):
    missing = payload.missing_fields()
    if missing:
        logger.info("rejected product creation, missing %s", ", ".join(missing))
        raise ValidationError(MISSING_FIELDS)

    records = products.load()
    product = _make_product_dict(next_id(records), payload)
    records.append(product)
    products.save(records)
    logger.info("created product %s (%s)", product["id"], product["code"])
    return product

def update_product_logic(products: CollectionRepository, product_id: Any, updates: Optional[Dict[str, Any]]):
    updates = dict(updates or {})
    # the id of a product never changes
    updates.pop("id", None)

    current = products.get(parse_int(product_id))
    if current is None:
        raise NotFound(PRODUCT_NOT_FOUND)
    return products.upsert(merge(current, updates))

def delete_product_logic(products: CollectionRepository, product_id: Any):
    removed = products.delete(parse_int(product_id))
    if removed is None:
        raise NotFound(PRODUCT_NOT_FOUND)
    logger.info("deleted product %s", removed.get("id"))
    return {"message": "Product deleted", "product": removed}


# Cart endpoints
def list_carts_logic(carts: CollectionRepository):
    return carts.list()

def get_cart_logic(carts: CollectionRepository, cart_id: Any):
    cart = carts.get(parse_int(cart_id))
    if cart is None:
        raise NotFound(CART_NOT_FOUND)
    return cart

def create_cart_logic(carts: CollectionRepository):
    records = carts.load()
    cart = _make_cart_dict(next_id(records))
    records.append(cart)
    carts.save(records)
    logger.info("created cart %s", cart["id"])
    return cart

def update_cart_logic(carts: CollectionRepository, cart_id: Any, updates: Optional[Dict[str, Any]]):
    # Unlike products, a submitted "id" is merged as-is.
    records = carts.load()
    idx = find_index(records, parse_int(cart_id))
    if idx == -1:
        raise NotFound(CART_NOT_FOUND)
    records[idx] = merge(records[idx], updates or {})
    carts.save(records)
    return records[idx]

def delete_cart_logic(carts: CollectionRepository, cart_id: Any):
    removed = carts.delete(parse_int(cart_id))
    if removed is None:
        raise NotFound(CART_NOT_FOUND)
    logger.info("deleted cart %s", removed.get("id"))
    return {"message": "Cart deleted", "cart": removed}

def add_product_to_cart_logic(carts: CollectionRepository, products: CollectionRepository,
                              cart_id: Any, product_id: Any):
    cid = parse_int(cart_id)
    pid = parse_int(product_id)

    cart = carts.get(cid)
    if cart is None:
        raise NotFound(CART_NOT_FOUND)
    if products.get(pid) is None:
        raise NotFound(PRODUCT_NOT_FOUND)

    if not isinstance(cart.get("products"), list):
        cart["products"] = []
    lines = cart["products"]
    for line in lines:
        # lines rewritten by a cart update may have any shape
        if isinstance(line, dict) and line.get("product") == pid:
            line["quantity"] = (parse_int(line.get("quantity")) or 0) + 1
            break
    else:
        lines.append({"product": pid, "quantity": 1})

    return carts.upsert(cart)
