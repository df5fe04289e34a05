# app/core.py
import re
from pydantic import BaseModel
from typing import Optional, Dict, Any, List, Union

from .models import Product, Cart

# ---------------------------
# Request schemas
# ---------------------------
# Every field is optional so that absent fields reach the presence check
# below and come back as a 400 with our own message. Text fields take any
# JSON value; only their presence is checked.
class ProductIn(BaseModel):
    title: Any = None
    description: Any = None
    code: Any = None
    price: Optional[Union[int, float]] = None
    stock: Optional[Union[int, float]] = None
    category: Any = None
    thumbnails: Any = None

    def missing_fields(self) -> List[str]:
        missing = [f for f in ("title", "description", "code", "category") if not getattr(self, f)]
        missing += [f for f in ("price", "stock") if getattr(self, f) is None]
        return missing


# ---------------------------
# Helpers
# ---------------------------
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_int(raw: Any) -> Optional[int]:
    """
    Parse the leading integer of raw ("12" -> 12, "3abc" -> 3, "abc" -> None).
    """
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    m = _LEADING_INT.match(str(raw))
    if not m:
        return None
    return int(m.group(1))


def parse_limit(raw: Any) -> Optional[int]:
    limit = parse_int(raw)
    if limit is None or limit <= 0:
        return None
    return limit


def next_id(records: List[Dict[str, Any]]) -> Union[int, float]:
    # any stored number counts, including float ids merged in by a cart update
    ids = [r["id"] for r in records
           if isinstance(r.get("id"), (int, float)) and not isinstance(r.get("id"), bool)]
    if not ids:
        return 1
    top = max(ids)
    if float(top).is_integer():
        return int(top) + 1
    return top + 1


def find_index(records: List[Dict[str, Any]], record_id: Optional[int]) -> int:
    if record_id is None:
        return -1
    for i, r in enumerate(records):
        if r.get("id") == record_id:
            return i
    return -1


def merge(record: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    return {**record, **updates}


def _make_product_dict(product_id: int, p: ProductIn) -> Dict[str, Any]:
    return Product(
        id=product_id,
        title=p.title,
        description=p.description,
        code=p.code,
        price=p.price,
        status=True,
        stock=p.stock,
        category=p.category,
        thumbnails=p.thumbnails or [],
    ).model_dump()


def _make_cart_dict(cart_id: int) -> Dict[str, Any]:
    return Cart(id=cart_id).model_dump()
