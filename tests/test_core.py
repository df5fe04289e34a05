# tests/test_core.py
from app.core import ProductIn, parse_int, parse_limit, next_id, find_index, merge, _make_product_dict


def test_parse_int_reads_leading_digits():
    assert parse_int("12") == 12
    assert parse_int(" 3abc") == 3
    assert parse_int("-4") == -4
    assert parse_int(7) == 7
    assert parse_int("abc") is None
    assert parse_int("") is None
    assert parse_int(None) is None


def test_parse_limit_only_accepts_positive():
    assert parse_limit("2") == 2
    assert parse_limit("0") is None
    assert parse_limit("-1") is None
    assert parse_limit("x") is None
    assert parse_limit(None) is None


def test_next_id():
    assert next_id([]) == 1
    assert next_id([{"id": 2}, {"id": 9}, {"id": 4}]) == 10
    assert next_id([{"title": "no id"}]) == 1
    assert next_id([{"id": 3.0}, {"id": 1}]) == 4
    assert next_id([{"id": 2.5}]) == 3.5
    assert next_id([{"id": True}]) == 1


def test_find_index():
    records = [{"id": 5}, {"id": 6}]
    assert find_index(records, 6) == 1
    assert find_index(records, 1) == -1
    assert find_index(records, None) == -1


def test_merge_overwrites_only_given_fields():
    assert merge({"id": 1, "a": 1, "b": 2}, {"b": 3, "c": 4}) == {"id": 1, "a": 1, "b": 3, "c": 4}


def test_missing_fields():
    assert set(ProductIn().missing_fields()) == {"title", "description", "code", "category", "price", "stock"}
    p = ProductIn(title="t", description="d", code="c", category="x", price=0, stock=0)
    assert p.missing_fields() == []


def test_product_dict_key_order():
    p = ProductIn(title="t", description="d", code="c", category="x", price=1.5, stock=2)
    record = _make_product_dict(3, p)
    assert list(record) == ["id", "title", "description", "code", "price", "status", "stock", "category", "thumbnails"]
    assert record["price"] == 1.5
    assert record["thumbnails"] == []
