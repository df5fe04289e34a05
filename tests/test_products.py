# tests/test_products.py
from fastapi.testclient import TestClient
from app.main import app

client = TestClient(app)

PAYLOAD = {"title": "T", "description": "D", "code": "C1", "price": 10, "stock": 5, "category": "cat"}


def seed(n):
    return [
        {"id": i, "title": f"P{i}", "description": "d", "code": f"C{i}", "price": i,
         "status": True, "stock": 1, "category": "x", "thumbnails": []}
        for i in range(1, n + 1)
    ]


def test_create_product_on_empty_collection(install):
    products, _ = install()
    r = client.post("/api/products", json=PAYLOAD)
    assert r.status_code == 201
    assert r.json() == {
        "id": 1, "title": "T", "description": "D", "code": "C1", "price": 10,
        "status": True, "stock": 5, "category": "cat", "thumbnails": []
    }
    assert products.list() == [r.json()]


def test_create_assigns_max_plus_one_and_forces_status(install):
    install(products=[{"id": 3, "title": "a"}, {"id": 7, "title": "b"}])
    r = client.post("/api/products", json={**PAYLOAD, "status": False, "id": 1})
    assert r.status_code == 201
    assert r.json()["id"] == 8
    assert r.json()["status"] is True


def test_ids_are_not_recycled(install):
    install(products=seed(3))
    assert client.delete("/api/products/2").status_code == 200
    r = client.post("/api/products", json=PAYLOAD)
    assert r.json()["id"] == 4


def test_create_keeps_thumbnails_and_drops_unknown_fields(install):
    install()
    r = client.post("/api/products", json={**PAYLOAD, "thumbnails": ["a.png"], "color": "red"})
    body = r.json()
    assert body["thumbnails"] == ["a.png"]
    assert "color" not in body


def test_zero_price_and_stock_are_valid(install):
    install()
    r = client.post("/api/products", json={**PAYLOAD, "price": 0, "stock": 0})
    assert r.status_code == 201
    assert r.json()["price"] == 0
    assert r.json()["stock"] == 0


def test_missing_fields_rejected(install):
    products, _ = install()
    for field in PAYLOAD:
        body = {k: v for k, v in PAYLOAD.items() if k != field}
        r = client.post("/api/products", json=body)
        assert r.status_code == 400, field
        assert r.json() == {"error": "Missing required fields"}
    r = client.post("/api/products", json={**PAYLOAD, "title": ""})
    assert r.status_code == 400
    r = client.post("/api/products", json={**PAYLOAD, "price": None})
    assert r.status_code == 400
    r = client.post("/api/products")
    assert r.status_code == 400
    assert products.list() == []


def test_malformed_body_is_a_400(install):
    install()
    r = client.post("/api/products", json={**PAYLOAD, "price": "abc"})
    assert r.status_code == 400
    assert "error" in r.json()
    r = client.put("/api/products/1", json=[1, 2])
    assert r.status_code == 400


def test_list_with_limit(install):
    install(products=seed(3))
    r = client.get("/api/products", params={"limit": 2})
    assert [p["id"] for p in r.json()] == [1, 2]
    for raw in ("0", "-1", "abc", "10"):
        r = client.get("/api/products", params={"limit": raw})
        assert [p["id"] for p in r.json()] == [1, 2, 3], raw
    assert len(client.get("/api/products").json()) == 3


def test_list_empty(install):
    install()
    r = client.get("/api/products")
    assert r.status_code == 200
    assert r.json() == []


def test_get_product(install):
    install(products=seed(2))
    r = client.get("/api/products/2")
    assert r.status_code == 200
    assert r.json()["title"] == "P2"


def test_get_unknown_product(install):
    install(products=seed(2))
    r = client.get("/api/products/9")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}
    assert client.get("/api/products/abc").status_code == 404


def test_update_merges_and_keeps_id(install):
    products, _ = install(products=seed(2))
    r = client.put("/api/products/1", json={"id": 42, "price": 99, "color": "red"})
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == 1
    assert body["price"] == 99
    assert body["color"] == "red"
    assert body["title"] == "P1"
    assert products.get(1) == body
    assert products.get(42) is None
    assert client.get("/api/products/42").status_code == 404


def test_update_unknown_product(install):
    install(products=seed(1))
    r = client.put("/api/products/5", json={"price": 1})
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_delete_product(install):
    products, _ = install(products=seed(2))
    r = client.delete("/api/products/1")
    assert r.status_code == 200
    assert r.json() == {"message": "Product deleted", "product": seed(2)[0]}
    assert client.get("/api/products/1").status_code == 404
    assert [p["id"] for p in products.list()] == [2]


def test_delete_unknown_product(install):
    install()
    r = client.delete("/api/products/1")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_create_only_checks_presence_of_text_fields(install):
    install()
    r = client.post("/api/products", json={**PAYLOAD, "title": 5, "thumbnails": "a.png"})
    assert r.status_code == 201
    assert r.json()["title"] == 5
    assert r.json()["thumbnails"] == "a.png"
