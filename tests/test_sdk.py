# tests/test_sdk.py
from fastapi.testclient import TestClient
from app.main import app
from sdk.cartstore import StoreClient


def make_client():
    c = StoreClient(base_url="http://testserver")
    c.session = TestClient(app)
    return c


def test_client_walkthrough(install):
    install()
    c = make_client()

    p = c.create_product("Laptop", "14 inch", "LAP-1", 1500, 3, "electronics", thumbnails=["a.png"])
    assert p["id"] == 1
    assert p["thumbnails"] == ["a.png"]
    c.create_product("Mouse", "wireless", "MOU-1", 25, 10, "electronics")

    assert [x["id"] for x in c.list_products()] == [1, 2]
    assert [x["id"] for x in c.list_products(limit=1)] == [1]
    assert c.update_product(1, price=1399, id=5)["id"] == 1
    assert c.get_product(1)["price"] == 1399

    cart = c.create_cart()
    c.add_to_cart(cart["id"], 1)
    c.add_to_cart(cart["id"], 1)
    assert c.get_cart(cart["id"])["products"] == [{"product": 1, "quantity": 2}]
    assert c.update_cart(cart["id"], products=[])["products"] == []
    assert len(c.list_carts()) == 1

    assert c.delete_cart(cart["id"])["cart"]["id"] == cart["id"]
    assert c.delete_product(2)["product"]["code"] == "MOU-1"
    assert [x["id"] for x in c.list_products()] == [1]
