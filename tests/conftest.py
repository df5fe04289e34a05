# tests/conftest.py
import pytest

from app.main import app, get_product_repo, get_cart_repo
from app.database import InMemoryRepository


@pytest.fixture(autouse=True)
def _clear_overrides():
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def install():
    """
    Returns a function that swaps the file-backed collections for in-memory
    ones seeded with the given records.
    """
    def _install(products=None, carts=None):
        products_repo = InMemoryRepository(products, name="products")
        carts_repo = InMemoryRepository(carts, name="carts")
        app.dependency_overrides[get_product_repo] = lambda: products_repo
        app.dependency_overrides[get_cart_repo] = lambda: carts_repo
        return products_repo, carts_repo
    return _install
