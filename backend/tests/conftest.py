# backend/tests/conftest.py
"""
Fixtures compartidas: cada test recibe un carrito nuevo en memoria y un
TestClient con el servicio de carrito sustituido.
"""

import pytest
from fastapi.testclient import TestClient

from app.api import deps
from app.crud import book_crud
from app.crud.cart_store import MemoryCartStore
from app.main import app
from app.services.cart_service import CartService


@pytest.fixture
def cart_store() -> MemoryCartStore:
    return MemoryCartStore()


@pytest.fixture
def cart_service(cart_store) -> CartService:
    return CartService(cart_store)


@pytest.fixture(autouse=True)
def clear_book_cache():
    book_crud.clear_cache()
    yield
    book_crud.clear_cache()


@pytest.fixture
def test_client(cart_service):
    app.dependency_overrides[deps.get_cart_service] = lambda: cart_service
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
