import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from storefront.api import register_exception_handlers, routers

USER = {"X-User-Id": "user-001", "X-User-Role": "user"}
ADMIN = {"X-User-Id": "admin-001", "X-User-Role": "admin"}


@pytest.fixture()
def app():
    app = FastAPI()
    for router in routers:
        app.include_router(router)
    register_exception_handlers(app)
    return app


@pytest.fixture()
def client(app):
    return TestClient(app)


@pytest.fixture()
def shopper(client):
    """Register user-001 with shipping info through the API."""
    response = client.post("/me", json={"email": "asha@example.com", "name": "Asha"}, headers=USER)
    assert response.status_code == 201
    response = client.put(
        "/me/shipping",
        json={"address": "12 MG Road", "city": "Bengaluru", "postal_code": "560001", "country": "India"},
        headers=USER,
    )
    assert response.status_code == 200
    return USER


@pytest.fixture()
def product_id(client):
    response = client.post(
        "/admin/products",
        json={"name": "Trail Runner", "price": 500.0, "stock": 10, "colors": ["Red", "Blue"]},
        headers=ADMIN,
    )
    assert response.status_code == 201
    return response.json()["id"]
