import pytest
from fastapi.testclient import TestClient

from auth_service.app.main import app as auth_app
from inventory_service.app.main import app as inventory_app
from inventory_service.app.router.transactions_router import get_low_stock_notifier
from shared.data.seed_data import DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME, seed_database


@pytest.fixture()
def admin(db):
    seed_database(db, with_demo_items=False)
    return DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD


@pytest.fixture()
def auth_client(reset_db):
    # no context manager: the startup seed would add demo items
    return TestClient(auth_app)


@pytest.fixture()
def client(reset_db, notifier):
    inventory_app.dependency_overrides[get_low_stock_notifier] = lambda: notifier
    yield TestClient(inventory_app)
    inventory_app.dependency_overrides.clear()


@pytest.fixture()
def token(auth_client, admin):
    username, password = admin
    response = auth_client.post(
        "/api/auth/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture()
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
