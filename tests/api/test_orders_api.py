"""Tests for the HTTP routes over the order service."""

import pytest
from fastapi.testclient import TestClient

from transport_orders.adapters.memory import InMemoryStore
from transport_orders.api import create_app
from transport_orders.api.routes import get_order_service
from transport_orders.config import AppConfig, WorkflowConfig
from transport_orders.container import Container
from transport_orders.domain.errors import StorageError
from transport_orders.ports.cargo import CargoRegistrarPort
from transport_orders.services import OrderService

PAYLOAD = {
    "userId": 7,
    "fromLocation": {"home": True, "city": "Riga", "street": "Brivibas"},
    "toLocation": {"home": False, "city": "Riga", "street": "Merkela"},
    "cargos": [{"weight": 10}],
}


class BrokenRegistrar:
    def register(self, order_id, cargo):
        raise StorageError("cargo table unavailable", table="cargos")


def build_client(config: AppConfig, container: Container) -> TestClient:
    app = create_app(config)
    app.dependency_overrides[get_order_service] = lambda: container.resolve(OrderService)
    return TestClient(app)


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def container(config):
    container = Container.create_default(config)
    container.resolve(InMemoryStore).add_user("Anna", "Berzina", user_id=7)
    return container


@pytest.fixture
def client(config, container):
    with build_client(config, container) as client:
        yield client


def test_health(client):
    assert client.get("/health").json() == {"ok": True}


def test_create_order(client):
    response = client.post("/order", json=PAYLOAD)

    assert response.status_code == 201
    body = response.json()
    assert body["id"] == 1
    assert body["ownerId"] == 7
    assert body["status"] == "PENDING"
    assert "fromLocationId" in body


def test_not_approved_lists_projected_orders(client):
    client.post("/order", json=PAYLOAD)

    [order] = client.get("/order/not-approved").json()

    assert order["user"] == {"firstName": "Anna", "lastName": "Berzina"}
    assert order["fromLocation"] == {"home": True, "city": "Riga", "street": "Brivibas"}
    assert order["toLocation"]["street"] == "Merkela"
    assert order["status"] == "PENDING"
    assert "createdAt" in order


def test_user_orders(client):
    client.post("/order", json=PAYLOAD)

    assert len(client.get("/order/user-orders/7").json()) == 1
    assert client.get("/order/user-orders/8").json() == []


def test_get_order(client):
    client.post("/order", json=PAYLOAD)

    assert client.get("/order/1").json()["id"] == 1


def test_get_missing_order_is_404(client):
    assert client.get("/order/99").status_code == 404


def test_non_numeric_id_is_rejected(client):
    assert client.get("/order/abc").status_code == 422


def test_approve_then_decline(client):
    client.post("/order", json=PAYLOAD)

    assert client.put("/order/1/approve").json() == {"id": 1}
    assert client.get("/order/not-approved").json() == []
    assert client.put("/order/1/decline").json() == {"id": 1}
    assert client.get("/order/1").json()["status"] == "DECLINED"


def test_approve_missing_order_is_404(client):
    assert client.put("/order/5/approve").status_code == 404


def test_update_missing_order_is_404(client):
    response = client.put(
        "/order/99",
        json={"fromLocation": PAYLOAD["fromLocation"], "toLocation": PAYLOAD["toLocation"]},
    )

    assert response.status_code == 404


def test_update_route(client):
    created = client.post("/order", json=PAYLOAD).json()

    response = client.put(
        "/order/1",
        json={
            "fromLocation": {"home": False, "city": "Jelgava", "street": "Lielā"},
            "toLocation": PAYLOAD["toLocation"],
        },
    )

    assert response.status_code == 200
    assert response.json()["fromLocationId"] != created["fromLocationId"]
    assert response.json()["toLocationId"] == created["toLocationId"]
    assert client.get("/order/1").json()["fromLocation"]["city"] == "Jelgava"


def test_blank_location_is_502_with_stage(client):
    payload = dict(PAYLOAD, fromLocation={"home": True, "city": "", "street": "Brivibas"})

    response = client.post("/order", json=payload)

    assert response.status_code == 502
    assert response.json()["stage"] == "from_location"


def test_partial_creation_reports_order_id(config, container):
    container.register(CargoRegistrarPort, lambda: BrokenRegistrar())

    with build_client(config, container) as client:
        response = client.post("/order", json=PAYLOAD)

    assert response.status_code == 500
    body = response.json()
    assert body["orderId"] == 1
    assert body["cargoIndex"] == 0
    assert body["registeredCargoIds"] == []


def test_strict_mode_conflict_is_409():
    config = AppConfig(workflow=WorkflowConfig(transition_mode="strict"))
    container = Container.create_default(config)
    container.resolve(InMemoryStore).add_user("Anna", "Berzina", user_id=7)

    with build_client(config, container) as client:
        client.post("/order", json=PAYLOAD)
        client.put("/order/1/approve")
        response = client.put("/order/1/decline")

    assert response.status_code == 409
    assert response.json()["currentStatus"] == "APPROVED"
