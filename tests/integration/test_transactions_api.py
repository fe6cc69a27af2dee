"""Integration tests for the transaction endpoints via TestClient."""

from datetime import datetime, timedelta

from inventory_service.app.main import app
from inventory_service.app.models.transactions import Transaction
from inventory_service.app.router import transactions_router
from shared.helpers.notification_helper import EMAIL_CHANNEL, SLACK_CHANNEL, TEAMS_CHANNEL


def _create_item(client, headers, name="Keyboard", stock=10, min_stock=5):
    response = client.post(
        "/api/items",
        json={"name": name, "category": "Peripherals", "stock": stock, "min_stock": min_stock},
        headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def _post_transaction(client, headers, item_id, quantity, tx_type="out", **extra):
    payload = {"item_id": item_id, "quantity": quantity, "type": tx_type}
    payload.update(extra)
    return client.post("/api/transactions", json=payload, headers=headers)


def _stock(client, headers, item_id):
    return client.get(f"/api/items/{item_id}", headers=headers).json()["stock"]


class TestCreateTransactionEndpoint:
    def test_requires_token(self, client):
        response = client.post(
            "/api/transactions", json={"item_id": 1, "quantity": 1, "type": "in"})
        assert response.status_code == 401

    def test_in_and_out(self, client, auth_headers):
        item = _create_item(client, auth_headers, stock=10)

        response = _post_transaction(
            client, auth_headers, item["id"], 4, "out",
            ticket_number="INC-1", requester_name="Ana", department="Finance")
        assert response.status_code == 201
        body = response.json()
        assert body["type"] == "out"
        assert body["quantity"] == 4
        assert body["item_name"] == "Keyboard"
        assert body["requester_name"] == "Ana"

        assert _post_transaction(client, auth_headers, item["id"], 2, "in").status_code == 201
        assert _stock(client, auth_headers, item["id"]) == 8

    def test_oversell_is_clamped(self, client, auth_headers):
        item = _create_item(client, auth_headers, stock=2)
        response = _post_transaction(client, auth_headers, item["id"], 5)

        assert response.status_code == 201
        assert response.json()["quantity"] == 5
        assert _stock(client, auth_headers, item["id"]) == 0

    def test_oversell_rejected_by_config(self, client, auth_headers, monkeypatch):
        from shared.core.config import settings

        monkeypatch.setattr(settings, "OVERSELL_POLICY", "reject")
        item = _create_item(client, auth_headers, stock=2)
        response = _post_transaction(client, auth_headers, item["id"], 5)

        assert response.status_code == 409
        assert response.json()["data"] == {"field": "quantity"}
        assert _stock(client, auth_headers, item["id"]) == 2

    def test_zero_quantity(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        response = _post_transaction(client, auth_headers, item["id"], 0)

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == "Failure"
        assert body["data"] == {"field": "quantity"}
        assert client.get("/api/transactions", headers=auth_headers).json() == []

    def test_oversized_quantity(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        response = _post_transaction(client, auth_headers, item["id"], 2**63, "in")

        assert response.status_code == 400
        assert response.json()["data"] == {"field": "quantity"}
        assert client.get("/api/transactions", headers=auth_headers).json() == []
        assert _stock(client, auth_headers, item["id"]) == 10

    def test_oversized_item_id(self, client, auth_headers):
        response = _post_transaction(client, auth_headers, 2**63, 1)
        assert response.status_code == 400
        assert response.json()["data"] == {"field": "item_id"}

    def test_unknown_type(self, client, auth_headers):
        item = _create_item(client, auth_headers)
        response = _post_transaction(client, auth_headers, item["id"], 1, "transfer")
        assert response.status_code == 400
        assert response.json()["data"] == {"field": "type"}

    def test_unknown_item(self, client, auth_headers):
        response = _post_transaction(client, auth_headers, 999, 1)
        assert response.status_code == 404
        assert response.json()["data"] == {"field": "item_id"}


class TestLowStockAlerts:
    def _configure_alerts(self, client, headers):
        response = client.patch("/api/settings", json={
            "alert_email": "it@example.com",
            "webhook_teams": "https://teams.example.com/hook",
        }, headers=headers)
        assert response.status_code == 200

    def test_out_below_minimum_alerts_configured_channels(self, client, auth_headers, senders):
        self._configure_alerts(client, auth_headers)
        item = _create_item(client, auth_headers, stock=4, min_stock=5)

        assert _post_transaction(client, auth_headers, item["id"], 1).status_code == 201

        [(event, destination)] = senders[EMAIL_CHANNEL].calls
        assert destination == "it@example.com"
        assert event.stock == 3
        assert event.min_stock == 5
        assert len(senders[TEAMS_CHANNEL].calls) == 1
        assert senders[SLACK_CHANNEL].calls == []

    def test_in_does_not_alert(self, client, auth_headers, senders):
        self._configure_alerts(client, auth_headers)
        item = _create_item(client, auth_headers, stock=3, min_stock=5)

        assert _post_transaction(client, auth_headers, item["id"], 10, "in").status_code == 201
        assert _stock(client, auth_headers, item["id"]) == 13
        assert all(sender.calls == [] for sender in senders.values())

    def test_failing_channel_does_not_fail_request(self, client, auth_headers, senders):
        self._configure_alerts(client, auth_headers)
        senders[EMAIL_CHANNEL].error = ConnectionError("smtp down")
        item = _create_item(client, auth_headers, stock=1, min_stock=5)

        response = _post_transaction(client, auth_headers, item["id"], 1)

        assert response.status_code == 201
        assert len(senders[TEAMS_CHANNEL].calls) == 1


class TestListTransactionsEndpoint:
    def test_newest_first_with_item(self, client, auth_headers):
        item = _create_item(client, auth_headers, stock=50)
        ids = [_post_transaction(client, auth_headers, item["id"], 1).json()["id"]
               for _ in range(3)]

        listed = client.get("/api/transactions", headers=auth_headers).json()

        assert [tx["id"] for tx in listed] == sorted(ids, reverse=True)
        assert listed[0]["item"]["id"] == item["id"]
        assert listed[0]["item"]["stock"] == 47

    def test_same_timestamp_is_ordered_by_id(self, client, auth_headers, db):
        item = _create_item(client, auth_headers, stock=50)
        ids = [_post_transaction(client, auth_headers, item["id"], 1).json()["id"]
               for _ in range(4)]
        tied, older = ids[:3], ids[3]

        tie = datetime(2026, 1, 15, 9, 30)
        db.query(Transaction).filter(Transaction.id.in_(tied)).update(
            {"created_at": tie}, synchronize_session=False)
        db.query(Transaction).filter(Transaction.id == older).update(
            {"created_at": tie - timedelta(hours=1)}, synchronize_session=False)
        db.commit()

        listed = client.get("/api/transactions", headers=auth_headers).json()

        assert [tx["id"] for tx in listed] == sorted(tied, reverse=True) + [older]


class TestSettingsPerRequest:
    def test_settings_are_read_once_per_movement(self, client, auth_headers, notifier, monkeypatch):
        client.patch("/api/settings", json={"smtp_host": "smtp.example.com"}, headers=auth_headers)
        item = _create_item(client, auth_headers)

        reads = []
        real_snapshot = transactions_router.get_settings_snapshot

        def counting_snapshot(db):
            reads.append(db)
            return real_snapshot(db)

        built = []

        def build_notifier(**kwargs):
            built.append(kwargs)
            return notifier

        monkeypatch.setattr(transactions_router, "get_settings_snapshot", counting_snapshot)
        monkeypatch.setattr(transactions_router, "build_low_stock_notifier", build_notifier)
        app.dependency_overrides.pop(transactions_router.get_low_stock_notifier)

        response = _post_transaction(client, auth_headers, item["id"], 1)

        assert response.status_code == 201
        assert len(reads) == 1
        [kwargs] = built
        assert kwargs["smtp_host"] == "smtp.example.com"
