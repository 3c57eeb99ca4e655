"""HTTP tests for the /orders endpoints."""

from tests.infrastructure.seed import stock


def _payload(*items: tuple[int, int], **recipient_overrides) -> dict:
    recipient = {
        "name": "Jan Kowalski",
        "phone": "600100200",
        "street": "Prosta 1",
        "city": "Warszawa",
        "zipCode": "00-001",
        "email": "jan@example.com",
    }
    recipient.update(recipient_overrides)
    return {
        "recipient": recipient,
        "items": [{"bookId": book_id, "quantity": qty} for book_id, qty in items],
    }


def _create(client, *items: tuple[int, int]) -> dict:
    response = client.post("/orders", json=_payload(*items))
    assert response.status_code == 201
    return response.json()


class TestCreateOrderEndpoint:

    def test_created(self, client, container):
        response = client.post("/orders", json=_payload((1, 10), (2, 5)))

        assert response.status_code == 201
        body = response.json()
        assert response.headers["location"] == f"/orders/{body['id']}"
        assert body["status"] == "NEW"
        assert body["total"] == "1075.00"
        assert body["recipient"]["zip_code"] == "00-001"
        assert body["items"][0]["title"] == "Effective Java"
        assert body["items"][0]["authors"] == ["Joshua Bloch"]
        assert stock(container, 1) == 0
        assert stock(container, 2) == 5

    def test_out_of_stock(self, client, container):
        response = client.post("/orders", json=_payload((1, 11)))

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == 400
        assert "timestamp" in body
        assert body["errors"] == [
            "Not enough books available: 'Effective Java' (requested 11, available 10)"
        ]
        assert stock(container, 1) == 10

    def test_unknown_book(self, client):
        response = client.post("/orders", json=_payload((1, 1), (99, 1)))
        assert response.status_code == 400
        assert response.json()["errors"] == ["Can not find a book with id: 99"]

    def test_invalid_recipient(self, client):
        response = client.post("/orders", json=_payload((1, 1), email="nope"))
        assert response.status_code == 400
        assert "email is invalid" in response.json()["errors"][0]

    def test_malformed_body(self, client):
        response = client.post("/orders", json={"items": "many"})
        assert response.status_code == 400
        assert response.json()["errors"]

    def test_snake_case_input_accepted(self, client):
        payload = _payload((1, 1))
        payload["recipient"]["zip_code"] = payload["recipient"].pop("zipCode")
        payload["items"] = [{"book_id": 1, "quantity": 1}]
        assert client.post("/orders", json=payload).status_code == 201


class TestReadOrders:

    def test_get_by_id(self, client):
        created = _create(client, (1, 2))
        response = client.get(f"/orders/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_missing(self, client):
        response = client.get("/orders/404")
        assert response.status_code == 404
        assert response.json()["errors"] == ["Order #404 not found"]

    def test_list(self, client):
        _create(client, (1, 1))
        _create(client, (2, 1))
        assert [o["id"] for o in client.get("/orders").json()] == [1, 2]


class TestOrderStatusEndpoint:

    def test_accept(self, client):
        order = _create(client, (1, 2))
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "accepted"})
        assert response.status_code == 200
        assert response.json()["status"] == "ACCEPTED"

    def test_missing_status(self, client):
        order = _create(client, (1, 2))
        response = client.patch(f"/orders/{order['id']}/status", json={})
        assert response.status_code == 400
        assert response.json()["errors"] == ["status incorrect input data"]

    def test_illegal_transition(self, client):
        order = _create(client, (1, 2))
        response = client.patch(f"/orders/{order['id']}/status", json={"status": "SENT"})
        assert response.status_code == 400
        assert client.get(f"/orders/{order['id']}").json()["status"] == "NEW"

    def test_unknown_order(self, client):
        response = client.patch("/orders/77/status", json={"status": "ACCEPTED"})
        assert response.status_code == 404

    def test_cancel_restocks(self, client, container):
        order = _create(client, (1, 4))
        client.patch(f"/orders/{order['id']}/status", json={"status": "CANCELED"})
        assert stock(container, 1) == 10


class TestDeleteOrderEndpoint:

    def test_delete_new_order_restocks(self, client, container):
        order = _create(client, (1, 3))
        assert stock(container, 1) == 7

        response = client.delete(f"/orders/{order['id']}")

        assert response.status_code == 204
        assert stock(container, 1) == 10
        assert client.get(f"/orders/{order['id']}").status_code == 404

    def test_delete_unknown_order(self, client):
        assert client.delete("/orders/12345").status_code == 204


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestErrorHandlers:

    def test_conflict_is_409(self, client, monkeypatch):
        from bos.application.create_order import CreateOrderHandler
        from bos.domain.exceptions import ConflictError

        def conflict(self, recipient, item_specs):
            raise ConflictError("The data was changed concurrently, please retry")

        monkeypatch.setattr(CreateOrderHandler, "handle", conflict)
        response = client.post("/orders", json=_payload((1, 1)))

        assert response.status_code == 409
        assert response.json()["errors"] == ["The data was changed concurrently, please retry"]

    def test_unexpected_error_is_500(self, container, monkeypatch):
        from fastapi.testclient import TestClient

        from bos.application.show_order import ListOrdersHandler
        from bos.infrastructure.web.app import create_app

        def boom(self):
            raise RuntimeError("boom")

        monkeypatch.setattr(ListOrdersHandler, "handle", boom)
        client = TestClient(create_app(container), raise_server_exceptions=False)
        response = client.get("/orders")

        assert response.status_code == 500
        assert response.json()["errors"] == ["Internal server error"]


class TestOutOfRangeIds:

    HUGE = 2**70

    def test_create_with_huge_book_id(self, client, container):
        response = client.post("/orders", json=_payload((1, 1), (self.HUGE, 1)))

        assert response.status_code == 400
        assert response.json()["errors"] == [f"Can not find a book with id: {self.HUGE}"]
        assert stock(container, 1) == 10

    def test_get_huge_id(self, client):
        assert client.get(f"/orders/{self.HUGE}").status_code == 404

    def test_delete_huge_id(self, client):
        assert client.delete(f"/orders/{self.HUGE}").status_code == 204

    def test_status_of_huge_id(self, client):
        response = client.patch(f"/orders/{self.HUGE}/status", json={"status": "ACCEPTED"})
        assert response.status_code == 404
