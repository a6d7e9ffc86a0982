"""Integration tests for the /orders routes, /health and the 404 handler."""
import requests

from conftest import FakeResponse


class TestLoginRoute:
    def test_login_success(self, client, http, tokens):
        http.queue(FakeResponse(200, {"Data": {"Token": "abc", "UserId": 1, "Name": "N"}}))

        response = client.post("/orders/auth/login", json={"username": "u", "password": "p"})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"token": "abc", "userId": 1, "name": "N"},
        }
        assert tokens.get() == "abc"

    def test_login_without_body_and_without_config(self, client, http):
        response = client.post("/orders/auth/login")

        assert response.status_code == 500
        body = response.json()
        assert body["success"] is False
        assert "credentials are missing" in body["error"]
        assert body["pikndelData"] is None
        assert http.calls == []

    def test_provider_rejection_is_mirrored(self, client, http):
        http.queue(FakeResponse(401, {"Message": "Bad credentials"}))

        response = client.post("/orders/auth/login", json={"username": "u", "password": "x"})

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "error": "PIKNDEL Unauthorized (401): Bad credentials",
            "pikndelData": {"Message": "Bad credentials"},
        }


class TestPlaceOrderRoute:
    def test_place_order(self, client, http, order_payload):
        http.queue(FakeResponse(200, {"AWBNo": "PKD123", "TrackingURL": "https://t/PKD123"}))

        response = client.post("/orders/place", json=order_payload)

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "data": {"AWBNo": "PKD123", "TrackingURL": "https://t/PKD123"},
        }

    def test_validation_error(self, client, http, order_payload):
        del order_payload["UserId"]

        response = client.post("/orders/place", json=order_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "placeOrder: UserId is required."
        assert http.calls == []

    def test_provider_bad_request_carries_raw_body(self, client, http, order_payload):
        http.queue(FakeResponse(400, {"Message": "Duplicate ClientUniqueNo"}))

        response = client.post("/orders/place", json=order_payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "PIKNDEL Bad Request (400): Duplicate ClientUniqueNo"
        assert body["pikndelData"] == {"Message": "Duplicate ClientUniqueNo"}

    def test_network_error(self, client, http, order_payload):
        http.queue(requests.ConnectionError("unreachable"))

        response = client.post("/orders/place", json=order_payload)

        assert response.status_code == 500
        assert "Network error calling PIKNDEL" in response.json()["error"]


class TestOrderStatusRoute:
    def test_missing_awb(self, client, http):
        response = client.post("/orders/status", json={})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "AWBNo is required in request body.",
        }
        assert http.calls == []

    def test_status(self, client, http):
        http.queue(FakeResponse(200, {"Data": {"short_code": "OFD"}}))

        response = client.post("/orders/status", json={"AWBNo": "PKD1"})

        assert response.status_code == 200
        assert response.json()["data"] == {"Data": {"short_code": "OFD"}}
        assert http.calls[0]["json"]["Data"] == {"AWBNo": "PKD1"}

    def test_unexpected_status(self, client, http):
        http.queue(FakeResponse(404, {"Message": "Not found"}))

        response = client.post("/orders/status", json={"AWBNo": "PKD1"})

        assert response.status_code == 404
        assert response.json()["pikndelData"] == {"Message": "Not found"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "pikndel-integration"}


def test_unknown_route(client):
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Route not found."}


class TestRequestBodyEdgeCases:
    def test_place_order_without_body(self, client, http):
        response = client.post("/orders/place")

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "placeOrder: UserId is required.",
            "pikndelData": None,
        }
        assert http.calls == []

    def test_login_with_non_string_username_uses_error_envelope(self, client, http):
        response = client.post(
            "/orders/auth/login", json={"username": 123, "password": ["p"]}
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"].startswith("Invalid request:")
        assert "username" in body["error"]
        assert "password" in body["error"]
        assert body["pikndelData"] is None
        assert "detail" not in body
        assert http.calls == []
