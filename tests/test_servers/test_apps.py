"""
Callback receiver tests using FastAPI's TestClient.
"""
import json

import pytest
from fastapi.testclient import TestClient

from reseller_sdk.servers.apps import CallbackServer
from reseller_sdk.servers.security import sign_callback_data


SECRET = "cb-secret"
PAYLOAD = {"order_number": "ORD-7", "status": "Completed", "quantity": 3}


@pytest.fixture
def received():
    return []


@pytest.fixture
def app(received):
    app = CallbackServer(secret=SECRET)

    @app.on_callback
    async def record(payload):
        received.append(payload)

    return app


def post(client, payload, signature, path="/callback"):
    headers = {"Content-Type": "application/json"}
    if signature is not None:
        headers["Signature"] = signature
    return client.post(path, content=json.dumps(payload), headers=headers)


def test_valid_signature_reaches_handler(app, received):
    response = post(TestClient(app), PAYLOAD, sign_callback_data(SECRET, PAYLOAD))
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert received == [PAYLOAD]


@pytest.mark.parametrize("signature", [None, "", "deadbeef"])
def test_bad_signature_is_rejected(app, received, signature):
    response = post(TestClient(app), PAYLOAD, signature)
    assert response.status_code == 403
    assert received == []


def test_tampered_payload_is_rejected(app, received):
    signature = sign_callback_data(SECRET, PAYLOAD)
    response = post(TestClient(app), dict(PAYLOAD, status="Refunded"), signature)
    assert response.status_code == 403
    assert received == []


def test_non_object_body_is_bad_request(app, received):
    client = TestClient(app)
    assert post(client, [1, 2], "x").status_code == 400
    assert client.post("/callback", content=b"{oops").status_code == 400
    assert received == []


def test_secret_provider_and_sync_handler():
    secrets = {"current": "first"}
    app = CallbackServer(secret=lambda: secrets["current"], callback_path="/hooks/orders")

    @app.on_callback
    def echo(payload):
        return {"order": payload["order_number"]}

    client = TestClient(app)
    secrets["current"] = "rotated"
    response = post(client, PAYLOAD, sign_callback_data("rotated", PAYLOAD), path="/hooks/orders")
    assert response.status_code == 200
    assert response.json() == {"order": "ORD-7"}

    response = post(client, PAYLOAD, sign_callback_data("first", PAYLOAD), path="/hooks/orders")
    assert response.status_code == 403
