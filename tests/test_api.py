"""API tests for the conversion endpoints."""

import base64

import pytest
from fastapi.testclient import TestClient

from api.main import app

CARD = (
    "BEGIN:VCARD\r\n"
    "VERSION:3.0\r\n"
    "N:Doe;Jane;;;\r\n"
    "FN:Jane Doe\r\n"
    "TEL;TYPE=CELL:+1 202 555 1234\r\n"
    "END:VCARD\r\n"
)


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("CONTACTSHARE_SENDING_ENABLED", "true")
    monkeypatch.setenv("CONTACTSHARE_DEFAULT_REGION", "US")
    app.state.service = None
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_vcard_to_message_and_back(client):
    r = client.post("/convert/vcard-to-message", json={"vcard": CARD})
    assert r.status_code == 200
    body = r.json()
    assert body["display_name"] == "Jane Doe"
    assert body["reachable_numbers"] == ["+12025551234"]

    r = client.post("/convert/message-to-vcard", json={"payload": body["payload"]})
    assert r.status_code == 200
    back = r.json()
    assert back["display_name"] == "Jane Doe"
    assert back["valid"] is True
    assert "TEL;TYPE=CELL:+1 202 555 1234" in back["vcard"]


def test_vcard_to_message_rejects_garbage(client):
    r = client.post("/convert/vcard-to-message", json={"vcard": "not a card"})
    assert r.status_code == 400


def test_message_to_vcard_rejects_bad_payload(client):
    r = client.post("/convert/message-to-vcard", json={"payload": "%%%"})
    assert r.status_code == 400
    empty = base64.b64encode(b'{"contact": []}').decode("ascii")
    r = client.post("/convert/message-to-vcard", json={"payload": empty})
    assert r.status_code == 400
