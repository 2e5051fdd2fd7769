"""
Pytest configuration and fixtures.
"""
import hashlib
import hmac
import json
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from paybridge.core.config import Settings
from paybridge.main import create_app
from paybridge.services.pos.mock import MockPOS

WEBHOOK_SECRET = "whsec_test"
WEBHOOK_URL = "/api/v1/paymongo/webhook"


def sign(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: str = "1700000000") -> str:
    digest = hmac.new(secret.encode(), b"t=" + timestamp.encode() + b"." + payload, hashlib.sha256).hexdigest()
    return f"t={timestamp},s={digest}"


def source_event(
    source_id: str = "src_abc123",
    status: Optional[str] = "chargeable",
    amount: Optional[int] = 10050,
    email: Optional[str] = "buyer@example.com",
    event_type: str = "source.chargeable",
) -> Dict[str, Any]:
    """PayMongo-shaped event wrapping a source resource."""
    resource_attrs: Dict[str, Any] = {"billing": {"email": email} if email else None}
    if status is not None:
        resource_attrs["status"] = status
    if amount is not None:
        resource_attrs["amount"] = amount
    return {
        "data": {
            "id": "evt_1",
            "type": "event",
            "attributes": {
                "type": event_type,
                "livemode": False,
                "data": {"id": source_id, "type": "source", "attributes": resource_attrs},
            },
        }
    }


def encode(body: Dict[str, Any]) -> bytes:
    return json.dumps(body).encode()


@pytest.fixture
def test_settings() -> Settings:
    """settings with a known secret, independent of the environment."""
    s = Settings()
    s.APP_ENV = "test"
    s.LOG_LEVEL = "DEBUG"
    s.PAYMONGO_WEBHOOK_SECRET = WEBHOOK_SECRET
    s.WEBHOOK_TOLERANCE_SECONDS = 0
    s.POS_PROVIDER = "mock"
    s.POS_MAX_ATTEMPTS = 2
    s.POS_TERMINAL_STATUSES = ["paid", "failed", "cancelled"]
    return s


@pytest.fixture
def pos() -> MockPOS:
    return MockPOS()


@pytest.fixture
def app(test_settings, pos):
    return create_app(test_settings, pos=pos)


@pytest.fixture
def client(app) -> TestClient:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def post_event(client):
    def _post(body: Dict[str, Any], secret: str = WEBHOOK_SECRET, header: Optional[str] = None):
        raw = encode(body)
        return client.post(
            WEBHOOK_URL,
            content=raw,
            headers={"Paymongo-Signature": header if header is not None else sign(raw, secret)},
        )

    return _post
