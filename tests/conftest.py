import os

# Configuration is read at import time, so set it before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PIKNDEL_BASE_URL"] = "https://pikndel.test/"
os.environ["PIKNDEL_SOURCE"] = "7"
os.environ.pop("PIKNDEL_USERNAME", None)
os.environ.pop("PIKNDEL_PASSWORD", None)
os.environ.pop("PIKNDEL_WEBHOOK_SECRET", None)

import copy

import pytest
from fastapi.testclient import TestClient

from config.database import Base, SessionLocal, engine
from main import app
from models import WebhookResponse
from utils.pikndel import Pikndel, PikndelClient, get_pikndel
from utils.token_store import TokenStore


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeHttp:
    """Stands in for the requests module; replays queued responses in order."""

    def __init__(self):
        self.responses = []
        self.calls = []

    def queue(self, *responses):
        self.responses.extend(responses)
        return self

    def request(self, **kwargs):
        self.calls.append(copy.deepcopy(kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


VALID_ORDER = {
    "UserId": "800",
    "OrderDetails": [
        {
            "ClientUniqueNo": "MY-ORD-001",
            "TotalActualWeight": 1,
            "Info": [
                {
                    "Pickup": {
                        "PersonName": "Test Sender",
                        "Mobile": "9876543210",
                        "Address": "22, MG Road, Mumbai Central",
                        "Pincode": "400008",
                        "CashPaid": 0,
                        "CashCollection": 150,
                    },
                    "Item": [
                        {
                            "Qty": 1,
                            "Type": "Goods",
                            "IsFragile": True,
                            "Cost": 55000,
                            "Length": 10,
                            "Width": 10,
                            "Height": 10,
                            "ActualWeight": 1,
                        }
                    ],
                    "Delivery": {
                        "PersonName": "Test Receiver",
                        "Mobile": "9123456789",
                        "Address": "Govindpuri Kalkaji, New Delhi",
                        "Pincode": "110019",
                        "CashCollection": "250.50",
                    },
                }
            ],
        }
    ],
}


@pytest.fixture
def order_payload():
    return copy.deepcopy(VALID_ORDER)


@pytest.fixture
def tokens():
    return TokenStore()


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def pikndel_client(tokens, http):
    return PikndelClient(base_url="https://pikndel.test", tokens=tokens, http=http)


@pytest.fixture
def service(pikndel_client):
    return Pikndel(pikndel_client, username=None, password=None)


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(service):
    app.dependency_overrides[get_pikndel] = lambda: service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def stored_pushes():
    def fetch():
        with SessionLocal() as db:
            return db.query(WebhookResponse).order_by(WebhookResponse.id).all()

    return fetch
