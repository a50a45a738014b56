import httpx
import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import app
from app.services.bulksms_service import BulkSmsService, get_bulksms_service


class FakeGateway:
    """
    Stands in for BulkSMSBD behind an httpx.MockTransport.
    Records every request and answers with the configured body, or raises `error`.
    """

    def __init__(self):
        self.requests = []
        self.status_code = 200
        self.body = "202"
        self.error = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status_code, json=self.body)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def last_params(self) -> dict:
        return dict(self.requests[-1].url.params)

    @property
    def last_path(self) -> str:
        return self.requests[-1].url.path


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def gateway_settings():
    return Settings(
        _env_file=None,
        BULKSMS_API_KEY="test-api-key",
        BULKSMS_SENDER_ID="8809612345678",
        BULKSMS_BASE_URL="http://gateway.test/api",
    )


@pytest.fixture
def service(gateway, gateway_settings):
    return BulkSmsService(gateway_settings, transport=httpx.MockTransport(gateway.handler))


@pytest.fixture
def client(service):
    app.dependency_overrides[get_bulksms_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
