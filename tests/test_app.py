import pytest
from fastapi.testclient import TestClient

from buyer_app.core.config import Settings
from buyer_app.infra.clients.fx_node import HttpFXService
from buyer_app.main import create_app


def test_root_endpoint(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json() == {"service": "FX Buyer API", "status": "ok"}


def test_rate_limit_exceeded(fx_service):
    app = create_app(fx_service=fx_service, settings=Settings(RATE_LIMIT="2/minute"))

    with TestClient(app, raise_server_exceptions=False) as client:
        codes = [client.get("/api/cash").status_code for _ in range(3)]
        blocked = client.get("/api/cash")

    assert codes == [200, 200, 429]
    assert blocked.json()["message"] == "Rate limit exceeded"


@pytest.mark.parametrize(
    "method, path, kwargs",
    [
        ("get", "/api/exchangeRate", {"params": {"from": "GBP", "to": "USD"}}),
        ("post", "/api/cash", {"json": {"amount": {"quantity": "1", "currency": "USD"}}}),
        (
            "post",
            "/api/purchases",
            {"json": {"amount": {"quantity": "1", "currency": "GBP"}, "currency": "USD"}},
        ),
        ("get", "/", {}),
    ],
)
def test_rate_limit_applies_to_every_route(fx_service, method, path, kwargs):
    app = create_app(fx_service=fx_service, settings=Settings(RATE_LIMIT="1/minute"))

    with TestClient(app, raise_server_exceptions=False) as client:
        first = getattr(client, method)(path, **kwargs)
        second = getattr(client, method)(path, **kwargs)

    assert first.status_code != 429
    assert second.status_code == 429


def test_rate_limit_counts_per_endpoint(fx_service):
    app = create_app(fx_service=fx_service, settings=Settings(RATE_LIMIT="1/minute"))

    with TestClient(app, raise_server_exceptions=False) as client:
        assert client.get("/api/cash").status_code == 200
        assert client.get("/api/cash").status_code == 429
        assert client.get("/api/exchangeRate", params={"from": "GBP", "to": "USD"}).status_code == 200


def test_rate_limit_disabled(client):
    codes = {client.get("/api/cash").status_code for _ in range(100)}

    assert codes == {200}


def test_shutdown_closes_service(fx_service, test_settings):
    app = create_app(fx_service=fx_service, settings=test_settings)

    with TestClient(app):
        assert not fx_service.closed

    assert fx_service.closed


def test_default_service_uses_settings():
    settings = Settings(FX_SERVICE_URL="http://node:9000/fx/", FX_SERVICE_TIMEOUT=2.5)

    app = create_app(settings=settings)

    service = app.state.fx_service
    assert isinstance(service, HttpFXService)
    assert service.base_url == "http://node:9000/fx"
    assert service.timeout == 2.5
