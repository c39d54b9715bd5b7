def test_health(client):
    response = client.get("/v1/health")
    assert response.status_code == 200
    body = response.json()
    assert body["ok"] is True
    assert body["cloud_sync"] is False
    assert response.headers["X-Request-Id"]


def test_version_reports_seller_jurisdiction(client):
    response = client.get("/v1/version")
    assert response.status_code == 200
    assert response.json()["seller_place_of_supply"] == "Delhi (07)"


def test_api_key_is_enforced_when_configured(settings_env, monkeypatch):
    from fastapi.testclient import TestClient

    from billing.core.config import get_settings
    from billing.main import create_app

    monkeypatch.setenv("API_KEY", "s3cret")
    get_settings.cache_clear()

    with TestClient(create_app()) as client:
        assert client.get("/v1/health").status_code == 401
        assert client.get("/v1/health", headers={"X-API-Key": "s3cret"}).status_code == 200
