import pytest
from fastapi.testclient import TestClient

from billing.core.config import get_settings
from billing.main import create_app


@pytest.fixture()
def settings_env(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("SELLER_STATE_NAME", "Delhi")
    monkeypatch.setenv("SELLER_STATE_CODE", "07")
    monkeypatch.setenv("LOG_JSON", "false")
    for name in ("API_KEY", "REMOTE_SYNC_URL", "REMOTE_SYNC_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture()
def client(settings_env):
    app = create_app()
    with TestClient(app) as client:
        yield client
