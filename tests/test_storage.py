import asyncio
import json

import httpx

from billing.core.config import Settings
from billing.services.storage import STORAGE_KEYS, StorageService


def _settings(tmp_path, **overrides):
    return Settings(_env_file=None, storage_dir=str(tmp_path), **overrides)


def test_local_round_trip(tmp_path):
    storage = StorageService(_settings(tmp_path))
    assert not storage.cloud_enabled

    asyncio.run(storage.save(STORAGE_KEYS["invoices"], [{"id": "inv-1"}]))

    assert (tmp_path / "bos_cloud_invoices.json").exists()
    assert asyncio.run(storage.load(STORAGE_KEYS["invoices"], [])) == [{"id": "inv-1"}]


def test_missing_and_corrupt_blobs_fall_back_to_default(tmp_path):
    storage = StorageService(_settings(tmp_path))
    assert asyncio.run(storage.load("bos_cloud_leads", [])) == []

    (tmp_path / "bos_cloud_clients.json").write_text("{not json", encoding="utf-8")
    assert asyncio.run(storage.load("bos_cloud_clients", ["fallback"])) == ["fallback"]


def test_remote_mirror_receives_upsert(tmp_path):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        if request.method == "POST":
            return httpx.Response(201)
        return httpx.Response(200, json=[{"content": [{"id": "remote"}]}])

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            settings = _settings(
                tmp_path,
                remote_sync_url="https://sync.example.test/",
                remote_sync_key="secret",
            )
            storage = StorageService(settings, http_client=client)
            await storage.save("bos_cloud_quotations", [{"id": "qt-1"}])
            return await storage.load("bos_cloud_quotations", [])

    loaded = asyncio.run(scenario())

    assert loaded == [{"id": "remote"}]
    post = seen[0]
    assert post.url.path == "/rest/v1/user_data"
    assert post.headers["apikey"] == "secret"
    body = json.loads(post.content)
    assert body["key_id"] == "bos_cloud_quotations"
    assert body["content"] == [{"id": "qt-1"}]
    assert seen[1].url.params["key_id"] == "eq.bos_cloud_quotations"


def test_remote_failures_keep_the_local_copy(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            settings = _settings(
                tmp_path,
                remote_sync_url="https://sync.example.test",
                remote_sync_key="secret",
            )
            storage = StorageService(settings, http_client=client)
            await storage.save("bos_cloud_invoices", [{"id": "inv-9"}])
            return await storage.load("bos_cloud_invoices", [])

    assert asyncio.run(scenario()) == [{"id": "inv-9"}]


def test_remote_without_rows_falls_back_to_local(tmp_path):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            return httpx.Response(201)
        return httpx.Response(200, json=[])

    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            settings = _settings(
                tmp_path,
                remote_sync_url="https://sync.example.test",
                remote_sync_key="secret",
            )
            storage = StorageService(settings, http_client=client)
            storage.save_local("bos_cloud_invoices", [{"id": "local"}])
            return await storage.load("bos_cloud_invoices", [])

    assert asyncio.run(scenario()) == [{"id": "local"}]


def test_local_file_io_runs_in_a_worker_thread(tmp_path, monkeypatch):
    from billing.services import storage as storage_module

    calls = []
    real_to_thread = asyncio.to_thread

    async def recording_to_thread(func, *args, **kwargs):
        calls.append(func.__name__)
        return await real_to_thread(func, *args, **kwargs)

    monkeypatch.setattr(storage_module.asyncio, "to_thread", recording_to_thread)
    storage = StorageService(_settings(tmp_path))

    async def scenario():
        await storage.save("bos_cloud_invoices", [{"id": "inv-2"}])
        return await storage.load("bos_cloud_invoices", [])

    assert asyncio.run(scenario()) == [{"id": "inv-2"}]
    assert calls == ["save_local", "load_local"]
