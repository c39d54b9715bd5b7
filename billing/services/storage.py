"""Key-value persistence for whole collections of documents.

Each collection is saved as an opaque JSON blob under a fixed storage key.
The local copy is always written; when remote sync is configured the blob is
also upserted into a PostgREST table keyed by the same identifier.
"""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from ..core.config import Settings
from ..core.logging import get_logger

logger = get_logger(__name__)

STORAGE_KEYS: Dict[str, str] = {
    "invoices": "bos_cloud_invoices",
    "quotations": "bos_cloud_quotations",
}


class StorageService:
    """Local JSON files with an optional remote mirror."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None) -> None:
        self.root = Path(settings.storage_dir)
        self.table = settings.remote_sync_table
        self._remote_url = (settings.remote_sync_url or "").rstrip("/")
        self._remote_key = settings.remote_sync_key
        self._http = http_client if settings.remote_sync_enabled else None

    @property
    def cloud_enabled(self) -> bool:
        return self._http is not None

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self._remote_key or "",
            "Authorization": f"Bearer {self._remote_key}",
            "Content-Type": "application/json",
        }

    def _table_url(self) -> str:
        return f"{self._remote_url}/rest/v1/{self.table}"

    def save_local(self, key: str, data: Any) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp.replace(path)

    def load_local(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        if not path.exists():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("local_blob_corrupt", key=key, path=str(path))
            return default

    async def save(self, key: str, data: Any) -> None:
        await asyncio.to_thread(self.save_local, key, data)
        if self._http is None:
            return

        row = {
            "key_id": key,
            "content": data,
            "updated_at": datetime.now(tz=timezone.utc).isoformat(),
        }
        headers = {**self._headers(), "Prefer": "resolution=merge-duplicates"}
        try:
            response = await self._http.post(
                self._table_url(),
                params={"on_conflict": "key_id"},
                json=row,
                headers=headers,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            # The local blob is already written; the next save retries the mirror.
            logger.error("remote_sync_failed", key=key, error=str(exc))

    async def load(self, key: str, default: Any = None) -> Any:
        if self._http is not None:
            try:
                response = await self._http.get(
                    self._table_url(),
                    params={"key_id": f"eq.{key}", "select": "content"},
                    headers=self._headers(),
                )
                response.raise_for_status()
                rows = response.json()
                if rows:
                    return rows[0].get("content")
            except (httpx.HTTPError, ValueError) as exc:
                logger.warning("remote_load_failed", key=key, error=str(exc))

        return await asyncio.to_thread(self.load_local, key, default)
