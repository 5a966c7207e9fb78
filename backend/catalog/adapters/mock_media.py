import threading
from typing import Dict, Optional
from uuid import uuid4

from catalog.adapters.media_store import MediaStore, MediaStoreError, StoredAsset


class MockMediaStore(MediaStore):
    """
    In-memory media host for development and tests.
    Assets live in a dict keyed by asset id; URLs are never actually served.
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = (base_url or "https://media.local").rstrip("/")
        self._assets: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def upload(self, data: bytes, folder: str, content_type: str = "image/jpeg") -> StoredAsset:
        if not data:
            raise MediaStoreError("Refusing to store an empty asset")
        asset_id = f"{folder}/{uuid4().hex}.jpg"
        with self._lock:
            self._assets[asset_id] = bytes(data)
        return StoredAsset(url=f"{self.base_url}/{asset_id}", asset_id=asset_id)

    def delete(self, asset_id: str) -> None:
        with self._lock:
            self._assets.pop(asset_id, None)

    def exists(self, asset_id: str) -> bool:
        with self._lock:
            return asset_id in self._assets

    def get(self, asset_id: str) -> Optional[bytes]:
        with self._lock:
            return self._assets.get(asset_id)

    def clear(self):
        with self._lock:
            self._assets.clear()

    def __len__(self):
        with self._lock:
            return len(self._assets)
