from abc import ABC, abstractmethod
from dataclasses import dataclass


class MediaStoreError(Exception):
    """Raised when the remote media host rejects an upload or delete."""
    pass


@dataclass(frozen=True)
class StoredAsset:
    """Result of an upload: public URL plus the id needed to delete it later."""
    url: str
    asset_id: str


class MediaStore(ABC):
    """
    Interface shared by the media adapters.

    Implementations must be safe to call from several threads at once, the
    product service uploads the full image and the thumbnail in parallel.
    """

    @abstractmethod
    def upload(self, data: bytes, folder: str, content_type: str = "image/jpeg") -> StoredAsset:
        ...

    @abstractmethod
    def delete(self, asset_id: str) -> None:
        ...

    def health_check(self) -> bool:
        return True


def build_media_store(settings) -> MediaStore:
    backend = (settings.MEDIA_BACKEND or "mock").lower()
    if backend == "s3":
        from catalog.adapters.s3_media import S3MediaStore

        return S3MediaStore(
            bucket=settings.S3_BUCKET,
            region=settings.S3_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            public_base_url=settings.MEDIA_PUBLIC_BASE_URL,
            access_key_id=settings.AWS_ACCESS_KEY_ID,
            secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            acl=settings.S3_OBJECT_ACL,
        )
    if backend == "mock":
        from catalog.adapters.mock_media import MockMediaStore

        return MockMediaStore(base_url=settings.MEDIA_PUBLIC_BASE_URL)
    raise ValueError(f"Unknown MEDIA_BACKEND: {settings.MEDIA_BACKEND}")
