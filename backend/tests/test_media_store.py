from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from catalog.adapters.media_store import MediaStore, MediaStoreError, build_media_store
from catalog.adapters.mock_media import MockMediaStore
from catalog.adapters.s3_media import S3MediaStore


def _client_error(op):
    return ClientError({"Error": {"Code": "500", "Message": "boom"}}, op)


def test_mock_store_upload_and_delete():
    store = MockMediaStore(base_url="https://cdn.example.com/")
    asset = store.upload(b"jpeg-bytes", "products")
    assert asset.asset_id.startswith("products/")
    assert asset.url == f"https://cdn.example.com/{asset.asset_id}"
    assert store.get(asset.asset_id) == b"jpeg-bytes"
    store.delete(asset.asset_id)
    assert not store.exists(asset.asset_id)
    # deleting twice is harmless
    store.delete(asset.asset_id)


def test_mock_store_rejects_empty():
    with pytest.raises(MediaStoreError):
        MockMediaStore().upload(b"", "products")


def test_s3_upload_uses_bucket_and_folder():
    s3 = MagicMock()
    store = S3MediaStore(bucket="shop-media", region="eu-west-1", client=s3)
    asset = store.upload(b"data", "catalog")

    kwargs = s3.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "shop-media"
    assert kwargs["Key"] == asset.asset_id
    assert kwargs["Key"].startswith("catalog/") and kwargs["Key"].endswith(".jpg")
    assert kwargs["ContentType"] == "image/jpeg"
    assert asset.url == f"https://shop-media.s3.eu-west-1.amazonaws.com/{asset.asset_id}"


def test_s3_public_base_url():
    store = S3MediaStore(bucket="b", public_base_url="https://img.example.com/", client=MagicMock())
    asset = store.upload(b"data", "catalog")
    assert asset.url == f"https://img.example.com/{asset.asset_id}"


def test_s3_endpoint_url_path_style():
    store = S3MediaStore(bucket="b", endpoint_url="http://localhost:9000", client=MagicMock())
    asset = store.upload(b"data", "catalog")
    assert asset.url == f"http://localhost:9000/b/{asset.asset_id}"


def test_s3_errors_become_media_store_errors():
    s3 = MagicMock()
    s3.put_object.side_effect = _client_error("PutObject")
    s3.delete_object.side_effect = _client_error("DeleteObject")
    store = S3MediaStore(bucket="b", client=s3)
    with pytest.raises(MediaStoreError):
        store.upload(b"data", "catalog")
    with pytest.raises(MediaStoreError):
        store.delete("catalog/x.jpg")


def test_s3_health_check():
    s3 = MagicMock()
    store = S3MediaStore(bucket="b", client=s3)
    assert store.health_check() is True
    s3.head_bucket.side_effect = _client_error("HeadBucket")
    assert store.health_check() is False


def test_s3_requires_bucket():
    with pytest.raises(ValueError):
        S3MediaStore(bucket=None, client=MagicMock())


def test_build_media_store():
    settings = SimpleNamespace(MEDIA_BACKEND="mock", MEDIA_PUBLIC_BASE_URL=None)
    assert isinstance(build_media_store(settings), MockMediaStore)
    with pytest.raises(ValueError):
        build_media_store(SimpleNamespace(MEDIA_BACKEND="ftp"))


def test_s3_upload_without_acl():
    s3 = MagicMock()
    S3MediaStore(bucket="b", client=s3).upload(b"data", "catalog")
    assert "ACL" not in s3.put_object.call_args.kwargs


def test_s3_upload_with_acl():
    s3 = MagicMock()
    S3MediaStore(bucket="b", acl="public-read", client=s3).upload(b"data", "catalog")
    assert s3.put_object.call_args.kwargs["ACL"] == "public-read"


def test_media_store_subclass_must_implement_delete():
    class UploadOnly(MediaStore):
        def upload(self, data, folder, content_type="image/jpeg"):
            return None

    with pytest.raises(TypeError):
        UploadOnly()
