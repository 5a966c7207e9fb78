import logging
from typing import Optional
from uuid import uuid4

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from catalog.adapters.media_store import MediaStore, MediaStoreError, StoredAsset

logger = logging.getLogger(__name__)


class S3MediaStore(MediaStore):
    """
    Stores images as public objects in an S3 (or S3-compatible) bucket.

    The object key doubles as the asset id. URLs are built from
    public_base_url when given (CDN or custom domain), otherwise from the
    bucket's virtual-host address. Those URLs only resolve if the objects are
    readable: either a public-read bucket policy, a CDN in front of the bucket,
    or an object ACL such as "public-read" (needs Block Public Access off).
    """

    def __init__(
        self,
        bucket: Optional[str],
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        acl: Optional[str] = None,
        client=None,
    ):
        if not bucket:
            raise ValueError("S3_BUCKET must be set when MEDIA_BACKEND=s3")
        self.bucket = bucket
        self.acl = acl
        self.region = region
        if public_base_url:
            self.public_base_url = public_base_url.rstrip("/")
        elif endpoint_url:
            self.public_base_url = f"{endpoint_url.rstrip('/')}/{bucket}"
        else:
            self.public_base_url = f"https://{bucket}.s3.{region}.amazonaws.com"
        # boto3 clients are thread-safe, one is shared by all requests
        self.s3 = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    def upload(self, data: bytes, folder: str, content_type: str = "image/jpeg") -> StoredAsset:
        key = f"{folder.strip('/')}/{uuid4().hex}.jpg"
        params = {"Bucket": self.bucket, "Key": key, "Body": data, "ContentType": content_type}
        if self.acl:
            params["ACL"] = self.acl
        try:
            self.s3.put_object(**params)
        except (BotoCoreError, ClientError) as e:
            raise MediaStoreError(f"Upload of {key} failed: {e}") from e
        logger.info("Uploaded s3://%s/%s (%d bytes)", self.bucket, key, len(data))
        return StoredAsset(url=f"{self.public_base_url}/{key}", asset_id=key)

    def delete(self, asset_id: str) -> None:
        try:
            self.s3.delete_object(Bucket=self.bucket, Key=asset_id)
        except (BotoCoreError, ClientError) as e:
            raise MediaStoreError(f"Delete of {asset_id} failed: {e}") from e
        logger.info("Deleted s3://%s/%s", self.bucket, asset_id)

    def health_check(self) -> bool:
        try:
            self.s3.head_bucket(Bucket=self.bucket)
            return True
        except (BotoCoreError, ClientError):
            logger.warning("S3 bucket %s is not reachable", self.bucket)
            return False
