"""S3 bucket backend for temporary statement uploads."""

import boto3
from botocore.exceptions import ClientError

from spendai.core.settings import Settings
from spendai.core.utils import get_logger

logger = get_logger("spendai.files.s3")

MISSING_BUCKET_CODES = frozenset({"404", "NoSuchBucket", "NotFound"})


class S3UploadBackend:
    """Keeps uploads as objects in one bucket; the bucket is created on first use."""

    def __init__(self, settings: Settings, client: object | None = None) -> None:
        """Connect to the configured endpoint and make sure the upload bucket exists."""
        self.client = client or boto3.client(
            "s3",
            endpoint_url=settings.S3_ENDPOINT_URL,
            aws_access_key_id=settings.S3_ACCESS_KEY,
            aws_secret_access_key=settings.S3_SECRET_KEY,
        )
        self.bucket = settings.S3_BUCKET
        self._create_bucket_if_missing()

    def _create_bucket_if_missing(self) -> None:
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") not in MISSING_BUCKET_CODES:
                raise
            logger.info(f"Creating upload bucket {self.bucket}")
            self.client.create_bucket(Bucket=self.bucket)

    def put(self, key: str, data: bytes) -> None:
        """Store the upload bytes under the key."""
        self.client.put_object(Bucket=self.bucket, Key=key, Body=data)

    def get(self, key: str) -> bytes:
        """Return the bytes stored under the key."""
        return self.client.get_object(Bucket=self.bucket, Key=key)["Body"].read()

    def delete(self, key: str) -> None:
        """Remove the object stored under the key."""
        # S3 treats deleting an absent key as success.
        self.client.delete_object(Bucket=self.bucket, Key=key)

    def exists(self, key: str) -> bool:
        """Check whether an object is stored under the key."""
        try:
            self.client.head_object(Bucket=self.bucket, Key=key)
        except ClientError:
            return False
        return True
