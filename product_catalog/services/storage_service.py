import logging

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class StorageError(Exception):
    """An object storage call failed."""


class ObjectNotFound(StorageError):
    """No object exists at the requested key."""


class StorageService:
    """Thin gateway to a single S3 bucket.

    Settings are read once when the service is built. When an endpoint
    override is configured (LocalStack, MinIO) the client switches to
    path-style addressing and URLs are built against that endpoint.
    """

    def __init__(self, bucket, region, access_key, secret_key, endpoint_url=None):
        self.bucket = bucket
        self.region = region
        self.endpoint_url = (endpoint_url or "").rstrip("/") or None

        s3_config = {"addressing_style": "path"} if self.endpoint_url else {}
        self.client = boto3.client(
            "s3",
            endpoint_url=self.endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            region_name=region,
            config=BotoConfig(signature_version="s3v4", s3=s3_config),
        )

    @classmethod
    def from_config(cls, config):
        return cls(
            bucket=config["S3_BUCKET_NAME"],
            region=config["S3_REGION"],
            access_key=config["S3_ACCESS_KEY"],
            secret_key=config["S3_SECRET_KEY"],
            endpoint_url=config["S3_ENDPOINT_URL"],
        )

    def upload(self, storage_key, stream, content_type):
        """Write the whole stream to storage_key and return its URL."""
        data = stream.read()
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=storage_key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"upload of {storage_key} failed") from e
        logger.debug("Stored %d bytes at %s", len(data), storage_key)
        return self.url_for(storage_key)

    def download(self, storage_key):
        """Download file bytes from S3."""
        try:
            response = self.client.get_object(Bucket=self.bucket, Key=storage_key)
            return response["Body"].read()
        except ClientError as e:
            if _error_code(e) in MISSING_KEY_CODES:
                raise ObjectNotFound(storage_key) from e
            raise StorageError(f"download of {storage_key} failed") from e
        except BotoCoreError as e:
            raise StorageError(f"download of {storage_key} failed") from e

    def delete(self, storage_key):
        """Delete an object from S3."""
        try:
            self.client.delete_object(Bucket=self.bucket, Key=storage_key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"delete of {storage_key} failed") from e

    def url_for(self, storage_key):
        if self.endpoint_url:
            return f"{self.endpoint_url}/{self.bucket}/{storage_key}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{storage_key}"

    def check(self):
        """Probe the bucket; used by the health endpoint."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"bucket {self.bucket} unreachable") from e

    def ensure_bucket(self):
        """Create the bucket if missing. Returns True when it was created."""
        try:
            self.client.head_bucket(Bucket=self.bucket)
            return False
        except ClientError as e:
            if _error_code(e) not in MISSING_KEY_CODES | {"NoSuchBucket"}:
                raise StorageError(f"bucket {self.bucket} unreachable") from e
        except BotoCoreError as e:
            raise StorageError(f"bucket {self.bucket} unreachable") from e

        params = {"Bucket": self.bucket}
        # us-east-1 rejects an explicit LocationConstraint
        if self.region and self.region != "us-east-1":
            params["CreateBucketConfiguration"] = {"LocationConstraint": self.region}
        try:
            self.client.create_bucket(**params)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f"could not create bucket {self.bucket}") from e
        logger.info("Created bucket %s", self.bucket)
        return True


def _error_code(error):
    return str(error.response.get("Error", {}).get("Code", ""))
