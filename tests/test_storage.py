"""Tests for the boto3-backed storage service (stubbed, no network)."""
import io

import pytest
from botocore.response import StreamingBody
from botocore.stub import Stubber

from product_catalog.config import TestingConfig
from product_catalog.services.storage_service import (
    ObjectNotFound,
    StorageError,
    StorageService,
)


def _service(endpoint_url=None, region="us-east-1"):
    return StorageService(
        bucket="catalog",
        region=region,
        access_key="test",
        secret_key="test",
        endpoint_url=endpoint_url,
    )


@pytest.fixture
def service():
    return _service(endpoint_url="http://localhost:4566")


@pytest.fixture
def stubber(service):
    with Stubber(service.client) as stub:
        yield stub
        stub.assert_no_pending_responses()


def test_url_for_aws():
    svc = _service(region="eu-west-1")
    assert svc.url_for("products/1/image") == (
        "https://catalog.s3.eu-west-1.amazonaws.com/products/1/image"
    )


def test_url_for_custom_endpoint():
    svc = _service(endpoint_url="http://localhost:4566/")
    assert svc.url_for("products/1/image") == (
        "http://localhost:4566/catalog/products/1/image"
    )


def test_custom_endpoint_uses_path_style():
    svc = _service(endpoint_url="http://localhost:4566")
    assert svc.client.meta.config.s3["addressing_style"] == "path"
    assert svc.client.meta.endpoint_url == "http://localhost:4566"


def test_aws_endpoint_is_virtual_hosted():
    svc = _service()
    assert not (svc.client.meta.config.s3 or {}).get("addressing_style")


def test_from_config():
    config = {
        key: getattr(TestingConfig, key)
        for key in dir(TestingConfig)
        if key.startswith("S3_")
    }
    svc = StorageService.from_config(config)
    assert svc.bucket == "test-bucket"
    assert svc.url_for("k") == "http://localhost:4566/test-bucket/k"


def test_upload_puts_whole_stream(service, stubber):
    stubber.add_response(
        "put_object",
        {},
        {
            "Bucket": "catalog",
            "Key": "products/1/image",
            "Body": b"image-bytes",
            "ContentType": "image/png",
        },
    )
    stream = io.BytesIO(b"image-bytes")

    url = service.upload("products/1/image", stream, "image/png")

    assert url == "http://localhost:4566/catalog/products/1/image"
    assert stream.read() == b""


def test_upload_failure_raises_storage_error(service, stubber):
    stubber.add_client_error("put_object", service_error_code="AccessDenied", http_status_code=403)

    with pytest.raises(StorageError):
        service.upload("products/1/image", io.BytesIO(b"x"), "image/jpeg")


def test_download_returns_bytes(service, stubber):
    body = b"\xff\xd8\xff\xe0jpeg"
    stubber.add_response(
        "get_object",
        {"Body": StreamingBody(io.BytesIO(body), len(body))},
        {"Bucket": "catalog", "Key": "products/1/image"},
    )

    assert service.download("products/1/image") == body


def test_download_missing_key_raises_not_found(service, stubber):
    stubber.add_client_error("get_object", service_error_code="NoSuchKey", http_status_code=404)

    with pytest.raises(ObjectNotFound):
        service.download("products/1/image")


def test_download_other_failure_is_storage_error(service, stubber):
    stubber.add_client_error("get_object", service_error_code="AccessDenied", http_status_code=403)

    with pytest.raises(StorageError) as exc_info:
        service.download("products/1/image")
    assert not isinstance(exc_info.value, ObjectNotFound)


def test_delete(service, stubber):
    stubber.add_response(
        "delete_object", {}, {"Bucket": "catalog", "Key": "products/1/image"}
    )
    service.delete("products/1/image")


def test_delete_failure_raises_storage_error(service, stubber):
    stubber.add_client_error("delete_object", service_error_code="InternalError", http_status_code=500)

    with pytest.raises(StorageError):
        service.delete("products/1/image")


def test_check_failure(service, stubber):
    stubber.add_client_error("head_bucket", service_error_code="404", http_status_code=404)

    with pytest.raises(StorageError):
        service.check()


def test_ensure_bucket_creates_missing(service, stubber):
    stubber.add_client_error("head_bucket", service_error_code="404", http_status_code=404)
    stubber.add_response("create_bucket", {}, {"Bucket": "catalog"})

    assert service.ensure_bucket() is True


def test_ensure_bucket_existing(service, stubber):
    stubber.add_response("head_bucket", {}, {"Bucket": "catalog"})

    assert service.ensure_bucket() is False


def test_ensure_bucket_outside_us_east_1():
    svc = _service(endpoint_url="http://localhost:4566", region="eu-west-1")
    with Stubber(svc.client) as stub:
        stub.add_client_error("head_bucket", service_error_code="404", http_status_code=404)
        stub.add_response(
            "create_bucket",
            {},
            {
                "Bucket": "catalog",
                "CreateBucketConfiguration": {"LocationConstraint": "eu-west-1"},
            },
        )
        assert svc.ensure_bucket() is True
        stub.assert_no_pending_responses()
