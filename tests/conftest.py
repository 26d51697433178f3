"""
Pytest configuration and fixtures for supplier service tests.
Provides settings isolation, AWS mocking, S3 and SQL fixtures with proper cleanup.
"""

import base64
import os
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("AWS_SECURITY_TOKEN", "testing")
os.environ.setdefault("AWS_SESSION_TOKEN", "testing")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("S3_BUCKET", "test-supplier-photos")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "supplier-service")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "SupplierService")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")

from core.config import settings  # noqa: E402
from core.infrastructure.adapters.sql_adapter import configure_engine  # noqa: E402
from core.infrastructure.db.sql_suppliers import Base  # noqa: E402
from form_helpers import BOUNDARY, build_multipart_body  # noqa: E402

TEST_BUCKET = os.environ["S3_BUCKET"]
TEST_REGION = os.environ["AWS_REGION"]


@pytest.fixture(autouse=True)
def app_settings():
    """
    Fresh settings for every test.

    Values come from the environment above and are marked as bootstrapped,
    so no test ever reaches Secrets Manager.
    """
    settings.reset()
    settings.override(S3_BUCKET=TEST_BUCKET, AWS_REGION=TEST_REGION)

    yield settings

    settings.reset()


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=TEST_REGION)


def _cleanup_s3_objects(s3_client, bucket_name):
    """Helper to delete all objects from S3 bucket efficiently."""
    try:
        paginator = s3_client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket_name):
            objects = page.get("Contents", [])
            if objects:
                delete_keys = [{"Key": obj["Key"]} for obj in objects]
                s3_client.delete_objects(Bucket=bucket_name, Delete={"Objects": delete_keys})
    except ClientError as e:
        if e.response["Error"]["Code"] != "NoSuchBucket":
            raise


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """
    Create and manage S3 bucket for testing.

    Cleanup Strategy:
    - Objects are deleted after each test (teardown)
    - Bucket is NOT deleted (moto cleans up on context exit)
    """
    try:
        s3_client.head_bucket(Bucket=TEST_BUCKET)
    except ClientError:
        s3_client.create_bucket(Bucket=TEST_BUCKET)

    yield s3_client

    _cleanup_s3_objects(s3_client, TEST_BUCKET)


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("suppliers/42-1000.jpg", image_bytes, "image/jpeg")
    """

    def _put(key: str, body: bytes, content_type: str = "image/jpeg") -> dict[str, Any]:
        response: dict[str, Any] = s3_bucket.put_object(
            Bucket=TEST_BUCKET, Key=key, Body=body, ContentType=content_type
        )
        return response

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """Helper to read an object's bytes from S3."""

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_bucket.get_object(Bucket=TEST_BUCKET, Key=key)
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def s3_keys(s3_bucket) -> Callable[[], list[str]]:
    """Helper returning every key currently in the bucket."""

    def _keys() -> list[str]:
        response = s3_bucket.list_objects_v2(Bucket=TEST_BUCKET)
        return [item["Key"] for item in response.get("Contents", [])]

    return _keys


@pytest.fixture
def database():
    """
    In-memory SQLite database shared by every session of one test.

    The engine is installed as the process-wide engine so handlers and
    repositories built without arguments use it.
    """
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    configure_engine(engine)

    yield engine

    configure_engine(None)
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_jpeg_binary() -> bytes:
    """Sample binary JPEG data (minimal valid JPEG)."""
    return (
        b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00"
        b"\xff\xdb\x00C\x00\x08\x06\x06\x07\x06\x05\x08\x07\x07\x07\t\t\x08\n\x0c"
        b"\x14\r\x0c\x0b\x0b\x0c\x19\x12\x13\x0f\x14\x1d\x1a\x1f\x1e\x1d\x1a\x1c"
        b"\x1c $.' \",#\x1c\x1c(7),01444\x1f'9=82<.342\xff\xc0\x00\x0b\x08"
        b"\x00\x01\x00\x01\x01\x01\x11\x00\xff\xc4\x00\x14\x00\x01\x00\x00\x00"
        b"\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\t\xff\xc4\x00\x14\x10"
        b"\x01\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00\x00"
        b"\xff\xda\x00\x08\x01\x01\x00\x00?\x00\x7f\x00\xff\xd9"
    )


@pytest.fixture
def supplier_form_fields() -> dict[str, str]:
    return {
        "name": "Acme Widgets",
        "address": "1 Main Street",
        "city": "Springfield",
        "state": "IL",
        "email": "sales@acme.example",
        "phone": "+15551234567",
    }


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


@pytest.fixture
def multipart_event() -> Callable[..., dict[str, Any]]:
    """
    Helper to build an API Gateway event carrying a multipart form.

    Usage:
        event = multipart_event({"name": "Acme"}, files={"photo": ("a.png", data, "image/png")})
    """

    def _build(
        fields: dict[str, str],
        *,
        files: dict[str, tuple[str, bytes, str | None]] | None = None,
        path_parameters: dict[str, str] | None = None,
        http_method: str = "POST",
    ) -> dict[str, Any]:
        body = build_multipart_body(fields, files)
        return {
            "httpMethod": http_method,
            "path": "/suppliers",
            "headers": {"Content-Type": f"multipart/form-data; boundary={BOUNDARY}"},
            "pathParameters": path_parameters,
            "body": base64.b64encode(body).decode("utf-8"),
            "isBase64Encoded": True,
        }

    return _build
