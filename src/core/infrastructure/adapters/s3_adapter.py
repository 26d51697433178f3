"""Thin adapter for interacting with Amazon S3."""

from collections.abc import Mapping
from typing import Any, Protocol

import boto3

from core.config import Settings, settings as default_settings
from core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_S3_BUCKET,
)
from core.utils.keys import build_object_url


class _Boto3S3Client(Protocol):
    """Internal typing for boto3 S3 client (AWS-facing only)."""

    def put_object(
        self,
        *,
        Bucket: str,
        Key: str,
        Body: bytes,
        ContentType: str,
    ) -> Any: ...

    def get_object(self, *, Bucket: str, Key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, Bucket: str, Key: str) -> Any: ...

    def head_object(self, *, Bucket: str, Key: str) -> Mapping[str, Any]: ...

    def list_objects_v2(
        self,
        *,
        Bucket: str,
        Prefix: str,
        MaxKeys: int,
    ) -> Mapping[str, Any]: ...


class S3AdapterProtocol(Protocol):
    """Minimal S3 adapter protocol (object-store-facing)."""

    def bucket(self) -> str: ...

    def region(self) -> str: ...

    def object_url(self, key: str) -> str: ...

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None: ...

    def get_object(self, *, key: str) -> Mapping[str, Any]: ...

    def delete_object(self, *, key: str) -> None: ...

    def head_object(self, *, key: str) -> Mapping[str, Any]: ...

    def list_objects(self, *, prefix: str, max_keys: int) -> Mapping[str, Any]: ...


class S3Adapter:
    """Low-level S3 operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 S3 client
    - Resolves bucket and region from settings on every call
    - Raises ConfigurationError before any remote call when the bucket is unset
    - Does NOT translate boto errors (lets them bubble up)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or default_settings
        self._clients: dict[tuple[str, str | None], _Boto3S3Client] = {}

    def bucket(self) -> str:
        return self._settings.require(ENV_S3_BUCKET)

    def region(self) -> str:
        return self._settings.get(ENV_AWS_REGION, DEFAULT_AWS_REGION) or DEFAULT_AWS_REGION

    def object_url(self, key: str) -> str:
        """Canonical URL for ``key`` in the configured bucket."""
        return build_object_url(self.bucket(), self.region(), key)

    def _client(self) -> _Boto3S3Client:
        region = self.region()
        endpoint_url = self._settings.get(ENV_AWS_ENDPOINT_URL)
        cache_key = (region, endpoint_url)

        if cache_key not in self._clients:
            self._clients[cache_key] = boto3.client(
                "s3",
                endpoint_url=endpoint_url,
                region_name=region,
            )
        return self._clients[cache_key]

    def put_object(self, *, key: str, body: bytes, content_type: str) -> None:
        """Store object in S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        bucket = self.bucket()
        self._client().put_object(
            Bucket=bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def get_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object from S3.
        Raises boto3 exceptions - caught by domain implementation.
        """
        bucket = self.bucket()
        return self._client().get_object(Bucket=bucket, Key=key)

    def delete_object(self, *, key: str) -> None:
        """Delete object from S3. Absent keys are not an error.
        Raises boto3 exceptions - caught by domain implementation.
        """
        bucket = self.bucket()
        self._client().delete_object(Bucket=bucket, Key=key)

    def head_object(self, *, key: str) -> Mapping[str, Any]:
        """Fetch object metadata without the body."""
        bucket = self.bucket()
        return self._client().head_object(Bucket=bucket, Key=key)

    def list_objects(self, *, prefix: str, max_keys: int) -> Mapping[str, Any]:
        """List a single page of objects under ``prefix``."""
        bucket = self.bucket()
        return self._client().list_objects_v2(
            Bucket=bucket,
            Prefix=prefix,
            MaxKeys=max_keys,
        )
