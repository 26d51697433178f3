"""S3-backed implementation of ObjectStoreRepository."""

from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import BotoCoreError, ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import NotFoundError, StoreError
from core.models.image import ImageContent, StoredImage, StoredObject
from core.repositories.storage_repository import ObjectStoreRepository
from core.utils.constants import (
    DEFAULT_BINARY_CONTENT_TYPE,
    DEFAULT_LIST_MAX_RESULTS,
    ERROR_CODE_UNKNOWN_STORE_ERROR,
    NOT_FOUND_CODES,
)

logger = Logger(UTC=True)


def translate_store_error(exc: Exception, *, operation: str, key: str | None = None) -> StoreError:
    """Convert a boto failure into the single StoreError shape."""
    details: dict[str, Any] = {"operation": operation}
    if key is not None:
        details["key"] = key

    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        metadata = exc.response.get("ResponseMetadata", {})
        code = str(error.get("Code") or ERROR_CODE_UNKNOWN_STORE_ERROR)
        message = str(error.get("Message") or exc)
        status_code = metadata.get("HTTPStatusCode")
        request_id = metadata.get("RequestId")

        error_cls = NotFoundError if code in NOT_FOUND_CODES else StoreError
        return error_cls(
            message=message,
            code=code,
            status_code=status_code,
            request_id=request_id,
            details=details,
        )

    return StoreError(
        message=str(exc) or "Unknown error occurred",
        code=type(exc).__name__,
        details=details,
    )


class S3ObjectStore(ObjectStoreRepository):
    """Object store implementation backed by Amazon S3.

    All boto errors are caught and translated into StoreError
    (NotFoundError for missing objects). ConfigurationError raised
    by the adapter passes through untouched.
    """

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def require_bucket(self) -> str:
        return self._s3.bucket()

    def object_url(self, key: str) -> str:
        return self._s3.object_url(key)

    def put(self, *, key: str, body: bytes, content_type: str) -> StoredImage:
        """Upload bytes to S3 and return the stored image descriptor."""
        logger.debug(
            "Uploading object",
            extra={
                "bucket": self._s3.bucket(),
                "region": self._s3.region(),
                "key": key,
                "size": len(body),
                "content_type": content_type,
            },
        )

        try:
            self._s3.put_object(key=key, body=body, content_type=content_type)
        except (ClientError, BotoCoreError) as exc:
            error = translate_store_error(exc, operation="put", key=key)
            logger.error("S3 upload failed", extra=error.log_fields())
            raise error from exc

        url = self._s3.object_url(key)
        logger.info("S3 upload successful", extra={"key": key, "url": url})

        return StoredImage(
            key=key,
            url=url,
            content_type=content_type,
            size=len(body),
        )

    def get(self, *, key: str) -> ImageContent:
        """Download an object's bytes from S3."""
        logger.debug("Downloading object", extra={"key": key})

        try:
            response = self._s3.get_object(key=key)
            body = response["Body"].read()
        except (ClientError, BotoCoreError) as exc:
            error = translate_store_error(exc, operation="get", key=key)
            logger.error("S3 get image error", extra=error.log_fields())
            raise error from exc

        return ImageContent(
            body=body,
            content_type=response.get("ContentType") or DEFAULT_BINARY_CONTENT_TYPE,
            last_modified=response.get("LastModified"),
        )

    def delete(self, *, key: str) -> None:
        """Delete an object from S3."""
        logger.debug("Deleting object", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
        except (ClientError, BotoCoreError) as exc:
            error = translate_store_error(exc, operation="delete", key=key)
            logger.error("S3 delete error", extra=error.log_fields())
            raise error from exc

        logger.info("S3 delete successful", extra={"key": key})

    def list_by_prefix(
        self,
        *,
        prefix: str,
        max_results: int = DEFAULT_LIST_MAX_RESULTS,
    ) -> list[StoredObject]:
        """Return a single page of objects under ``prefix``."""
        try:
            response = self._s3.list_objects(prefix=prefix, max_keys=max_results)
        except (ClientError, BotoCoreError) as exc:
            error = translate_store_error(exc, operation="list")
            logger.error("S3 list images error", extra={**error.log_fields(), "prefix": prefix})
            raise error from exc

        return [
            StoredObject(
                key=item["Key"],
                size=int(item.get("Size", 0)),
                last_modified=item.get("LastModified"),
            )
            for item in response.get("Contents") or []
        ]

    def exists(self, *, key: str) -> bool:
        """Check for an object with a HEAD request; only a missing key yields False."""
        try:
            self._s3.head_object(key=key)
        except (ClientError, BotoCoreError) as exc:
            error = translate_store_error(exc, operation="head", key=key)
            if isinstance(error, NotFoundError):
                return False
            raise error from exc

        return True
