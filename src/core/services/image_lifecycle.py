"""Image lifecycle workflows for supplier photos.

This module composes the object store primitives into the create, replace,
remove and list workflows used by the supplier handlers.

Ordering and failure policy:
- create: derive key, put. Errors propagate.
- update: delete the old object first (best effort), then create the new one.
  A failed delete is logged and reported in the result; a failed put
  propagates, so a failed put after a successful delete leaves the owner
  without an image.
- remove: unresolvable URLs are a logged no-op; delete errors propagate.
"""

from typing import cast

from aws_lambda_powertools import Logger

from core.infrastructure.aws.s3_object_store import S3ObjectStore
from core.models.errors import ConfigurationError, StoreError
from core.models.image import (
    CleanupOutcome,
    ImageContent,
    ImageUpdateResult,
    StoredImage,
)
from core.repositories.storage_repository import ObjectStoreRepository
from core.utils.constants import DEFAULT_LIST_MAX_RESULTS
from core.utils.keys import derive_key, extract_key, owner_prefix
from core.utils.mime import extension_for

logger = Logger(UTC=True)


class ImageLifecycleManager:
    """Owns the active image of each supplier in the object store."""

    def __init__(self, store: ObjectStoreRepository | None = None) -> None:
        self.store: ObjectStoreRepository = store or S3ObjectStore()

    def create_image(
        self,
        body: bytes | None,
        content_type: str,
        owner_id: str | int | None = None,
    ) -> StoredImage | None:
        """Upload a new image.

        Args:
            body: Image bytes; empty or None is a no-op
            content_type: MIME type, also used to choose the key extension
            owner_id: Supplier id when already known

        Returns:
            The stored image, or None when there was nothing to upload

        Raises:
            ConfigurationError: If the bucket is not configured
            StoreError: If the upload fails
        """
        if not body:
            return None

        key = derive_key(owner_id, extension_for(content_type))

        logger.debug(
            "Creating image",
            extra={"key": key, "owner_id": owner_id, "size": len(body)},
        )
        return self.store.put(key=key, body=body, content_type=content_type)

    def update_image(
        self,
        old_url: str | None,
        body: bytes | None,
        content_type: str,
        owner_id: str | int,
    ) -> ImageUpdateResult | None:
        """Replace the image referenced by ``old_url`` with ``body``.

        The old object is deleted before the new one is uploaded. A failed
        delete does not stop the upload and is returned in ``cleanup``.

        Returns:
            The new image with the cleanup outcome, or None when ``body``
            is empty (the old object is then left untouched)

        Raises:
            ConfigurationError: If the bucket is not configured, even when
                ``body`` is empty
            StoreError: If the upload of the new image fails
        """
        self.store.require_bucket()

        if not body:
            return None

        cleanup = self._delete_quietly(old_url)
        image = cast(StoredImage, self.create_image(body, content_type, owner_id))

        return ImageUpdateResult(image=image, cleanup=cleanup)

    def remove_image(self, url: str | None) -> CleanupOutcome:
        """Delete the object referenced by ``url``.

        URLs that cannot be resolved to a key are skipped without any
        remote call.

        Raises:
            ConfigurationError: If the bucket is not configured
            StoreError: If the delete fails
        """
        self.store.require_bucket()

        key = extract_key(url)
        if key is None:
            logger.info("No object key in stored URL, nothing to delete", extra={"url": url})
            return CleanupOutcome()

        self.store.delete(key=key)
        logger.info("Deleted image", extra={"key": key})

        return CleanupOutcome(key=key, attempted=True)

    def list_images(
        self,
        owner_id: str | int,
        max_results: int = DEFAULT_LIST_MAX_RESULTS,
    ) -> list[StoredImage]:
        """List every stored image of one owner, including stale ones."""
        objects = self.store.list_by_prefix(
            prefix=owner_prefix(owner_id),
            max_results=max_results,
        )

        return [
            StoredImage(
                key=item.key,
                url=self.store.object_url(item.key),
                size=item.size,
                last_modified=item.last_modified,
            )
            for item in objects
        ]

    def get_image(self, key: str) -> ImageContent:
        """Read one stored image with its content type."""
        return self.store.get(key=key)

    def image_exists(self, key: str) -> bool:
        """Whether an object is stored under ``key``."""
        return self.store.exists(key=key)

    def _delete_quietly(self, url: str | None) -> CleanupOutcome:
        key = extract_key(url)
        if key is None:
            return CleanupOutcome()

        try:
            self.store.delete(key=key)
        except ConfigurationError:
            raise
        except StoreError as exc:
            logger.warning(
                "Failed to delete old image, continuing with update",
                extra={"key": key, **exc.log_fields()},
            )
            return CleanupOutcome(key=key, attempted=True, error=exc)

        logger.info("Deleted old image", extra={"key": key})
        return CleanupOutcome(key=key, attempted=True)
