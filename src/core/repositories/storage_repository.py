"""Abstract contract for object storage."""

from abc import ABC, abstractmethod

from core.models.image import ImageContent, StoredImage, StoredObject


class ObjectStoreRepository(ABC):
    """Contract for storing and retrieving image objects.

    Implementations could be S3, GCS, local disk, etc.
    The image lifecycle depends on this interface, not the implementation.
    """

    @abstractmethod
    def require_bucket(self) -> str:
        """Return the configured bucket name.

        Raises:
            ConfigurationError: If the bucket is not configured
        """

    @abstractmethod
    def object_url(self, key: str) -> str:
        """Return the canonical URL of ``key``.

        Raises:
            ConfigurationError: If the bucket is not configured
        """

    @abstractmethod
    def put(self, *, key: str, body: bytes, content_type: str) -> StoredImage:
        """Store bytes under ``key``.

        Args:
            key: Object key
            body: Binary image content
            content_type: MIME type (e.g., 'image/jpeg')

        Returns:
            Descriptor of the stored object

        Raises:
            ConfigurationError: If the bucket is not configured
            StoreError: If the upload fails
        """

    @abstractmethod
    def get(self, *, key: str) -> ImageContent:
        """Fetch an object.

        Raises:
            NotFoundError: If the object doesn't exist
            StoreError: If the download fails
        """

    @abstractmethod
    def delete(self, *, key: str) -> None:
        """Delete an object. Deleting an absent key must not fail.

        Raises:
            StoreError: If deletion fails
        """

    @abstractmethod
    def list_by_prefix(self, *, prefix: str, max_results: int) -> list[StoredObject]:
        """Return one page of objects whose key starts with ``prefix``.

        Raises:
            StoreError: If listing fails
        """

    @abstractmethod
    def exists(self, *, key: str) -> bool:
        """Return whether ``key`` exists.

        Raises:
            StoreError: For any failure other than "not found"
        """
