"""Business logic for supplier creation.

The photo, when present, is uploaded before the record is inserted so that
a failed upload never leaves a record pointing at nothing. The record does
not exist yet, so the photo gets a random key.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.db.sql_suppliers import SqlSupplierRepository
from core.models.requests import PhotoUpload, SupplierForm
from core.models.supplier import Supplier
from core.repositories.supplier_repository import SupplierRepository
from core.services.image_lifecycle import ImageLifecycleManager

logger = Logger(UTC=True)


class CreateSupplierService:
    """Application service responsible for creating suppliers."""

    def __init__(
        self,
        images: ImageLifecycleManager | None = None,
        suppliers: SupplierRepository | None = None,
    ) -> None:
        self.images = images or ImageLifecycleManager()
        self.suppliers = suppliers or SqlSupplierRepository()

    def create_supplier(self, *, form: SupplierForm, photo: PhotoUpload | None) -> Supplier:
        """Upload the photo (if any), then insert the record.

        Raises:
            ConfigurationError: If the bucket is not configured
            StoreError: If the photo upload fails (no record is written)
            PersistenceError: If the insert fails
        """
        photo_url = form.photo_url

        if photo is not None:
            image = self.images.create_image(photo.data, photo.content_type)
            if image is not None:
                photo_url = image.url
                logger.info("Uploaded supplier photo", extra={"key": image.key})

        return self.suppliers.create(fields=form.to_fields(photo_url=photo_url))
