"""Business logic for supplier updates.

When a new photo is submitted the stored photo is replaced through the
image lifecycle (old object deleted first, best effort), then the record is
written. Without a new photo the submitted or stored URL is kept.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.db.sql_suppliers import SqlSupplierRepository
from core.models.errors import RecordNotFoundError
from core.models.image import CleanupOutcome
from core.models.requests import PhotoUpload, SupplierForm
from core.models.supplier import Supplier
from core.repositories.supplier_repository import SupplierRepository
from core.services.image_lifecycle import ImageLifecycleManager

logger = Logger(UTC=True)


class UpdateSupplierService:
    """Application service responsible for updating suppliers."""

    def __init__(
        self,
        images: ImageLifecycleManager | None = None,
        suppliers: SupplierRepository | None = None,
    ) -> None:
        self.images = images or ImageLifecycleManager()
        self.suppliers = suppliers or SqlSupplierRepository()

    def update_supplier(
        self,
        *,
        supplier_id: int,
        form: SupplierForm,
        photo: PhotoUpload | None,
    ) -> tuple[Supplier, CleanupOutcome | None]:
        """Replace the photo (if a new one was sent), then update the record.

        Returns:
            The updated record and the outcome of deleting the old photo
            (None when no photo was replaced)

        Raises:
            RecordNotFoundError: If the supplier does not exist
            ConfigurationError: If the bucket is not configured
            StoreError: If the new photo upload fails (the record is unchanged)
            PersistenceError: If the update fails
        """
        existing = self.suppliers.get(supplier_id=supplier_id)
        if existing is None:
            raise RecordNotFoundError(
                message=f"Student with id {supplier_id} Not found.",
                details={"supplier_id": supplier_id},
            )

        photo_url = form.photo_url or existing.photo_url
        cleanup: CleanupOutcome | None = None

        if photo is not None:
            result = self.images.update_image(
                existing.photo_url,
                photo.data,
                photo.content_type,
                supplier_id,
            )
            if result is not None:
                photo_url = result.image.url
                cleanup = result.cleanup

                if not cleanup.succeeded:
                    logger.warning(
                        "Old photo could not be deleted",
                        extra={"supplier_id": supplier_id, **cleanup.summary()},
                    )

        updated = self.suppliers.update(
            supplier_id=supplier_id,
            fields=form.to_fields(photo_url=photo_url),
        )
        if updated is None:
            raise RecordNotFoundError(
                message=f"Student with id {supplier_id} Not found.",
                details={"supplier_id": supplier_id},
            )

        return updated, cleanup
