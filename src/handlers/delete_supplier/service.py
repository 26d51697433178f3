"""Business logic for supplier deletion.

The record is removed first; its photo is then deleted on a best-effort
basis. A photo that cannot be deleted is logged and reported, and never
fails the deletion of the record.
"""

from aws_lambda_powertools import Logger

from core.infrastructure.db.sql_suppliers import SqlSupplierRepository
from core.models.errors import RecordNotFoundError, StoreError
from core.models.image import CleanupOutcome
from core.models.supplier import Supplier
from core.repositories.supplier_repository import SupplierRepository
from core.services.image_lifecycle import ImageLifecycleManager
from core.utils.keys import extract_key
from core.utils.time import utc_now_iso

logger = Logger(UTC=True)


class DeleteSupplierService:
    """Application service responsible for deleting suppliers."""

    def __init__(
        self,
        images: ImageLifecycleManager | None = None,
        suppliers: SupplierRepository | None = None,
    ) -> None:
        self.images = images or ImageLifecycleManager()
        self.suppliers = suppliers or SqlSupplierRepository()

    def delete_supplier(self, supplier_id: int) -> tuple[Supplier, CleanupOutcome, str]:
        """Delete a supplier record and then its photo.

        Returns:
            The deleted record, the photo cleanup outcome and the deletion time

        Raises:
            RecordNotFoundError: If the supplier does not exist
            PersistenceError: If the delete fails
        """
        supplier = self.suppliers.get(supplier_id=supplier_id)
        if supplier is None or not self.suppliers.delete(supplier_id=supplier_id):
            raise RecordNotFoundError(
                message=f"Not found Student with id {supplier_id}.",
                details={"supplier_id": supplier_id},
            )

        deleted_at = utc_now_iso()
        cleanup = self._remove_photo(supplier)

        logger.info(
            "Supplier deleted",
            extra={"supplier_id": supplier_id, "photo_cleanup": cleanup.summary()},
        )
        return supplier, cleanup, deleted_at

    def _remove_photo(self, supplier: Supplier) -> CleanupOutcome:
        if not supplier.photo_url:
            return CleanupOutcome()

        try:
            return self.images.remove_image(supplier.photo_url)
        except StoreError as exc:
            logger.warning(
                "Failed to delete supplier photo, record already removed",
                extra={"supplier_id": supplier.id, **exc.log_fields()},
            )
            return CleanupOutcome(
                key=extract_key(supplier.photo_url),
                attempted=True,
                error=exc,
            )
