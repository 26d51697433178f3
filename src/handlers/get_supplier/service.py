"""Business logic for reading one supplier and its photo."""

from aws_lambda_powertools import Logger

from core.infrastructure.db.sql_suppliers import SqlSupplierRepository
from core.models.errors import NotFoundError, RecordNotFoundError, StoreError
from core.models.image import ImageContent
from core.models.supplier import Supplier
from core.repositories.supplier_repository import SupplierRepository
from core.services.image_lifecycle import ImageLifecycleManager
from core.utils.keys import extract_key

logger = Logger(UTC=True)


class GetSupplierService:
    """Application service responsible for supplier reads."""

    def __init__(
        self,
        images: ImageLifecycleManager | None = None,
        suppliers: SupplierRepository | None = None,
    ) -> None:
        self.images = images or ImageLifecycleManager()
        self.suppliers = suppliers or SqlSupplierRepository()

    def get_supplier(self, supplier_id: int) -> Supplier:
        """
        Raises:
            RecordNotFoundError: If the supplier does not exist
        """
        supplier = self.suppliers.get(supplier_id=supplier_id)
        if supplier is None:
            raise RecordNotFoundError(
                message=f"Not found Student with id {supplier_id}.",
                details={"supplier_id": supplier_id},
            )
        return supplier

    def photo_available(self, supplier: Supplier) -> bool | None:
        """Whether the stored photo URL points at an existing object.

        Returns None when the store could not be asked.
        """
        key = extract_key(supplier.photo_url)
        if key is None:
            return False

        try:
            return self.images.image_exists(key)
        except StoreError as exc:
            logger.warning(
                "Could not check supplier photo",
                extra={"supplier_id": supplier.id, **exc.log_fields()},
            )
            return None

    def get_photo(self, supplier_id: int) -> ImageContent:
        """Fetch the bytes of a supplier's photo.

        Raises:
            RecordNotFoundError: If the supplier or its photo does not exist
            StoreError: If the download fails
        """
        supplier = self.get_supplier(supplier_id)

        key = extract_key(supplier.photo_url)
        if key is None:
            raise RecordNotFoundError(
                message=f"Student with id {supplier_id} has no photo.",
                details={"supplier_id": supplier_id},
            )

        try:
            return self.images.get_image(key)
        except NotFoundError as exc:
            raise RecordNotFoundError(
                message=f"Photo of Student with id {supplier_id} not found.",
                details={"supplier_id": supplier_id, "key": key},
            ) from exc
