from unittest.mock import MagicMock

from core.models.image import StoredImage
from core.models.requests import PhotoUpload, SupplierForm
from core.models.supplier import Supplier
from handlers.create_supplier.service import CreateSupplierService


def make_form(fields: dict[str, str], **overrides: str) -> SupplierForm:
    return SupplierForm.model_validate({**fields, **overrides})


class TestCreateSupplierService:
    def test_photo_url_from_upload(self, supplier_form_fields, sample_image_binary) -> None:
        images = MagicMock()
        images.create_image.return_value = StoredImage(
            key="suppliers/1-abc.png", url="https://b/suppliers/1-abc.png"
        )
        suppliers = MagicMock()
        suppliers.create.side_effect = lambda fields: Supplier(id=1, **fields.model_dump())

        service = CreateSupplierService(images=images, suppliers=suppliers)
        supplier = service.create_supplier(
            form=make_form(supplier_form_fields, photo_url="https://old/x.jpg"),
            photo=PhotoUpload(filename="a.png", content_type="image/png", data=sample_image_binary),
        )

        images.create_image.assert_called_once_with(sample_image_binary, "image/png")
        assert supplier.photo_url == "https://b/suppliers/1-abc.png"

    def test_submitted_photo_url_kept_without_photo(self, supplier_form_fields) -> None:
        images = MagicMock()
        suppliers = MagicMock()
        suppliers.create.side_effect = lambda fields: Supplier(id=1, **fields.model_dump())

        supplier = CreateSupplierService(images=images, suppliers=suppliers).create_supplier(
            form=make_form(supplier_form_fields, photo_url="https://old/x.jpg"),
            photo=None,
        )

        images.create_image.assert_not_called()
        assert supplier.photo_url == "https://old/x.jpg"
