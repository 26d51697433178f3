"""Pydantic models for supplier form submissions and path parameters."""

import html
import re
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationInfo,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from core.models.errors import ValidationError
from core.models.supplier import SupplierFields
from core.utils.constants import (
    ALLOWED_MIME_TYPES,
    EMAIL_PATTERN,
    FIELD_MAX_LENGTH,
    MAX_FILE_SIZE,
    PHONE_PATTERN,
    get_max_file_size_mb,
)
from core.utils.forms import UploadedFile, parse_form
from core.utils.validators import sanitize_validation_errors, validate_request

_PHONE_SEPARATORS = re.compile(r"[\s\-.()]")


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class SupplierIdRequest(BaseModel):
    """Validation model for routes addressing one supplier."""

    supplier_id: int = Field(..., gt=0, description="Supplier primary key")
    photo: StrictBool = Field(
        default=False,
        description="Return the photo bytes instead of the record",
    )


class SupplierForm(BaseModel):
    """Validation model for the add/update supplier form.

    Text fields are trimmed and HTML-escaped before they reach storage.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    # Length is checked after escaping, against the stored column width.
    name: str = Field(...)
    address: str = Field(...)
    city: str = Field(...)
    state: str = Field(...)
    phone: str = Field(...)
    email: str | None = Field(None, max_length=FIELD_MAX_LENGTH)
    photo_url: str | None = Field(None, description="Previously stored photo URL")

    @field_validator("name", "address", "city", "state")
    @classmethod
    def validate_required_text(cls, value: str, info: ValidationInfo) -> str:
        if not value:
            raise ValueError(f"The student {info.field_name} is required")

        escaped = html.escape(value)
        if len(escaped) > FIELD_MAX_LENGTH:
            raise ValueError(
                f"The student {info.field_name} must be at most {FIELD_MAX_LENGTH} characters once HTML-escaped"
            )
        return escaped

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, value: str) -> str:
        digits = _PHONE_SEPARATORS.sub("", value)
        if not re.match(PHONE_PATTERN, digits):
            raise ValueError(
                "Phone number should be 10 digit number plus optional country code"
            )
        return digits

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> Any:
        value = _blank_to_none(value)
        if value is not None and not re.match(EMAIL_PATTERN, str(value).strip()):
            raise ValueError("Invalid email address")
        return value

    @field_validator("photo_url", mode="before")
    @classmethod
    def normalize_photo_url(cls, value: Any) -> Any:
        return _blank_to_none(value)

    def to_fields(self, *, photo_url: str | None) -> SupplierFields:
        """Record columns for this form with the given photo URL."""
        return SupplierFields(
            name=self.name,
            address=self.address,
            city=self.city,
            state=self.state,
            email=self.email,
            phone=self.phone,
            photo_url=photo_url,
        )


class PhotoUpload(BaseModel):
    """Validation model for the ``photo`` file part."""

    filename: str | None = None
    content_type: str
    data: bytes

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, value: str) -> str:
        mime = value.split(";", 1)[0].strip().lower()
        if mime not in ALLOWED_MIME_TYPES:
            raise ValueError("Only image files are allowed")
        return mime

    @field_validator("data")
    @classmethod
    def validate_data(cls, value: bytes) -> bytes:
        if not value:
            raise ValueError("File must not be empty")

        if len(value) > MAX_FILE_SIZE:
            raise ValueError(f"File size exceeds {get_max_file_size_mb()}MB limit")

        return value

    @classmethod
    def from_upload(cls, upload: UploadedFile) -> "PhotoUpload":
        return cls(
            filename=upload.filename,
            content_type=upload.content_type,
            data=upload.data,
        )


def parse_supplier_submission(event: dict[str, Any]) -> tuple[SupplierForm, PhotoUpload | None]:
    """Validate the form fields and optional ``photo`` part of an event.

    Raises:
        ValidationError: If any field or the photo is invalid
        ValueError: If the body cannot be parsed
    """
    form_data = parse_form(event)
    errors: list[dict[str, Any]] = []

    form: SupplierForm | None = None
    photo: PhotoUpload | None = None

    try:
        form = SupplierForm.model_validate(form_data.fields)
    except PydanticValidationError as exc:
        errors.extend(exc.errors())

    upload = form_data.files.get("photo")
    if upload is not None:
        try:
            photo = PhotoUpload.from_upload(upload)
        except PydanticValidationError as exc:
            errors.extend({**err, "loc": ("photo", *err.get("loc", ()))} for err in exc.errors())

    if errors or form is None:
        raise ValidationError(
            message="Invalid form submission",
            details={"errors": sanitize_validation_errors(errors)},
        )

    return form, photo


def parse_supplier_id(event: dict[str, Any]) -> SupplierIdRequest:
    """Validate the ``id`` path parameter (and ``photo`` query flag).

    Raises:
        ValidationError: If the id is missing or not a positive integer
    """
    path_params = event.get("pathParameters") or {}
    query_params = event.get("queryStringParameters") or {}

    params = {
        "supplier_id": path_params.get("id"),
        "photo": str(query_params.get("photo", "false")).lower() == "true",
    }

    try:
        return validate_request(SupplierIdRequest, params)
    except PydanticValidationError as exc:
        raise ValidationError(
            message="Invalid request params",
            details={"errors": sanitize_validation_errors(list(exc.errors()))},
        ) from exc
