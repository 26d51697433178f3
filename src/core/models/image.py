"""Object store image models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

from core.models.errors import StoreError


class StoredImage(BaseModel):
    """One image object held in the bucket."""

    key: StrictStr = Field(..., description="Object key within the bucket")
    url: StrictStr = Field(..., description="Canonical object URL stored in photo_url")
    content_type: StrictStr | None = Field(None, description="MIME type of the object")
    size: StrictInt | None = Field(None, description="Object size in bytes")
    last_modified: datetime | None = Field(None, description="Last modification time")


class StoredObject(BaseModel):
    """Listing entry returned by a prefix listing."""

    key: StrictStr
    size: StrictInt
    last_modified: datetime | None = None


class ImageContent(BaseModel):
    """Object body together with its stored content type."""

    body: bytes
    content_type: StrictStr
    last_modified: datetime | None = None


class CleanupOutcome(BaseModel):
    """Result of a best-effort delete step.

    A cleanup with nothing to delete is reported as ``attempted=False``
    and still counts as succeeded.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    key: StrictStr | None = None
    attempted: bool = False
    error: StoreError | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def summary(self) -> dict[str, object]:
        """JSON-friendly view for API responses and logs."""
        return {
            "key": self.key,
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "error": self.error.to_dict() if self.error else None,
        }


class ImageUpdateResult(BaseModel):
    """New image of a replace, plus the outcome of deleting the old one."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    image: StoredImage
    cleanup: CleanupOutcome
