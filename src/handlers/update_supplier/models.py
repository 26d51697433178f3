"""Response models for supplier updates."""

from typing import Any

from pydantic import BaseModel, Field

from core.models.supplier import Supplier


class UpdateSupplierResponse(BaseModel):
    """Response model for a successful update."""

    supplier: Supplier = Field(..., description="The updated record")
    photo_cleanup: dict[str, Any] | None = Field(
        None,
        description="Outcome of deleting the replaced photo, when one was replaced",
    )
    message: str = Field(..., description="Success message")
