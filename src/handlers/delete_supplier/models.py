from typing import Any

from pydantic import BaseModel, Field


class DeleteSupplierResponse(BaseModel):
    """Response model for a successful delete."""

    supplier_id: int = Field(..., description="Deleted supplier id")
    photo_cleanup: dict[str, Any] = Field(..., description="Outcome of deleting the photo")
    deleted_at: str = Field(..., description="Deletion timestamp")
    message: str = Field(..., description="Success message")
