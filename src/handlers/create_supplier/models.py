"""Response models for supplier creation."""

from pydantic import BaseModel, Field

from core.models.supplier import Supplier


class CreateSupplierResponse(BaseModel):
    """Response model for a successful create."""

    supplier: Supplier = Field(..., description="The stored record")
    message: str = Field(..., description="Success message")
