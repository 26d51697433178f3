from pydantic import BaseModel, Field

from core.models.supplier import Supplier


class GetSupplierResponse(BaseModel):
    """Response model for a supplier read."""

    supplier: Supplier
    photo_available: bool | None = Field(
        None,
        description="Whether photo_url resolves to an existing object (null if unknown)",
    )
