"""Supplier record models."""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class SupplierFields(BaseModel):
    """Writable columns of a supplier record."""

    name: StrictStr = Field(..., description="Display name")
    address: StrictStr = Field(..., description="Street address")
    city: StrictStr = Field(..., description="City")
    state: StrictStr = Field(..., description="State or region")
    email: StrictStr | None = Field(None, description="Contact e-mail")
    phone: StrictStr = Field(..., description="Contact phone number")
    photo_url: StrictStr | None = Field(None, description="Canonical URL of the active photo")


class Supplier(SupplierFields):
    """Supplier record as stored in the relational table."""

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="Primary key")
