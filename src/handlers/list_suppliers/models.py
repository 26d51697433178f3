from pydantic import BaseModel, Field, StrictInt

from core.models.supplier import Supplier


class ListSuppliersResponse(BaseModel):
    """Response for listing suppliers."""

    students: list[Supplier] = Field(..., description="Every supplier record")
    total_count: StrictInt = Field(..., description="Number of records returned")
