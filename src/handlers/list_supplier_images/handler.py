"""
Lambda handler listing every stored image of one supplier.

Used for auditing: a supplier can accumulate old objects when deleting a
replaced photo failed.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import BaseModel, Field, StrictInt

from core.config import bootstrap
from core.models.image import StoredImage
from core.models.requests import parse_supplier_id
from core.services.image_lifecycle import ImageLifecycleManager
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


class ListSupplierImagesResponse(BaseModel):
    supplier_id: StrictInt
    images: list[StoredImage] = Field(..., description="Objects under the supplier prefix")
    count: StrictInt


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    logger.info(
        "Received supplier images list request",
        extra={
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    bootstrap()

    request = parse_supplier_id(event)
    images = ImageLifecycleManager().list_images(request.supplier_id)

    response = ListSupplierImagesResponse(
        supplier_id=request.supplier_id,
        images=images,
        count=len(images),
    )

    return ResponseBuilder.ok(response.model_dump())
