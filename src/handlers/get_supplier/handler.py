"""
Lambda handler responsible for reading a supplier or its photo.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import bootstrap
from core.models.requests import parse_supplier_id
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .models import GetSupplierResponse
from .service import GetSupplierService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle supplier view requests.

    This function:
     - Default: return the record and whether its photo exists
     - photo=true: return the photo bytes (base64, binary response)

    Args:
        event: API Gateway event payload.
        context: AWS Lambda runtime context.

    Returns:
        API Gateway-compatible response dictionary.
    """
    logger.info(
        "Received supplier view request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "query_params": event.get("queryStringParameters"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    bootstrap()

    request = parse_supplier_id(event)
    service = GetSupplierService()

    if request.photo:
        content = service.get_photo(request.supplier_id)
        return ResponseBuilder.photo(content)

    supplier = service.get_supplier(request.supplier_id)

    response = GetSupplierResponse(
        supplier=supplier,
        photo_available=service.photo_available(supplier),
    )

    return ResponseBuilder.ok(response.model_dump())
