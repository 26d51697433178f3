"""
Lambda handler responsible for deleting a supplier and its photo.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import bootstrap
from core.models.requests import parse_supplier_id
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .models import DeleteSupplierResponse
from .service import DeleteSupplierService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle supplier deletion requests.

    This function:
    - Extracts the supplier id from API Gateway path parameters
    - Delegates deletion to the service layer
    - Reports photo cleanup failures without failing the request

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received supplier delete request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    bootstrap()

    request = parse_supplier_id(event)

    supplier, cleanup, deleted_at = DeleteSupplierService().delete_supplier(request.supplier_id)

    metrics.add_metric(name="SupplierDeleted", unit=MetricUnit.Count, value=1)
    if not cleanup.succeeded:
        metrics.add_metric(name="ImageCleanupFailed", unit=MetricUnit.Count, value=1)

    response = DeleteSupplierResponse(
        supplier_id=supplier.id,
        photo_cleanup=cleanup.summary(),
        deleted_at=deleted_at,
        message="Student deleted successfully",
    )

    return ResponseBuilder.ok(response.model_dump())
