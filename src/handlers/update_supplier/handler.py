"""
Lambda handler responsible for updating a supplier from a form submission.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import bootstrap
from core.models.requests import parse_supplier_id, parse_supplier_submission
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .models import UpdateSupplierResponse
from .service import UpdateSupplierService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle supplier update requests.

    This function:
    - Validates the supplier id path parameter and the form body
    - Replaces the stored photo when a new one is submitted
    - Writes the record and reports the old-photo cleanup outcome

    Args:
        event: API Gateway Lambda proxy event
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response
    """
    logger.info(
        "Received supplier update request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    bootstrap()

    request = parse_supplier_id(event)
    form, photo = parse_supplier_submission(event)

    supplier, cleanup = UpdateSupplierService().update_supplier(
        supplier_id=request.supplier_id,
        form=form,
        photo=photo,
    )

    metrics.add_metric(name="SupplierUpdated", unit=MetricUnit.Count, value=1)
    if cleanup is not None and not cleanup.succeeded:
        metrics.add_metric(name="ImageCleanupFailed", unit=MetricUnit.Count, value=1)

    response = UpdateSupplierResponse(
        supplier=supplier,
        photo_cleanup=cleanup.summary() if cleanup else None,
        message="Student updated successfully",
    )

    return ResponseBuilder.ok(response.model_dump())
