"""
Lambda handler responsible for creating a supplier from a form submission.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import bootstrap
from core.models.requests import parse_supplier_submission
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .models import CreateSupplierResponse
from .service import CreateSupplierService

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """
    Handle supplier creation requests.

    Expected API Gateway event structure:
    {
        "headers": {"Content-Type": "multipart/form-data; boundary=..."},
        "body": "...",              # form fields plus optional "photo" part
        "isBase64Encoded": true
    }

    Args:
        event: API Gateway Lambda proxy event containing the form submission
        context: AWS Lambda execution context

    Returns:
        API Gateway-compatible HTTP response containing the created record
    """
    logger.info(
        "Received supplier create request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
            "function_name": getattr(context, "function_name", None),
        },
    )

    bootstrap()

    form, photo = parse_supplier_submission(event)

    supplier = CreateSupplierService().create_supplier(form=form, photo=photo)
    metrics.add_metric(name="SupplierCreated", unit=MetricUnit.Count, value=1)

    response = CreateSupplierResponse(
        supplier=supplier,
        message="Student created successfully",
    )

    return ResponseBuilder.created(response.model_dump())
