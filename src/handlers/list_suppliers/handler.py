"""
Lambda handler responsible for listing every supplier.
"""

from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import bootstrap
from core.infrastructure.db.sql_suppliers import SqlSupplierRepository
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

from .models import ListSuppliersResponse

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """Return all supplier records ordered by id."""
    logger.info(
        "Received supplier list request",
        extra={
            "http_method": event.get("httpMethod"),
            "path": event.get("path"),
            "request_id": getattr(context, "aws_request_id", None),
        },
    )

    bootstrap()

    suppliers = SqlSupplierRepository().list_all()

    response = ListSuppliersResponse(
        students=suppliers,
        total_count=len(suppliers),
    )

    return ResponseBuilder.ok(response.model_dump())
