"""
Lambda handler checking that the image bucket is configured and reachable.
"""

from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger, Metrics, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from core.config import bootstrap, settings
from core.infrastructure.aws.s3_object_store import S3ObjectStore
from core.models.errors import ConfigurationError, StoreError
from core.utils.constants import (
    DEFAULT_AWS_REGION,
    ENV_AWS_REGION,
    ENV_S3_BUCKET,
    IMAGE_COLLECTION,
)
from core.utils.decorators import api_gateway_handler
from core.utils.response import ResponseBuilder

logger = Logger(UTC=True)
tracer = Tracer()
metrics = Metrics()


@api_gateway_handler
@tracer.capture_lambda_handler
@metrics.log_metrics()
def handler(event: dict[str, Any], context: LambdaContext) -> dict[str, Any]:
    """List at most one object from the bucket and report the result."""
    bootstrap()

    bucket = settings.get(ENV_S3_BUCKET)
    region = settings.get(ENV_AWS_REGION, DEFAULT_AWS_REGION)

    logger.info("Testing S3 connection", extra={"bucket": bucket, "region": region})

    try:
        objects = S3ObjectStore().list_by_prefix(prefix=f"{IMAGE_COLLECTION}/", max_results=1)
    except ConfigurationError as exc:
        return ResponseBuilder.error(
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            error=exc.error_code,
            message=f"{ENV_S3_BUCKET} is not set",
        )
    except StoreError as exc:
        logger.error("S3 test failed", extra=exc.log_fields())
        return ResponseBuilder.error(
            status=HTTPStatus.SERVICE_UNAVAILABLE,
            error=exc.error_code,
            message="S3 connection failed",
            details=exc.to_dict(),
        )

    return ResponseBuilder.ok(
        {
            "success": True,
            "message": "S3 connection successful",
            "bucket": bucket,
            "region": region,
            "objects_count": len(objects),
        }
    )
