"""
Exception-to-response boundary for the supplier Lambda handlers.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from http import HTTPStatus
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import (
    RecordNotFoundError,
    StoreError,
    SupplierServiceError,
    ValidationError,
)
from core.utils.response import ResponseBuilder

logger = Logger(service="api-gateway-handler", UTC=True)

JsonDict = dict[str, Any]

# Messages starting with these are already meant for the client.
CLIENT_MESSAGE_PREFIXES = (
    "Invalid",
    "Missing",
    "Required",
    "Must",
    "Cannot",
    "Unable to",
    "Image",
    "File",
    "Student",
)


def client_message(exc: Exception) -> str:
    """Message returned for a 400 caused by a plain Python exception."""
    text = str(exc)

    if text.startswith(CLIENT_MESSAGE_PREFIXES):
        return text

    if isinstance(exc, ValueError):
        return "The provided data is invalid. Please check your input and try again."

    if isinstance(exc, (KeyError, AttributeError)):
        return "A required field is missing. Please ensure all required fields are provided."

    return "The data format is incorrect. Please check the request format."


def _log_service_error(exc: SupplierServiceError, *, handler_name: str, request_id: str | None) -> None:
    extra: dict[str, Any] = {
        "handler": handler_name,
        "request_id": request_id,
        "error_type": type(exc).__name__,
        "error_detail": exc.message,
        "error_code": exc.error_code,
    }
    if isinstance(exc, StoreError):
        extra.update(exc.log_fields())

    # Client mistakes are warnings; everything else needs a stack trace.
    if isinstance(exc, (ValidationError, RecordNotFoundError)):
        logger.warning("Request rejected", extra=extra)
    else:
        logger.exception("Request failed", extra=extra)


def api_gateway_handler(
    func: Callable[..., JsonDict],
) -> Callable[..., JsonDict]:
    """
    Decorator for API Gateway Lambda handlers.

    Provides:
    - CORS preflight (OPTIONS) answered without calling the handler
    - Service errors rendered through ``ResponseBuilder.from_error``
    - 400 for malformed input, 403 for permission errors, 500 otherwise

    Example:
        @api_gateway_handler
        def handler(event, context):
            return ResponseBuilder.ok({"status": "ok"})
    """

    @wraps(func)
    def wrapper(
        event: Any,
        context: Any,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        if event.get("httpMethod") == "OPTIONS":
            return ResponseBuilder.preflight(cors_origin=cors_origin)

        request_id = getattr(context, "aws_request_id", None)

        try:
            return func(event, context)

        except SupplierServiceError as exc:
            _log_service_error(exc, handler_name=func.__name__, request_id=request_id)
            return ResponseBuilder.from_error(exc, request_id=request_id, cors_origin=cors_origin)

        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            logger.warning(
                "Bad request in handler",
                extra={"handler": func.__name__, "request_id": request_id, "error_detail": str(exc)},
            )
            return ResponseBuilder.error(
                status=HTTPStatus.BAD_REQUEST,
                message=client_message(exc),
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except PermissionError as exc:
            logger.warning(
                "Permission denied in handler",
                extra={"handler": func.__name__, "request_id": request_id, "error_detail": str(exc)},
            )
            return ResponseBuilder.error(
                status=HTTPStatus.FORBIDDEN,
                message="You don't have permission to perform this action.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

        except Exception:
            logger.exception(
                "Unexpected error in handler",
                extra={"handler": func.__name__, "request_id": request_id},
            )
            return ResponseBuilder.error(
                status=HTTPStatus.INTERNAL_SERVER_ERROR,
                message="We're experiencing technical difficulties. Please try again in a few moments.",
                request_id=request_id,
                cors_origin=cors_origin,
            )

    return wrapper


__all__ = ["api_gateway_handler", "client_message"]
