"""
API Gateway proxy responses for the supplier service.

JSON bodies carry CORS headers; service errors are rendered from the error
family in ``core.models.errors`` so every route reports them the same way.
"""

from __future__ import annotations

import base64
import json
from datetime import timezone
from email.utils import format_datetime
from http import HTTPStatus
from typing import Any

from core.models.errors import (
    ConfigurationError,
    PersistenceError,
    RecordNotFoundError,
    StoreError,
    SupplierServiceError,
    ValidationError,
)
from core.models.image import ImageContent
from core.utils.constants import (
    CORS_HEADERS,
    CORS_METHODS,
    CORS_ORIGIN,
    DEFAULT_CONTENT_TYPE,
)
from core.utils.time import utc_now_iso

JsonDict = dict[str, Any]

STORE_UNAVAILABLE_MESSAGE = "Image storage is unavailable. Please try again later."

# First match wins: subclasses before their bases.
ERROR_STATUS: tuple[tuple[type[SupplierServiceError], HTTPStatus], ...] = (
    (ValidationError, HTTPStatus.UNPROCESSABLE_ENTITY),
    (RecordNotFoundError, HTTPStatus.NOT_FOUND),
    (ConfigurationError, HTTPStatus.INTERNAL_SERVER_ERROR),
    (StoreError, HTTPStatus.BAD_GATEWAY),
    (PersistenceError, HTTPStatus.INTERNAL_SERVER_ERROR),
)


def status_for(exc: SupplierServiceError) -> HTTPStatus:
    for error_cls, status in ERROR_STATUS:
        if isinstance(exc, error_cls):
            return status
    return HTTPStatus.INTERNAL_SERVER_ERROR


class ResponseBuilder:
    """Factory for API Gateway-compatible HTTP responses."""

    CORS: dict[str, str] = {
        "Access-Control-Allow-Origin": CORS_ORIGIN,
        "Access-Control-Allow-Headers": CORS_HEADERS,
        "Access-Control-Allow-Methods": CORS_METHODS,
    }

    @classmethod
    def headers(
        cls,
        content_type: str = DEFAULT_CONTENT_TYPE,
        cors_origin: str | None = None,
    ) -> dict[str, str]:
        headers = {"Content-Type": content_type, **cls.CORS}
        if cors_origin:
            headers["Access-Control-Allow-Origin"] = cors_origin
        return headers

    @classmethod
    def json(
        cls,
        status: HTTPStatus,
        body: JsonDict | None = None,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = dict(body or {})
        if request_id:
            payload["request_id"] = request_id

        return {
            "statusCode": status.value,
            "headers": cls.headers(cors_origin=cors_origin),
            "body": json.dumps(payload, default=str),
        }

    @classmethod
    def ok(cls, body: JsonDict, **kwargs: Any) -> JsonDict:
        return cls.json(HTTPStatus.OK, body, **kwargs)

    @classmethod
    def created(cls, body: JsonDict, **kwargs: Any) -> JsonDict:
        return cls.json(HTTPStatus.CREATED, body, **kwargs)

    @classmethod
    def preflight(cls, *, cors_origin: str | None = None) -> JsonDict:
        return {
            "statusCode": HTTPStatus.NO_CONTENT.value,
            "headers": cls.headers(cors_origin=cors_origin),
            "body": "",
        }

    @classmethod
    def error(
        cls,
        *,
        status: HTTPStatus,
        message: str,
        error: str | None = None,
        details: Any = None,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        payload: JsonDict = {
            "error": error or status.name,
            "message": message,
            "timestamp": utc_now_iso(),
        }
        if details:
            payload["details"] = details

        return cls.json(status, payload, request_id=request_id, cors_origin=cors_origin)

    @classmethod
    def from_error(
        cls,
        exc: SupplierServiceError,
        *,
        request_id: str | None = None,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Render a service error with its mapped status.

        Remote store failures hide the store's message behind a generic one
        and expose the tagged error shape as details.
        """
        message = exc.message
        details: Any = exc.details

        if isinstance(exc, StoreError) and not isinstance(exc, ConfigurationError):
            message = STORE_UNAVAILABLE_MESSAGE
            details = exc.to_dict()

        return cls.error(
            status=status_for(exc),
            message=message,
            error=exc.error_code,
            details=details,
            request_id=request_id,
            cors_origin=cors_origin,
        )

    @classmethod
    def photo(
        cls,
        content: ImageContent,
        *,
        cors_origin: str | None = None,
    ) -> JsonDict:
        """Binary response carrying an image, base64 encoded for API Gateway."""
        headers = cls.headers(content.content_type, cors_origin)
        headers["Content-Length"] = str(len(content.body))
        if content.last_modified is not None:
            modified = content.last_modified.astimezone(timezone.utc)
            headers["Last-Modified"] = format_datetime(modified, usegmt=True)

        return {
            "statusCode": HTTPStatus.OK.value,
            "headers": headers,
            "body": base64.b64encode(content.body).decode("utf-8"),
            "isBase64Encoded": True,
        }
