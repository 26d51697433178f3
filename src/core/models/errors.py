"""Custom exception classes for the supplier service."""

from typing import Any

from core.utils.constants import (
    ERROR_CODE_CONFIGURATION,
    ERROR_CODE_PERSISTENCE,
    ERROR_CODE_STORE,
    ERROR_CODE_SUPPLIER_NOT_FOUND,
    ERROR_CODE_VALIDATION_FAILED,
    ERROR_KIND_CONFIGURATION,
    ERROR_KIND_NOT_FOUND,
    ERROR_KIND_STORE,
)


class SupplierServiceError(Exception):
    """
    Base exception for all supplier service errors.

    All custom errors must inherit from this class.
    Callers must explicitly provide a message and error code.
    Optional contextual information can be supplied via `details`.
    """

    message: str
    error_code: str
    details: dict[str, Any]

    def __init__(
        self,
        *,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.details = details or {}

        super().__init__(self.message)


class ValidationError(SupplierServiceError):
    """Raised when request validation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class RecordNotFoundError(SupplierServiceError):
    """Raised when a supplier record does not exist."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_SUPPLIER_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class PersistenceError(SupplierServiceError):
    """Raised when a relational store operation fails."""

    def __init__(
        self,
        *,
        message: str,
        error_code: str = ERROR_CODE_PERSISTENCE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )


class StoreError(SupplierServiceError):
    """Raised when an object store operation fails.

    Every object store failure carries the same shape:
    ``kind``, ``code``, ``message``, ``status_code`` and ``request_id``.
    ``code`` is the remote error code (e.g. ``AccessDenied``) while
    ``error_code`` stays the service-level code used in API responses.
    """

    kind: str = ERROR_KIND_STORE

    def __init__(
        self,
        *,
        message: str,
        code: str,
        status_code: int | None = None,
        request_id: str | None = None,
        error_code: str = ERROR_CODE_STORE,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.code = code
        self.status_code = status_code
        self.request_id = request_id

        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the error in its serializable tagged form."""
        return {
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
            "status_code": self.status_code,
            "request_id": self.request_id,
        }

    def log_fields(self) -> dict[str, Any]:
        """Same fields, prefixed so they never clash with log record attributes."""
        return {f"error_{name}": value for name, value in self.to_dict().items()}


class NotFoundError(StoreError):
    """Raised when a requested object is absent from the store."""

    kind = ERROR_KIND_NOT_FOUND


class ConfigurationError(StoreError):
    """Raised when a required runtime setting is missing.

    Shares the store error shape so callers handle a single family,
    but is never produced by a remote call.
    """

    kind = ERROR_KIND_CONFIGURATION

    def __init__(
        self,
        *,
        message: str,
        setting: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.setting = setting

        super().__init__(
            message=message,
            code=ERROR_CODE_CONFIGURATION,
            error_code=ERROR_CODE_CONFIGURATION,
            details={"setting": setting, **(details or {})},
        )
