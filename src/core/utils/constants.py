"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"

# Configuration Errors
ERROR_CODE_CONFIGURATION = "CONFIGURATION_ERROR"

# Not Found Errors
ERROR_CODE_SUPPLIER_NOT_FOUND = "SUPPLIER_NOT_FOUND"

# Storage Errors
ERROR_CODE_STORE = "STORE_ERROR"
ERROR_CODE_UNKNOWN_STORE_ERROR = "UnknownError"

# Persistence Errors
ERROR_CODE_PERSISTENCE = "PERSISTENCE_ERROR"

# Error kinds carried by store errors
ERROR_KIND_CONFIGURATION = "configuration"
ERROR_KIND_STORE = "store"
ERROR_KIND_NOT_FOUND = "not_found"

# Remote codes that mean "object absent"
NOT_FOUND_CODES: Final[frozenset[str]] = frozenset({"NoSuchKey", "NotFound", "404"})


# ============================================================================
# File Upload Constraints
# ============================================================================

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB in bytes

MIME_TYPE_EXTENSION_MAP: Final[dict[str, str]] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
}

ALLOWED_MIME_TYPES: Final[frozenset[str]] = frozenset(MIME_TYPE_EXTENSION_MAP.keys())

DEFAULT_IMAGE_EXTENSION = "jpg"
DEFAULT_BINARY_CONTENT_TYPE = "application/octet-stream"


# ============================================================================
# Object Store Layout
# ============================================================================

IMAGE_COLLECTION = "suppliers"
RANDOM_KEY_BYTES = 8
DEFAULT_LIST_MAX_RESULTS = 100
S3_URL_TEMPLATE = "https://{bucket}.s3.{region}.amazonaws.com/{key}"


# ============================================================================
# Supplier Form Constraints
# ============================================================================

PHONE_PATTERN = r"^\+?\d{0,3}\d{10}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
FIELD_MAX_LENGTH = 255


# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type,Authorization,X-Api-Key"
DEFAULT_CONTENT_TYPE = "application/json"


# ============================================================================
# Configuration Keys
# ============================================================================

ENV_APP_DB_HOST = "APP_DB_HOST"
ENV_APP_DB_USER = "APP_DB_USER"
ENV_APP_DB_PASSWORD = "APP_DB_PASSWORD"
ENV_APP_DB_NAME = "APP_DB_NAME"
ENV_APP_DB_URL = "APP_DB_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_S3_BUCKET = "S3_BUCKET"
ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_APP_SECRET_NAME = "APP_SECRET_NAME"

DEFAULT_AWS_REGION = "us-east-1"
DEFAULT_SECRET_NAME = "Mydbsecret"


# ============================================================================
# Helper Functions
# ============================================================================


def get_max_file_size_mb() -> int:
    """Get maximum file size in megabytes."""
    return MAX_FILE_SIZE // (1024 * 1024)
