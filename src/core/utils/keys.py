"""Object key derivation for supplier images.

Keys live under the ``suppliers/`` collection:

    suppliers/<owner_id>-<millis>.<ext>        owner known
    suppliers/<millis>-<16 hex chars>.<ext>    owner not known yet

The canonical object URL built by ``build_object_url`` is what gets stored
in a supplier's ``photo_url``; ``extract_key`` turns it back into the key.
"""

import re
import secrets
from urllib.parse import quote, unquote, urlparse

from core.utils.constants import (
    DEFAULT_IMAGE_EXTENSION,
    IMAGE_COLLECTION,
    RANDOM_KEY_BYTES,
    S3_URL_TEMPLATE,
)
from core.utils.time import current_time_millis

_FALLBACK_KEY_PATTERN = re.compile(rf"/{IMAGE_COLLECTION}/(.+)$")


def owner_prefix(owner_id: str | int) -> str:
    """Key prefix shared by every image of one owner."""
    return f"{IMAGE_COLLECTION}/{owner_id}-"


def derive_key(owner_id: str | int | None = None, extension: str | None = None) -> str:
    """Return a new object key, unique within the bucket.

    Args:
        owner_id: Identifier of the owning supplier, when already known
        extension: File extension without the dot (defaults to ``jpg``)

    Returns:
        Object key under the ``suppliers/`` collection
    """
    ext = (extension or DEFAULT_IMAGE_EXTENSION).lstrip(".")
    millis = current_time_millis()

    if owner_id is not None and str(owner_id) != "":
        return f"{owner_prefix(owner_id)}{millis}.{ext}"

    return f"{IMAGE_COLLECTION}/{millis}-{secrets.token_hex(RANDOM_KEY_BYTES)}.{ext}"


def build_object_url(bucket: str, region: str, key: str) -> str:
    """Return the canonical virtual-hosted URL for an object."""
    return S3_URL_TEMPLATE.format(bucket=bucket, region=region, key=quote(key, safe="/"))


def extract_key(url: str | None) -> str | None:
    """Resolve a stored URL back to its object key.

    Absolute URLs yield their path without the leading slash. Anything else
    is matched against ``/suppliers/<rest>`` and yields ``<rest>``.
    Returns None when neither works.
    """
    if not url:
        return None

    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        key = unquote(parsed.path).lstrip("/")
        return key or None

    match = _FALLBACK_KEY_PATTERN.search(url)
    return match.group(1) if match else None
