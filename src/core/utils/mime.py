from collections.abc import Mapping

from core.utils.constants import DEFAULT_IMAGE_EXTENSION, MIME_TYPE_EXTENSION_MAP

MAGIC_BYTES: Mapping[bytes, str] = {
    b"\xff\xd8\xff": "image/jpeg",
    b"\x89PNG\r\n\x1a\n": "image/png",
    b"GIF87a": "image/gif",
    b"GIF89a": "image/gif",
    b"RIFF": "image/webp",
}


def detect_mime_type(file_data: bytes) -> str:
    for signature, mime in MAGIC_BYTES.items():
        if file_data.startswith(signature):
            return mime

    raise ValueError("Unsupported or unknown file type")


def extension_for(content_type: str | None) -> str:
    """Map a MIME type to a key extension, falling back to ``jpg``."""
    if not content_type:
        return DEFAULT_IMAGE_EXTENSION

    mime = content_type.split(";", 1)[0].strip().lower()
    return MIME_TYPE_EXTENSION_MAP.get(mime, DEFAULT_IMAGE_EXTENSION)
