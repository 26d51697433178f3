"""Form body parsing for API Gateway proxy events.

Supports ``multipart/form-data`` (with file parts), and
``application/x-www-form-urlencoded`` and JSON bodies (fields only).
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from email import policy
from email.parser import BytesParser
from typing import Any
from urllib.parse import parse_qs

from core.utils.constants import DEFAULT_BINARY_CONTENT_TYPE
from core.utils.mime import detect_mime_type


@dataclass(frozen=True)
class UploadedFile:
    """A file part of a multipart submission."""

    filename: str | None
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class FormData:
    fields: dict[str, str] = field(default_factory=dict)
    files: dict[str, UploadedFile] = field(default_factory=dict)


def _header(event: dict[str, Any], name: str) -> str | None:
    headers = event.get("headers") or {}
    for key, value in headers.items():
        if key.lower() == name.lower():
            return str(value)
    return None


def _raw_body(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Invalid base64 encoded request body") from exc
    return body.encode("utf-8") if isinstance(body, str) else bytes(body)


def _file_content_type(part: Any, data: bytes) -> str:
    if part.get("Content-Type") is not None:
        return str(part.get_content_type())
    try:
        return detect_mime_type(data)
    except ValueError:
        return DEFAULT_BINARY_CONTENT_TYPE


def _parse_multipart(content_type: str, body: bytes) -> FormData:
    preamble = f"Content-Type: {content_type}\r\nMIME-Version: 1.0\r\n\r\n".encode()
    message = BytesParser(policy=policy.HTTP).parsebytes(preamble + body)

    if not message.is_multipart():
        raise ValueError("Invalid multipart form body")

    form = FormData()
    for part in message.iter_parts():
        name = part.get_param("name", header="content-disposition")
        if not name:
            continue

        data = part.get_payload(decode=True) or b""
        filename = part.get_filename()

        if filename is not None:
            # Browsers send an empty part when no file was chosen.
            if data:
                form.files[str(name)] = UploadedFile(
                    filename=filename or None,
                    content_type=_file_content_type(part, data),
                    data=data,
                )
            continue

        charset = part.get_content_charset() or "utf-8"
        form.fields[str(name)] = data.decode(charset, errors="replace")

    return form


def parse_form(event: dict[str, Any]) -> FormData:
    """Parse the body of an API Gateway event into fields and files.

    Raises:
        ValueError: If the body cannot be parsed for its content type
    """
    content_type = _header(event, "Content-Type") or ""
    body = _raw_body(event)
    mime = content_type.split(";", 1)[0].strip().lower()

    if not body:
        return FormData()

    if mime == "multipart/form-data":
        return _parse_multipart(content_type, body)

    if mime == "application/json":
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as exc:
            raise ValueError("Invalid JSON body") from exc
        if not isinstance(payload, dict):
            raise ValueError("Invalid JSON body")
        return FormData(
            fields={key: str(value) for key, value in payload.items() if value is not None}
        )

    parsed = parse_qs(body.decode("utf-8"), keep_blank_values=True)
    return FormData(fields={key: values[-1] for key, values in parsed.items()})
