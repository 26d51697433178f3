#!/usr/bin/env python3
"""
Seed script to populate supplier records (and photos) via API endpoints.

Run:
    python seed/seed_suppliers.py \
      --api-id <API-ID> \
      --photo seed/photo.png
"""

import argparse
import mimetypes
from pathlib import Path
import sys
from typing import Any, cast

from aws_lambda_powertools import Logger
import requests

logger = Logger(service="seed")


SUPPLIERS_API_URL = "http://localhost:4566/restapis/{0}/snd/_user_request_/v1/suppliers"

SAMPLE_SUPPLIERS: list[dict[str, str]] = [
    {
        "name": "Acme Widgets",
        "address": "1 Main Street",
        "city": "Springfield",
        "state": "IL",
        "email": "sales@acme.example",
        "phone": "+15551234567",
    },
    {
        "name": "Blue Harbor Foods",
        "address": "22 Pier Road",
        "city": "Portland",
        "state": "ME",
        "email": "orders@blueharbor.example",
        "phone": "2075550100",
    },
    {
        "name": "Cedar Tools",
        "address": "300 Oak Avenue",
        "city": "Austin",
        "state": "TX",
        "email": "",
        "phone": "(512) 555-0199",
    },
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed suppliers via the Supplier API")

    parser.add_argument(
        "--api-id",
        required=True,
        help="Base API ID (e.g. LocalStack API Gateway ID)",
    )
    parser.add_argument(
        "--photo",
        type=Path,
        default=None,
        help="Image file attached to every seeded supplier (optional)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=len(SAMPLE_SUPPLIERS),
        help="Number of suppliers to seed",
    )

    return parser.parse_args()


def build_files(photo: Path | None) -> dict[str, tuple[str, bytes, str]] | None:
    if photo is None:
        return None

    if not photo.exists():
        logger.warning("Photo file not found", extra={"path": str(photo)})
        return None

    content_type = mimetypes.guess_type(photo.name)[0] or "image/jpeg"
    return {"photo": (photo.name, photo.read_bytes(), content_type)}


def seed_suppliers() -> None:
    try:
        args = parse_args()
        suppliers_url = SUPPLIERS_API_URL.format(args.api_id)
        files = build_files(args.photo)

        logger.info(
            "Starting seeding process",
            extra={"api_base_url": suppliers_url, "with_photo": files is not None},
        )

        for item in SAMPLE_SUPPLIERS[: args.limit]:
            # requests builds a multipart body when files are given
            response = requests.post(
                suppliers_url,
                data=item,
                files=files,
                timeout=30,
            )

            response_json = cast(dict[str, Any], response.json())

            if response.status_code == 201:
                logger.info(
                    "Seeded supplier",
                    extra={
                        "supplier_name": item["name"],
                        "supplier_id": response_json.get("supplier", {}).get("id"),
                    },
                )
            else:
                logger.error(
                    "Failed to seed supplier",
                    extra={
                        "supplier_name": item["name"],
                        "status": response.status_code,
                        "response": response_json,
                    },
                )

        logger.info("Seeding completed")

        list_response = requests.get(suppliers_url, timeout=30)

        logger.info(
            "List suppliers response",
            extra={
                "status": list_response.status_code,
                "response": list_response.json() if list_response.ok else list_response.text,
            },
        )

    except Exception as exc:
        logger.exception("Seeding failed", exc_info=exc)
        sys.exit(1)


if __name__ == "__main__":
    seed_suppliers()
