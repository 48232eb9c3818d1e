"""Materialise base64 image uploads as temporary files for the report."""

import os
import re
import uuid
import base64
import binascii
import logging

from config import UPLOAD_DIR

logger = logging.getLogger(__name__)

IMAGE_SECTIONS = ("cover", "property", "floor_plans", "directions", "city")

_DATA_URI = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+);base64,(.+)$", re.DOTALL)


def write_base64_image(payload: str, prefix: str = "img") -> str:
    """Decode a data URI (or bare base64) into UPLOAD_DIR and return the file path.

    Raises ValueError when the payload is not valid base64.
    """
    match = _DATA_URI.match(payload.strip())
    encoded = match.group(2) if match else payload
    ext = (match.group(1).split("/")[1] if match else "") or "png"
    ext = ext.split("+")[0]  # svg+xml -> svg

    try:
        content = base64.b64decode(encoded, validate=False)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image for {prefix}: {e}") from e

    path = os.path.join(UPLOAD_DIR, f"{prefix}-{uuid.uuid4().hex[:12]}.{ext}")
    with open(path, "wb") as f:
        f.write(content)
    return path


def materialize_images(images: dict, written: list[str]) -> dict[str, list[str]]:
    """Write each section's uploads to disk.

    Remote http(s) entries are skipped. Every file written is appended to
    `written` as soon as it exists, so the caller can clean up after a failure.
    """
    images = images if isinstance(images, dict) else {}
    paths: dict[str, list[str]] = {}
    for section in IMAGE_SECTIONS:
        entries = images.get(section)
        paths[section] = []
        if not isinstance(entries, list):
            continue
        for entry in entries:
            if not isinstance(entry, str) or entry.startswith("http"):
                continue
            path = write_base64_image(entry, section)
            written.append(path)
            paths[section].append(path)
    counts = {k: len(v) for k, v in paths.items()}
    logger.info(f"Materialised uploads: {counts}")
    return paths


def remove_files(paths: list[str]):
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove temporary file {path}: {e}")
