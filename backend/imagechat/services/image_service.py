"""Validate uploaded images and convert them to/from base64 data URIs."""

import asyncio
import base64
import binascii
import logging
import re
from pathlib import Path

from imagechat.config import UIConfig, get_ui_config

logger = logging.getLogger(__name__)

INVALID_TYPE_MESSAGE = "Invalid file type. Please upload JPEG, PNG, GIF, or WebP."
READ_ERROR_MESSAGE = "Error reading file. Please try again."
NOT_A_DATA_URI_MESSAGE = "Image must be a base64 data URI."

DATA_URI_PATTERN = re.compile(r"^data:(?P<content_type>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


class ImageValidationError(ValueError):
    """Raised when an image is rejected before it is sent anywhere."""


def too_large_message(max_size: int) -> str:
    return f"File is too large. Maximum size is {max_size // (1024 * 1024)}MB."


def validate_image(content_type: str | None, size: int, config: UIConfig | None = None) -> None:
    """
    Check a candidate file against the type allow-list and size ceiling.

    The type is checked first; raises ImageValidationError with the
    user-facing reason on rejection.
    """
    config = config or get_ui_config()
    if content_type not in config.allowed_image_types:
        raise ImageValidationError(INVALID_TYPE_MESSAGE)
    if size > config.max_file_size:
        raise ImageValidationError(too_large_message(config.max_file_size))


def encode_data_uri(content: bytes, content_type: str) -> str:
    b64 = base64.b64encode(content).decode("utf-8")
    return f"data:{content_type};base64,{b64}"


def parse_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into its content type and decoded bytes."""
    match = DATA_URI_PATTERN.match(uri)
    if not match:
        raise ImageValidationError(NOT_A_DATA_URI_MESSAGE)
    try:
        content = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error:
        raise ImageValidationError(NOT_A_DATA_URI_MESSAGE)
    return match.group("content_type"), content


def validate_data_uri(uri: str, config: UIConfig | None = None) -> str:
    """Validate an encoded image the same way a selected file is validated."""
    content_type, content = parse_data_uri(uri)
    validate_image(content_type, len(content), config)
    return uri


async def read_data_uri(path: Path, content_type: str) -> str:
    """
    Read a file off the event loop and encode it as a data URI.

    OSError propagates so the caller can surface a read failure.
    """
    content = await asyncio.to_thread(path.read_bytes)
    logger.info("Encoded %s (%d bytes, %s)", path.name, len(content), content_type)
    return encode_data_uri(content, content_type)
