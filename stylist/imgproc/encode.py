"""Intake validation and inline (base64) encoding of clothing photos."""

from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from io import BytesIO

from PIL import Image

from stylist.config.settings import StylistError

MAX_IMAGE_BYTES = 4 * 1024 * 1024
DEFAULT_MIME_TYPE = "image/jpeg"

_DATA_URL_RE = re.compile(r"^data:(image/[a-zA-Z]+);base64,")
# Pillow reports multi-picture JPEGs from phone cameras as MPO
_FORMAT_ALIASES = {"MPO": "JPEG"}


class PayloadTooLarge(StylistError):
    """Raised when an uploaded image exceeds the size limit."""

    def __init__(self, size: int, limit: int = MAX_IMAGE_BYTES) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"Image size cannot exceed {limit // (1024 * 1024)}MB.")


class InvalidImage(StylistError):
    """Raised when the uploaded payload is empty or not a readable image."""


@dataclass(slots=True, frozen=True)
class InlineImage:
    """Base64 payload ready to be embedded in a request body."""

    mime_type: str
    base64_data: str

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.base64_data}"

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.base64_data)


def check_size(size: int, limit: int = MAX_IMAGE_BYTES) -> None:
    """Raise ``PayloadTooLarge`` when ``size`` is above ``limit``."""

    if size > limit:
        raise PayloadTooLarge(size, limit)


def detect_mime_type(data: bytes) -> str:
    """Return the MIME type of an image payload, validating it along the way."""

    try:
        with Image.open(BytesIO(data)) as img:
            image_format = img.format or ""
            img.verify()
    except (OSError, SyntaxError) as exc:
        raise InvalidImage("The uploaded file is not a supported image.") from exc

    image_format = _FORMAT_ALIASES.get(image_format, image_format)
    return Image.MIME.get(image_format, DEFAULT_MIME_TYPE)


def encode_image(data: bytes, *, limit: int = MAX_IMAGE_BYTES) -> InlineImage:
    """Validate raw image bytes and encode them as an inline payload."""

    check_size(len(data), limit)
    if not data:
        raise InvalidImage("Please select an image to save.")
    mime_type = detect_mime_type(data)
    return InlineImage(mime_type=mime_type, base64_data=base64.b64encode(data).decode("ascii"))


def parse_data_url(data_url: str) -> InlineImage:
    """Split a data URL into MIME type and base64 payload.

    Unknown or missing MIME prefixes fall back to ``image/jpeg``.
    """

    match = _DATA_URL_RE.match(data_url)
    mime_type = match.group(1) if match else DEFAULT_MIME_TYPE
    _, _, payload = data_url.partition(",")
    if not payload:
        payload = data_url
    try:
        base64.b64decode(payload, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise InvalidImage("Image payload is not valid base64.") from exc
    return InlineImage(mime_type=mime_type, base64_data=payload)
