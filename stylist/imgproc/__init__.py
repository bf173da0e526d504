"""Image intake helpers."""

from .encode import (
    MAX_IMAGE_BYTES,
    InlineImage,
    InvalidImage,
    PayloadTooLarge,
    check_size,
    encode_image,
    parse_data_url,
)

__all__ = [
    "MAX_IMAGE_BYTES",
    "InlineImage",
    "InvalidImage",
    "PayloadTooLarge",
    "check_size",
    "encode_image",
    "parse_data_url",
]
