"""Tests for intake validation and inline encoding."""

from __future__ import annotations

import base64

import pytest

from stylist.imgproc import MAX_IMAGE_BYTES, InvalidImage, PayloadTooLarge, check_size, encode_image, parse_data_url


def test_check_size_accepts_exact_limit() -> None:
    check_size(MAX_IMAGE_BYTES)

    with pytest.raises(PayloadTooLarge) as excinfo:
        check_size(MAX_IMAGE_BYTES + 1)

    assert "4MB" in str(excinfo.value)


def test_encode_image_reports_webp(make_image) -> None:
    inline = encode_image(make_image("WEBP"))

    assert inline.mime_type == "image/webp"
    assert inline.data_url.startswith("data:image/webp;base64,")


def test_empty_payload_is_invalid() -> None:
    with pytest.raises(InvalidImage):
        encode_image(b"")


def test_parse_data_url_defaults_to_jpeg() -> None:
    payload = base64.b64encode(b"raw").decode("ascii")

    inline = parse_data_url(f"data:application/octet-stream;base64,{payload}")

    assert inline.mime_type == "image/jpeg"
    assert inline.base64_data == payload
    assert inline.to_bytes() == b"raw"


def test_parse_data_url_rejects_garbage() -> None:
    with pytest.raises(InvalidImage):
        parse_data_url("data:image/png;base64,***")
