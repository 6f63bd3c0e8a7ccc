import base64
import io

import pytest
from PIL import Image

from app.signature import ImageDecodeError, decode_signature, is_blank, signature_bytes, strip_data_uri
from app.timesheet_schema import SignatureImage
from tests.conftest import image_b64


def test_strip_data_uri():
    assert strip_data_uri("data:image/png;base64,QUJD") == "QUJD"
    assert strip_data_uri("data:image/jpeg;charset=utf-8;base64,QUJD") == "QUJD"
    assert strip_data_uri("QUJD") == "QUJD"


def test_decode_png_with_prefix(png_signature):
    img = decode_signature(png_signature)
    assert img.format == "PNG"
    assert img.size == (120, 40)


def test_decode_jpeg_without_prefix(jpeg_signature):
    assert decode_signature(jpeg_signature).format == "JPEG"


def test_declared_format_must_match():
    sig = SignatureImage(format="jpeg", data=image_b64("PNG"))
    with pytest.raises(ImageDecodeError, match="declared as JPEG"):
        decode_signature(sig)


def test_garbage_bytes_fail():
    sig = SignatureImage(format="png", data=base64.b64encode(b"not an image").decode())
    with pytest.raises(ImageDecodeError, match="Could not decode"):
        decode_signature(sig)


def test_invalid_base64_fails():
    with pytest.raises(ImageDecodeError, match="base64"):
        signature_bytes(SignatureImage(format="png", data="data:image/png;base64,@@@"))


def test_empty_payload_fails():
    with pytest.raises(ImageDecodeError, match="empty"):
        signature_bytes(SignatureImage(format="png", data="data:image/png;base64,"))


def test_oversized_image_is_a_decode_error(png_signature, monkeypatch):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(ImageDecodeError, match="Could not decode"):
        decode_signature(png_signature)


def test_blank_pad_has_no_ink():
    assert is_blank(Image.new("RGB", (300, 100), "white"))
    assert is_blank(Image.new("RGBA", (300, 100), (0, 0, 0, 0)))
    assert is_blank(Image.new("RGBA", (300, 100), (255, 255, 255, 255)))


def test_stroke_is_ink(png_signature):
    assert not is_blank(decode_signature(png_signature))

    img = Image.new("RGBA", (300, 100), (0, 0, 0, 0))
    img.putpixel((150, 50), (0, 0, 0, 255))
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    assert not is_blank(Image.open(io.BytesIO(buf.getvalue())))
