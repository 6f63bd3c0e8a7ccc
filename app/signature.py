# app/signature.py
import base64
import binascii
import io
import logging
import re

from PIL import Image, ImageOps, UnidentifiedImageError

from app.timesheet_schema import SignatureImage

logger = logging.getLogger(__name__)

DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w/+.-]*)?(?:;[\w=-]+)*;base64,", re.IGNORECASE)

# Declared tag -> Pillow format name
PIL_FORMATS = {"png": "PNG", "jpeg": "JPEG"}


class ImageDecodeError(Exception):
    """Raised when signature bytes cannot be decoded as the declared format."""
    pass


def strip_data_uri(data: str) -> str:
    """Drop a `data:image/...;base64,` prefix if one is present."""
    s = (data or "").strip()
    m = DATA_URI_RE.match(s)
    if m:
        return s[m.end():]
    return s


def signature_bytes(signature: SignatureImage) -> bytes:
    payload = strip_data_uri(signature.data)
    if not payload:
        raise ImageDecodeError("Signature image is empty")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageDecodeError(f"Signature is not valid base64: {e}") from e


def decode_signature(signature: SignatureImage) -> Image.Image:
    """
    Decode a signature into a Pillow image.

    The `format` tag set by the capture/upload step is authoritative: the
    decoded bytes must be an image of exactly that format.
    """
    raw = signature_bytes(signature)
    expected = PIL_FORMATS[signature.format]

    try:
        img = Image.open(io.BytesIO(raw))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError) as e:
        raise ImageDecodeError(
            f"Could not decode {signature.source} signature as {signature.format.upper()}: {e}"
        ) from e

    if img.format != expected:
        raise ImageDecodeError(
            f"Signature was declared as {signature.format.upper()} but contains {img.format or 'unknown'} data"
        )

    logger.debug("Decoded %s signature %sx%s", signature.format, img.width, img.height)
    return img


def is_blank(img: Image.Image) -> bool:
    """True when the image has no ink: every pixel is white once laid on white paper."""
    if img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info):
        rgba = img.convert("RGBA")
        paper = Image.new("RGBA", rgba.size, (255, 255, 255, 255))
        img = Image.alpha_composite(paper, rgba)
    return ImageOps.invert(img.convert("L")).getbbox() is None
