"""Image loader — decode user-supplied files into RGBA pixel buffers."""

from __future__ import annotations

import base64
import binascii
import io
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError


class ImageLoadError(Exception):
    """The source could not be decoded into an image."""


class ImageTooLargeError(ImageLoadError):
    """The image header reports more pixels than the caller allows."""


def decode_image_bytes(data: bytes, max_pixels: int | None = None) -> NDArray[np.uint8]:
    """Decode to (H, W, 4) uint8, checking the header size before any pixel data."""
    if not data:
        raise ImageLoadError("empty image data")
    try:
        with Image.open(io.BytesIO(data)) as img:
            w, h = img.size
            if max_pixels is not None and w * h > max_pixels:
                raise ImageTooLargeError(f"image has {w}x{h} pixels, limit is {max_pixels}")
            return np.array(img.convert("RGBA"), dtype=np.uint8)
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(f"image too large to decode: {e}") from e
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"cannot decode image: {e}") from e


def decode_base64_image(data: str, max_pixels: int | None = None) -> NDArray[np.uint8]:
    """Accepts bare base64 or a ``data:image/...;base64,`` URL."""
    if data.startswith("data:"):
        _, _, data = data.partition(",")
    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageLoadError(f"invalid base64 image data: {e}") from e
    return decode_image_bytes(raw, max_pixels)


def load_image(source: str | Path | bytes, max_pixels: int | None = None) -> NDArray[np.uint8]:
    """Load a path or raw encoded bytes as an (H, W, 4) uint8 buffer."""
    if isinstance(source, bytes):
        return decode_image_bytes(source, max_pixels)
    path = Path(source)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageLoadError(f"cannot read {path}: {e}") from e
    return decode_image_bytes(data, max_pixels)


def encode_png(image: NDArray[np.uint8]) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(image).save(buf, format="PNG")
    return buf.getvalue()
