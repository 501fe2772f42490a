"""
Pillow side of the pipeline: decode, resize and WebP-encode in memory.

Nothing here touches the filesystem, so a failure at any step leaves no
output file behind.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass

from PIL import Image, UnidentifiedImageError

from webpify_shared.protocol import EncodingPolicy

from .errors import DecodeError

logger = logging.getLogger(__name__)

WEBP_MODES = ("RGB", "RGBA")
WEBP_MAX_DIMENSION = 16383


@dataclass
class DecodedImage:
    """A fully loaded source image and the format Pillow detected."""
    image: Image.Image
    source_format: str | None

    @property
    def size(self) -> tuple[int, int]:
        return self.image.size


def decode_image(data: bytes) -> DecodedImage:
    """
    Decode image bytes.

    Raises:
        DecodeError: If the bytes are empty, not an image, truncated or too large
    """
    if not data:
        raise DecodeError("Empty response body is not an image")

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except UnidentifiedImageError as e:
        raise DecodeError("Unsupported or corrupt image data") from e
    except Image.DecompressionBombError as e:
        raise DecodeError(f"Image too large to decode: {e}") from e
    except (OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"Failed to decode image: {e}") from e

    logger.debug("Decoded %s image %dx%d mode=%s", img.format, img.width, img.height, img.mode)
    return DecodedImage(image=img, source_format=img.format)


def target_size(width: int, height: int, ratio: float) -> tuple[int, int]:
    """
    Scale both dimensions by ratio, rounding halves up, never below one pixel.

    Raises:
        DecodeError: If the result would exceed what WebP can store or the
            Pillow pixel limit
    """
    scaled_w = width * ratio
    scaled_h = height * ratio
    if not (math.isfinite(scaled_w) and math.isfinite(scaled_h)):
        raise DecodeError(f"Resize ratio {ratio} is too large for a {width}x{height} image")

    size = (
        max(1, math.floor(scaled_w + 0.5)),
        max(1, math.floor(scaled_h + 0.5)),
    )
    if max(size) > WEBP_MAX_DIMENSION:
        raise DecodeError(
            f"Resized image {size[0]}x{size[1]} exceeds the WebP limit of "
            f"{WEBP_MAX_DIMENSION}px per side"
        )
    if Image.MAX_IMAGE_PIXELS and size[0] * size[1] > Image.MAX_IMAGE_PIXELS:
        raise DecodeError(
            f"Resized image {size[0]}x{size[1]} exceeds the pixel limit of {Image.MAX_IMAGE_PIXELS}"
        )
    return size


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA") or (
        img.mode == "P" and "transparency" in img.info
    )


def to_webp_mode(img: Image.Image) -> Image.Image:
    """Convert to RGB or RGBA, the modes the WebP encoder accepts."""
    if img.mode in WEBP_MODES:
        return img
    return img.convert("RGBA" if _has_alpha(img) else "RGB")


def resize_image(img: Image.Image, ratio: float) -> Image.Image:
    """Resize proportionally. A ratio of 1.0 returns the image untouched."""
    size = target_size(img.width, img.height, ratio)
    if size == img.size:
        return img
    return img.resize(size, Image.Resampling.LANCZOS)


def encode_webp(img: Image.Image, policy: EncodingPolicy) -> bytes:
    """
    Encode img as WebP with the given policy.

    Raises:
        DecodeError: If Pillow can't write this image as WebP
    """
    buf = io.BytesIO()
    try:
        img.save(buf, format="WEBP", **policy.save_params())
    except (OSError, ValueError, KeyError, RuntimeError, MemoryError) as e:
        raise DecodeError(f"Failed to encode image as WebP: {e}") from e
    return buf.getvalue()
