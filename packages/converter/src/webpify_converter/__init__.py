"""
URL -> WebP Conversion Engine.

This package is the core fetch-and-convert logic.
It is used by both the server and the standalone command.

Deployment:
    pip install webpify

Image work is done by Pillow, downloads by requests. No web framework here.

"""

from .convert import ImageConverter
from .encode import DecodedImage, decode_image, encode_webp, resize_image, target_size, to_webp_mode
from .errors import ConversionError, DecodeError, FetchError, WriteError
from .fetch import fetch_image_bytes, new_session

__all__ = [
    "ImageConverter",
    "ConversionError",
    "FetchError",
    "DecodeError",
    "WriteError",
    "fetch_image_bytes",
    "new_session",
    "DecodedImage",
    "decode_image",
    "encode_webp",
    "resize_image",
    "target_size",
    "to_webp_mode",
]
