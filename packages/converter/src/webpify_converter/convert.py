"""
Image conversion orchestration for WebP output.

This module handles the high-level conversion workflow:
1. Fetch the source bytes over HTTP
2. Decode and detect the source format
3. Resize proportionally by the requested ratio
4. Encode as WebP (lossless for PNG, quality 100 otherwise)
5. Write to the next ``output-image-<N>.webp`` in the output directory
"""

from __future__ import annotations

import logging
from pathlib import Path

import requests

from webpify_shared.files import OutputSequence
from webpify_shared.protocol import (
    DEFAULT_RESIZE_RATIO,
    ConversionRequest,
    ConversionResult,
    ErrorKind,
    ProtocolError,
    policy_for_format,
)

from .encode import decode_image, encode_webp, resize_image, to_webp_mode
from .errors import ConversionError, DecodeError, WriteError
from .fetch import DEFAULT_TIMEOUT, fetch_image_bytes

logger = logging.getLogger(__name__)


class ImageConverter:
    """
    Converts remote images to WebP files in one output directory.

    ``convert`` never raises. Invalid arguments and fetch, decode or write
    problems all come back as a failed ConversionResult.
    """

    def __init__(
        self,
        output_dir: Path,
        session: requests.Session | None = None,
        fetch_timeout: float = DEFAULT_TIMEOUT,
    ):
        self.output_dir = Path(output_dir)
        self.fetch_timeout = fetch_timeout
        self._session = session
        self._sequence = OutputSequence(self.output_dir)

    def ensure_output_dir(self) -> None:
        self._sequence.ensure_directory()

    def convert(
        self,
        source_url: str,
        resize_ratio: float = DEFAULT_RESIZE_RATIO,
    ) -> ConversionResult:
        """
        Fetch source_url, convert it and write one WebP file.

        An empty URL fails as a fetch error and a ratio that isn't a positive
        number fails as a decode error; neither is raised.
        """
        try:
            request = ConversionRequest(source_url=source_url, resize_ratio=resize_ratio)
        except ProtocolError as e:
            url_ok = isinstance(source_url, str) and bool(source_url.strip())
            kind: ErrorKind = "decode" if url_ok else "fetch"
            logger.error("Rejected conversion of %r (%s): %s", source_url, kind, e)
            return ConversionResult.failed(kind, str(e))
        return self.run(request)

    def run(self, request: ConversionRequest) -> ConversionResult:
        """Execute the conversion for an already validated request."""
        try:
            out_path, width, height = self._convert(request)
        except ConversionError as e:
            logger.error("Conversion of %s failed (%s): %s", request.source_url, e.kind, e)
            return ConversionResult.failed(e.kind, str(e))

        logger.info("Image converted and saved as: %s", out_path)
        logger.info("New dimensions: %dx%d", width, height)
        return ConversionResult.ok(str(out_path), width, height)

    def _convert(self, request: ConversionRequest) -> tuple[Path, int, int]:
        data = fetch_image_bytes(
            request.source_url,
            session=self._session,
            timeout=self.fetch_timeout,
        )

        decoded = decode_image(data)
        policy = policy_for_format(decoded.source_format)
        logger.debug(
            "Source %s %dx%d -> policy %s",
            decoded.source_format, *decoded.size, policy.value,
        )

        try:
            img = resize_image(to_webp_mode(decoded.image), request.resize_ratio)
        except (OSError, ValueError, OverflowError, MemoryError) as e:
            raise DecodeError(f"Failed to resize image: {e}") from e
        webp_bytes = encode_webp(img, policy)

        try:
            out_path = self._sequence.write(webp_bytes)
        except OSError as e:
            raise WriteError(f"Failed to write WebP to {self.output_dir}: {e}") from e

        return out_path, img.width, img.height
