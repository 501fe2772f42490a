"""
Request and result types for the URL -> WebP conversion pipeline.

Message Flow:
    Client -> Server: POST /convert-image {imageUrl, resizeRatio}
    Server -> Converter: ConversionRequest
    Converter -> Server: ConversionResult (success or failure, never raised)
    Server -> Client: 200 with path + dimensions, or 500 with error
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Any

# Type literal
ErrorKind = Literal["fetch", "decode", "write"]

DEFAULT_RESIZE_RATIO = 1.0
MISSING_FIELDS_MESSAGE = "imageUrl and resizeRatio are required."


class ProtocolError(Exception):
    """Raised when a request body fails validation."""
    pass


class EncodingPolicy(Enum):
    """How the decoded image is written as WebP."""
    LOSSLESS = "lossless"
    LOSSY_MAX_QUALITY = "lossy_max_quality"

    def save_params(self) -> dict[str, Any]:
        """Keyword arguments for Pillow's WebP writer."""
        if self is EncodingPolicy.LOSSLESS:
            return {"lossless": True}
        return {"quality": 100}


_POLICY_BY_FORMAT: dict[str, EncodingPolicy] = {
    "PNG": EncodingPolicy.LOSSLESS,
    "JPEG": EncodingPolicy.LOSSY_MAX_QUALITY,
}


def policy_for_format(source_format: str | None) -> EncodingPolicy:
    """PNG is kept lossless; JPEG and anything unknown get quality 100."""
    if source_format is None:
        return EncodingPolicy.LOSSY_MAX_QUALITY
    return _POLICY_BY_FORMAT.get(
        source_format.upper(), EncodingPolicy.LOSSY_MAX_QUALITY
    )


@dataclass(frozen=True)
class ConversionRequest:
    """A single image to fetch and convert."""
    source_url: str
    resize_ratio: float = DEFAULT_RESIZE_RATIO

    def __post_init__(self) -> None:
        if not isinstance(self.source_url, str) or not self.source_url.strip():
            raise ProtocolError("imageUrl must be a non-empty string.")
        if not _is_positive_number(self.resize_ratio):
            raise ProtocolError("resizeRatio must be a positive number.")


@dataclass
class ConversionResult:
    """
    Outcome of one conversion. Exactly one of the two shapes is filled:
    success carries output_path/width/height, failure carries
    error_kind/error_message.
    """
    success: bool
    output_path: str | None = None
    width: int | None = None
    height: int | None = None
    error_kind: ErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def ok(cls, output_path: str, width: int, height: int) -> "ConversionResult":
        return cls(
            success=True,
            output_path=output_path,
            width=width,
            height=height,
        )

    @classmethod
    def failed(cls, kind: ErrorKind, message: str) -> "ConversionResult":
        return cls(
            success=False,
            error_kind=kind,
            error_message=message or f"{kind} failed",
        )

    def to_dict(self) -> dict[str, Any]:
        """HTTP response body for this result."""
        if self.success:
            return {
                "success": True,
                "message": f"Image converted and saved as: {self.output_path}",
                "path": self.output_path,
                "dimensions": {"width": self.width, "height": self.height},
            }
        return {
            "success": False,
            "error": self.error_message,
            "kind": self.error_kind,
        }


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def parse_resize_ratio(value: Any) -> float:
    """Accept numbers or numeric strings; reject anything not finite and > 0."""
    if isinstance(value, bool):
        raise ProtocolError("resizeRatio must be a positive number.")
    try:
        ratio = float(value)
    except (TypeError, ValueError) as e:
        raise ProtocolError("resizeRatio must be a positive number.") from e
    if not _is_positive_number(ratio):
        raise ProtocolError("resizeRatio must be a positive number.")
    return ratio


def parse_conversion_request(data: dict[str, Any] | None) -> ConversionRequest:
    """Build a ConversionRequest from the JSON body of POST /convert-image."""
    if not isinstance(data, dict):
        raise ProtocolError(MISSING_FIELDS_MESSAGE)

    image_url = data.get("imageUrl")
    resize_ratio = data.get("resizeRatio")
    if image_url is None or resize_ratio is None:
        raise ProtocolError(MISSING_FIELDS_MESSAGE)

    if not isinstance(image_url, str):
        raise ProtocolError("imageUrl must be a non-empty string.")

    return ConversionRequest(
        source_url=image_url.strip(),
        resize_ratio=parse_resize_ratio(resize_ratio),
    )
