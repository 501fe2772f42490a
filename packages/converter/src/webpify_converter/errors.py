"""Failures the conversion pipeline can hit, one per stage."""

from __future__ import annotations

from webpify_shared.protocol import ErrorKind


class ConversionError(RuntimeError):
    """Base exception for a failed conversion stage."""

    kind: ErrorKind

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class FetchError(ConversionError):
    """Raised when the source URL can't be reached or answers non-2xx."""

    kind: ErrorKind = "fetch"

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class DecodeError(ConversionError):
    """Raised when fetched bytes are not an image Pillow can read or re-encode."""

    kind: ErrorKind = "decode"


class WriteError(ConversionError):
    """Raised when the encoded WebP can't be persisted."""

    kind: ErrorKind = "write"
