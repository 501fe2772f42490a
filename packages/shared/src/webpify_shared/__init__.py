"""
Shared request/result types and output file handling for webpify

The package is a dependency of the converter, server and CLI:
- Server uses it to parse request bodies and render results
- Converter uses it for the encoding policy and output file sequence

Deployment:
    pip install webpify
"""

from .protocol import (
    DEFAULT_RESIZE_RATIO,
    MISSING_FIELDS_MESSAGE,
    ConversionRequest,
    ConversionResult,
    EncodingPolicy,
    ErrorKind,
    ProtocolError,
    parse_conversion_request,
    parse_resize_ratio,
    policy_for_format,
)
from .files import (
    OUTPUT_NAME_RE,
    OutputSequence,
    highest_output_index,
    output_name,
)

__all__ = [
    # Protocol
    "DEFAULT_RESIZE_RATIO",
    "MISSING_FIELDS_MESSAGE",
    "ProtocolError",
    "ErrorKind",
    "EncodingPolicy",
    "policy_for_format",
    "ConversionRequest",
    "ConversionResult",
    "parse_conversion_request",
    "parse_resize_ratio",
    # Files
    "OUTPUT_NAME_RE",
    "OutputSequence",
    "highest_output_index",
    "output_name",
]
