"""
Data URI formatting for encoded images.

Output has the form ``data:image/png;base64,<payload>`` and is deterministic:
the same bytes and format always give the same string.
"""

import base64
import binascii

from .encoder import EncodedResult, ImageFormat
from ..errors import FormatError

DATA_URI_ENCODING = "base64"

_FORMATS_BY_MIME = {fmt.mime_type: fmt for fmt in ImageFormat}


def format_data_uri(result: EncodedResult) -> str:
    """Wrap encoded image bytes in a base64 data URI."""
    if not isinstance(result, EncodedResult):
        raise FormatError(f"Expected an EncodedResult, got {type(result).__name__}")
    if not isinstance(result.data, (bytes, bytearray)):
        raise FormatError(f"Encoded payload must be bytes, got {type(result.data).__name__}")
    payload = base64.b64encode(result.data).decode("ascii")
    return f"data:{result.mime_type};{DATA_URI_ENCODING},{payload}"


def parse_data_uri(text: str) -> EncodedResult:
    """
    Decode a data URI produced by format_data_uri back into its bytes.

    Raises:
        FormatError: If `text` is not a base64 image data URI for a
            supported format.
    """
    if not isinstance(text, str) or not text.startswith("data:"):
        raise FormatError("Not a data URI")
    header, sep, payload = text[len("data:"):].partition(",")
    if not sep:
        raise FormatError("Data URI has no payload separator")
    mime_type, _, encoding = header.partition(";")
    if encoding != DATA_URI_ENCODING:
        raise FormatError(f"Unsupported data URI encoding: {encoding!r}")
    fmt = _FORMATS_BY_MIME.get(mime_type)
    if fmt is None:
        raise FormatError(f"Unsupported data URI mime type: {mime_type!r}")
    try:
        data = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as err:
        raise FormatError(f"Invalid base64 payload: {err}") from err
    return EncodedResult(format=fmt, data=data)
