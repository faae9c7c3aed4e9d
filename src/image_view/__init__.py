"""
Image View

Load a raster image once, read its properties, and produce JPEG/PNG bytes,
data URIs and plain-dict projections on a background worker pool.
"""

__version__ = "0.1.0"

from .view import ImageView
from .config import ImageViewSettings
from .core import (
    EncodedResult,
    ImageFormat,
    InlineExecutor,
    PixelBuffer,
    decode,
    encode,
    format_data_uri,
    parse_data_uri,
    project,
)
from .errors import (
    ImageViewError,
    ConstructionError,
    NotFoundError,
    CorruptImageError,
    EncodeError,
    UnsupportedFormatError,
    FormatError,
    DispatchError,
    CompletionTimeoutError,
)

__all__ = [
    "ImageView",
    "ImageViewSettings",
    "EncodedResult",
    "ImageFormat",
    "InlineExecutor",
    "PixelBuffer",
    "decode",
    "encode",
    "format_data_uri",
    "parse_data_uri",
    "project",
    "ImageViewError",
    "ConstructionError",
    "NotFoundError",
    "CorruptImageError",
    "EncodeError",
    "UnsupportedFormatError",
    "FormatError",
    "DispatchError",
    "CompletionTimeoutError",
]
