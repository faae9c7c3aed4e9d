"""
encoder.py: Compress a PixelBuffer into JPEG or PNG bytes.

JPEG output is lossy and has no alpha channel, so RGBA buffers are written
as RGB and LA buffers as L. PNG output is lossless and keeps the buffer's
channel layout, so decoding it yields the original samples.
"""

import io
from dataclasses import dataclass
from enum import Enum
from typing import Union

from PIL import Image

from .pixel_buffer import PixelBuffer
from ..config import DEFAULT_JPEG_QUALITY, DEFAULT_PNG_COMPRESS_LEVEL
from ..errors import EncodeError, UnsupportedFormatError
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

_JPEG_MODES = {"L": "L", "LA": "L", "RGB": "RGB", "RGBA": "RGB"}


class ImageFormat(Enum):
    """Output formats an image view can produce."""
    JPEG = "JPEG"
    PNG = "PNG"

    @property
    def mime_type(self) -> str:
        return f"image/{self.value.lower()}"

    @classmethod
    def parse(cls, value: Union["ImageFormat", str]) -> "ImageFormat":
        """
        Resolve an ImageFormat from a member or a case-insensitive name.

        Raises:
            UnsupportedFormatError: If `value` names no supported format.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            name = value.strip().upper()
            if name == "JPG":
                name = "JPEG"
            try:
                return cls[name]
            except KeyError:
                pass
        raise UnsupportedFormatError(f"Unsupported image format: {value!r}")


@dataclass(frozen=True)
class EncodedResult:
    """Compressed image bytes tagged with their format."""
    format: ImageFormat
    data: bytes

    @property
    def mime_type(self) -> str:
        return self.format.mime_type

    def __len__(self) -> int:
        return len(self.data)


def encode(
    buffer: PixelBuffer,
    fmt: Union[ImageFormat, str],
    *,
    quality: int = DEFAULT_JPEG_QUALITY,
    compress_level: int = DEFAULT_PNG_COMPRESS_LEVEL,
) -> EncodedResult:
    """
    Encode `buffer` in the requested format.

    Args:
        buffer: Decoded pixels to compress.
        fmt: ImageFormat member or name ("jpeg", "jpg", "png").
        quality: JPEG quality, 1..100 (default 95).
        compress_level: zlib level for PNG, 0..9 (default 6).

    Returns:
        EncodedResult holding the compressed bytes.

    Raises:
        UnsupportedFormatError: If `fmt` is not JPEG or PNG.
        EncodeError: If Pillow fails to write the image.
    """
    fmt = ImageFormat.parse(fmt)
    out = io.BytesIO()
    try:
        image = buffer.to_image()
        if fmt is ImageFormat.JPEG:
            target_mode = _JPEG_MODES[buffer.mode]
            if image.mode != target_mode:
                image = image.convert(target_mode)
            image.save(out, format="JPEG", quality=quality)
        else:
            image.save(out, format="PNG", compress_level=compress_level)
    except (OSError, ValueError, MemoryError) as err:
        logger.debug("Failed to encode %r as %s: %s", buffer, fmt.value, err)
        raise EncodeError(f"{fmt.value} encoding failed: {err}") from err

    data = out.getvalue()
    if not data:
        raise EncodeError(f"{fmt.value} encoder produced no data")
    logger.debug("Encoded %r as %s (%d bytes)", buffer, fmt.value, len(data))
    return EncodedResult(format=fmt, data=data)
