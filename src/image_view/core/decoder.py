"""
decoder.py: Read an image source and decode it into a PixelBuffer.

A source is either a filesystem path (str or os.PathLike) or the encoded
bytes themselves. Supports every format Pillow reads, plus HEIC/HEIF when
pillow-heif is installed.

Integer grayscale ("I", "I;16") is treated as 16-bit and scaled to 8 bits;
values above 65535 saturate at 255. Float grayscale ("F") is clipped to 0..255.
"""

import io
import os
from pathlib import Path
from typing import Union

from PIL import Image, UnidentifiedImageError

try:
    from pillow_heif import register_heif_opener
    register_heif_opener()
except ImportError:
    pass

from .pixel_buffer import CHANNELS_BY_MODE, PixelBuffer
from ..errors import CorruptImageError, NotFoundError
from ..utils.log_utils import get_logger

logger = get_logger(__name__)

ImageSource = Union[str, os.PathLike, bytes, bytearray, memoryview]

_BYTES_TYPES = (bytes, bytearray, memoryview)


def describe_source(source: ImageSource) -> str:
    """Return a short label for `source` that is safe to log."""
    if isinstance(source, _BYTES_TYPES):
        return f"<{len(source)} bytes>"
    return os.fspath(source) if isinstance(source, os.PathLike) else str(source)


def read_source(source: ImageSource) -> bytes:
    """
    Return the raw encoded bytes named by `source`.

    Raises:
        NotFoundError: If a path does not exist or cannot be read.
        TypeError: If `source` is neither a path nor a bytes-like object.
    """
    if isinstance(source, _BYTES_TYPES):
        return bytes(source)
    if not isinstance(source, (str, os.PathLike)):
        raise TypeError(f"Image source must be a path or bytes, not {type(source).__name__}")

    path = Path(source)
    try:
        return path.read_bytes()
    except FileNotFoundError as err:
        raise NotFoundError(f"Image not found: {path}", str(path)) from err
    except OSError as err:
        raise NotFoundError(f"Cannot read image '{path}': {err}", str(path)) from err


def _normalize_mode(image: Image.Image) -> Image.Image:
    """Convert `image` to one of the layouts a PixelBuffer supports."""
    mode = image.mode
    if mode in CHANNELS_BY_MODE:
        return image
    if mode in ("P", "PA"):
        has_alpha = mode == "PA" or "transparency" in image.info
        return image.convert("RGBA" if has_alpha else "RGB")
    if mode == "I" or mode.startswith("I;16"):
        # integer grayscale holds 16-bit samples: scale into 8 bits instead of clipping
        return image.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    if mode in ("1", "F"):
        return image.convert("L")
    if mode == "La":
        return image.convert("LA")
    if mode == "RGBa":
        return image.convert("RGBA")
    return image.convert("RGB")


def decode(source: ImageSource) -> PixelBuffer:
    """
    Decode `source` into a PixelBuffer.

    Args:
        source: Path to an image file, or the encoded image bytes.

    Returns:
        The fully populated pixel buffer.

    Raises:
        NotFoundError: If the source path does not exist or cannot be read.
        CorruptImageError: If the bytes are not a decodable image or the
            decoded image has no pixels.
    """
    label = describe_source(source)
    raw = read_source(source)
    if not raw:
        raise CorruptImageError(f"Image source is empty: {label}", label)

    try:
        with Image.open(io.BytesIO(raw)) as img:
            img.load()
            width, height = img.size
            if width < 1 or height < 1:
                raise CorruptImageError(f"Image has invalid size {width}x{height}: {label}", label)
            buffer = PixelBuffer.from_image(_normalize_mode(img))
    except UnidentifiedImageError as err:
        raise CorruptImageError(f"Not a recognized image format: {label}", label) from err
    except Image.DecompressionBombError as err:
        raise CorruptImageError(f"Image is too large to decode safely: {label}", label) from err
    except (OSError, SyntaxError, ValueError) as err:
        # Pillow reports truncated and malformed streams this way
        raise CorruptImageError(f"Failed to decode image {label}: {err}", label) from err

    logger.debug("Decoded %s: %dx%d %s", label, buffer.width, buffer.height, buffer.mode)
    return buffer
