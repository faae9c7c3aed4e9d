"""
view.py: ImageView, a read-only handle over one decoded image.

The image is decoded once, when the view is constructed. Dimensions are
available immediately; encodings are produced on a worker pool and reported
through an error-first completion callback, a Future, or an awaitable.

Example:
    view = ImageView("photo.jpg")
    print(view.width(), view.height())
    view.as_png_data_uri(lambda err, uri: print(err or uri[:40]))
"""

import asyncio
from concurrent.futures import Executor, Future
from typing import Any, Dict, Optional, Union

from .config import ImageViewSettings
from .core.data_uri import format_data_uri
from .core.decoder import ImageSource, decode, describe_source
from .core.dispatch import CompletionCallback, Dispatcher, default_executor
from .core.encoder import EncodedResult, ImageFormat, encode
from .core.pixel_buffer import PixelBuffer
from .core.projector import project
from .errors import EncodeError, FormatError, ImageViewError
from .utils.log_utils import get_logger

logger = get_logger(__name__)

FormatLike = Union[ImageFormat, str]


def _format_name(fmt: FormatLike) -> str:
    return fmt.value if isinstance(fmt, ImageFormat) else str(fmt)


class ImageView:
    """
    Decoded image with synchronous accessors and background encoders.

    Construction raises NotFoundError or CorruptImageError (both
    ConstructionError) if the source cannot be decoded; a view that exists
    always holds a valid pixel buffer. After that every operation is
    read-only and may be called any number of times from any thread.
    """

    def __init__(
        self,
        source: ImageSource,
        *,
        executor: Optional[Executor] = None,
        settings: Optional[ImageViewSettings] = None,
    ) -> None:
        self.settings = settings or ImageViewSettings()
        self._source = source
        self._buffer = decode(source)
        if executor is None:
            executor = default_executor(self.settings.max_workers)
        self._dispatcher = Dispatcher(executor)
        logger.debug("Created %r", self)

    @property
    def source(self) -> ImageSource:
        return self._source

    @property
    def pixel_buffer(self) -> PixelBuffer:
        return self._buffer

    @property
    def mode(self) -> str:
        return self._buffer.mode

    @property
    def channels(self) -> int:
        return self._buffer.channels

    def width(self) -> int:
        return self._buffer.width

    def height(self) -> int:
        return self._buffer.height

    def __repr__(self) -> str:
        return (
            f"ImageView({describe_source(self._source)}, "
            f"{self._buffer.width}x{self._buffer.height} {self._buffer.mode})"
        )

    # -- encoding work, run on the executor --

    def _encode(self, fmt: FormatLike) -> EncodedResult:
        try:
            return encode(
                self._buffer,
                fmt,
                quality=self.settings.jpeg_quality,
                compress_level=self.settings.png_compress_level,
            )
        except ImageViewError:
            raise
        except Exception as err:
            raise EncodeError(f"{_format_name(fmt)} encoding failed: {err!r}") from err

    def _encode_bytes(self, fmt: FormatLike) -> bytes:
        return self._encode(fmt).data

    def _encode_data_uri(self, fmt: FormatLike) -> str:
        result = self._encode(fmt)
        try:
            return format_data_uri(result)
        except ImageViewError:
            raise
        except Exception as err:
            raise FormatError(f"Could not build data URI: {err!r}") from err

    # -- completion-style API --

    def as_stream(
        self,
        fmt: FormatLike,
        completion: Optional[CompletionCallback] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Future:
        """
        Encode the image in `fmt` on the worker pool.

        Returns immediately. `completion(error, data)` is called exactly once
        with either an error or the encoded bytes; the returned Future
        resolves the same way. An unsupported `fmt` is reported through the
        completion, not raised.
        """
        return self._dispatcher.submit(
            f"{_format_name(fmt)} stream of {describe_source(self._source)}",
            lambda: self._encode_bytes(fmt),
            completion,
            timeout,
        )

    def as_data_uri(
        self,
        fmt: FormatLike,
        completion: Optional[CompletionCallback] = None,
        *,
        timeout: Optional[float] = None,
    ) -> Future:
        """Like as_stream, but delivers a ``data:<mime>;base64,...`` string."""
        return self._dispatcher.submit(
            f"{_format_name(fmt)} data URI of {describe_source(self._source)}",
            lambda: self._encode_data_uri(fmt),
            completion,
            timeout,
        )

    def as_jpeg_stream(self, completion=None, *, timeout=None) -> Future:
        return self.as_stream(ImageFormat.JPEG, completion, timeout=timeout)

    def as_png_stream(self, completion=None, *, timeout=None) -> Future:
        return self.as_stream(ImageFormat.PNG, completion, timeout=timeout)

    def as_jpeg_data_uri(self, completion=None, *, timeout=None) -> Future:
        return self.as_data_uri(ImageFormat.JPEG, completion, timeout=timeout)

    def as_png_data_uri(self, completion=None, *, timeout=None) -> Future:
        return self.as_data_uri(ImageFormat.PNG, completion, timeout=timeout)

    def as_object(self, include_data: Optional[bool] = None) -> Dict[str, Any]:
        """
        Return a dict describing the image (synchronous).

        Runs on the calling thread and reads every pixel once to compute the
        per-channel mean. See image_view.core.projector for the schema.
        `include_data` defaults to the view's settings.
        """
        if include_data is None:
            include_data = self.settings.include_data
        return project(self._buffer, include_data=include_data)

    # -- asyncio API --

    async def encode(self, fmt: FormatLike) -> bytes:
        """Encode on the view's executor without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._dispatcher.executor, self._encode_bytes, fmt)

    async def data_uri(self, fmt: FormatLike) -> str:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._dispatcher.executor, self._encode_data_uri, fmt)

    # camelCase aliases for callers using the older method names
    asJpegStream = as_jpeg_stream
    asPngStream = as_png_stream
    asJpegDataUri = as_jpeg_data_uri
    asPngDataUri = as_png_data_uri
    asObject = as_object
