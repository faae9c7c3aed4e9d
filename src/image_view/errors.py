"""
Error taxonomy for image views.

Construction errors are raised directly from ``ImageView(...)``. Everything
that goes wrong after construction is delivered through the completion of
the call that caused it.
"""


class ImageViewError(Exception):
    """Base class for all image view errors."""


class ConstructionError(ImageViewError):
    """The source could not be turned into a pixel buffer."""

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class NotFoundError(ConstructionError):
    """The source does not exist or cannot be read."""


class CorruptImageError(ConstructionError):
    """The source was read but does not hold a decodable raster image."""


class EncodeError(ImageViewError):
    """Encoding the pixel buffer failed."""


class UnsupportedFormatError(EncodeError, ValueError):
    """The requested output format is not JPEG or PNG."""


class FormatError(ImageViewError):
    """Building or parsing a data URI failed."""


class DispatchError(ImageViewError):
    """The worker pool did not accept the job."""


class CompletionTimeoutError(ImageViewError, TimeoutError):
    """No completion arrived within the requested timeout."""
