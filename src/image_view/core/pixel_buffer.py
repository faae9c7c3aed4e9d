"""
pixel_buffer.py - immutable decoded raster data.

A PixelBuffer holds row-major 8-bit samples plus the dimensions and channel
layout needed to interpret them. It is created once by the decoder and only
ever read afterwards, so any number of threads may share it without locks.
"""

from dataclasses import dataclass

from PIL import Image

# Channel layouts a buffer may carry, by Pillow mode name.
CHANNELS_BY_MODE = {
    "L": 1,
    "LA": 2,
    "RGB": 3,
    "RGBA": 4,
}


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded image samples with their dimensions and channel layout."""
    width: int
    height: int
    mode: str
    data: bytes

    def __post_init__(self):
        if self.mode not in CHANNELS_BY_MODE:
            raise ValueError(f"Unsupported channel layout: {self.mode!r}")
        if self.width < 1 or self.height < 1:
            raise ValueError(f"Invalid dimensions {self.width}x{self.height}")
        if not isinstance(self.data, bytes):
            # freeze bytearray/memoryview input so the buffer stays immutable
            object.__setattr__(self, "data", bytes(self.data))
        expected = self.width * self.height * self.channels
        if len(self.data) != expected:
            raise ValueError(
                f"Sample data has {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height} {self.mode}"
            )

    @property
    def channels(self) -> int:
        return CHANNELS_BY_MODE[self.mode]

    @property
    def nbytes(self) -> int:
        return len(self.data)

    @property
    def size(self):
        return self.width, self.height

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Copy the samples of a loaded Pillow image in one of the supported modes."""
        width, height = image.size
        return cls(width=width, height=height, mode=image.mode, data=image.tobytes())

    def to_image(self) -> Image.Image:
        """Return a new Pillow image backed by a copy of the samples."""
        return Image.frombytes(self.mode, self.size, self.data)

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height}, mode={self.mode!r}, {self.nbytes} bytes)"
