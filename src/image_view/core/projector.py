"""
projector.py - plain-Python view of a PixelBuffer.

The projection is a dict with a fixed schema:

    width     int
    height    int
    channels  int
    mode      str    "L", "LA", "RGB" or "RGBA"
    mean      list   per-channel mean sample value, rounded to 3 places
    data      bytes  row-major samples (only when include_data=True)
"""

from typing import Any, Dict

from PIL import ImageStat

from .pixel_buffer import PixelBuffer


def project(buffer: PixelBuffer, include_data: bool = False) -> Dict[str, Any]:
    """
    Return the dict projection of `buffer` described in the module docstring.

    Computing `mean` copies the samples into a Pillow image and reads each
    one once, so the cost grows with the pixel count. `data` is the
    buffer's own bytes and is not copied.
    """
    stat = ImageStat.Stat(buffer.to_image())
    obj: Dict[str, Any] = {
        "width": buffer.width,
        "height": buffer.height,
        "channels": buffer.channels,
        "mode": buffer.mode,
        "mean": [round(value, 3) for value in stat.mean],
    }
    if include_data:
        obj["data"] = buffer.data
    return obj
