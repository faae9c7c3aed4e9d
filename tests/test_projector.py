from PIL import Image

from image_view.core.pixel_buffer import PixelBuffer
from image_view.core.projector import project


def test_projection_schema():
    buffer = PixelBuffer.from_image(Image.new("RGB", (4, 3), (10, 20, 30)))
    assert project(buffer) == {
        "width": 4,
        "height": 3,
        "channels": 3,
        "mode": "RGB",
        "mean": [10.0, 20.0, 30.0],
    }


def test_projection_with_data():
    buffer = PixelBuffer(width=2, height=1, mode="L", data=b"\x00\xff")
    obj = project(buffer, include_data=True)
    assert obj["data"] == b"\x00\xff"
    assert obj["mean"] == [127.5]
