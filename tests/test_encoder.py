from __future__ import annotations

import io

import pytest
from PIL import Image

from image_view.core.decoder import decode
from image_view.core.encoder import EncodedResult, ImageFormat, encode
from image_view.core.pixel_buffer import PixelBuffer
from image_view.errors import EncodeError, UnsupportedFormatError


def _buffer(mode: str, size=(16, 12)) -> PixelBuffer:
    channels = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}[mode]
    w, h = size
    data = bytes((i * 7) % 256 for i in range(w * h * channels))
    return PixelBuffer(width=w, height=h, mode=mode, data=data)


@pytest.mark.parametrize("mode", ["L", "LA", "RGB", "RGBA"])
def test_png_is_lossless(mode):
    original = _buffer(mode)
    result = encode(original, ImageFormat.PNG)
    assert result.format is ImageFormat.PNG
    assert decode(result.data) == original


@pytest.mark.parametrize("mode, expected", [("L", "L"), ("LA", "L"), ("RGB", "RGB"), ("RGBA", "RGB")])
def test_jpeg_drops_alpha(mode, expected):
    result = encode(_buffer(mode), "jpeg")
    assert result.data.startswith(b"\xff\xd8")
    with Image.open(io.BytesIO(result.data)) as img:
        assert img.mode == expected
        assert img.size == (16, 12)


def test_format_names():
    assert ImageFormat.parse("JPG") is ImageFormat.JPEG
    assert ImageFormat.parse(" png ") is ImageFormat.PNG
    assert ImageFormat.parse(ImageFormat.JPEG) is ImageFormat.JPEG
    assert ImageFormat.JPEG.mime_type == "image/jpeg"


@pytest.mark.parametrize("value", ["gif", "", None, 3])
def test_unsupported_format(value):
    with pytest.raises(UnsupportedFormatError):
        encode(_buffer("RGB"), value)


def test_lower_quality_gives_smaller_jpeg():
    noisy = PixelBuffer.from_image(Image.effect_noise((64, 64), 60))
    small = encode(noisy, ImageFormat.JPEG, quality=10)
    large = encode(noisy, ImageFormat.JPEG, quality=95)
    assert len(small) < len(large)


def test_pillow_failure_becomes_encode_error(monkeypatch):
    def broken_save(self, fp, format=None, **params):
        raise OSError("no space left on device")

    monkeypatch.setattr(Image.Image, "save", broken_save)
    with pytest.raises(EncodeError, match="no space left"):
        encode(_buffer("RGB"), ImageFormat.PNG)


def test_encoded_result_len():
    result = EncodedResult(format=ImageFormat.PNG, data=b"12345")
    assert len(result) == 5
    assert result.mime_type == "image/png"


def test_memory_error_while_building_image_becomes_encode_error(monkeypatch):
    def out_of_memory(*args, **kwargs):
        raise MemoryError("out of memory")

    monkeypatch.setattr(Image, "frombytes", out_of_memory)
    with pytest.raises(EncodeError):
        encode(_buffer("RGB"), ImageFormat.JPEG)
