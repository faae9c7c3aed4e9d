from __future__ import annotations

import io

import pytest
from PIL import Image

from image_view.core.decoder import decode, describe_source, read_source
from image_view.errors import ConstructionError, CorruptImageError, NotFoundError


def _png_bytes(img: Image.Image, **params) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="PNG", **params)
    return buf.getvalue()


def test_decode_jpeg_path(logo_jpg):
    buffer = decode(logo_jpg)
    assert buffer.size == (599, 555)
    assert buffer.mode == "RGB"
    assert buffer.nbytes == 599 * 555 * 3


def test_decode_accepts_str_path_and_bytes(small_png):
    from_path = decode(str(small_png))
    from_bytes = decode(small_png.read_bytes())
    assert from_path == from_bytes
    assert from_path.mode == "RGBA"


def test_missing_file_is_not_found(tmp_path):
    with pytest.raises(NotFoundError) as exc_info:
        decode(tmp_path / "nope.png")
    assert isinstance(exc_info.value, ConstructionError)
    assert exc_info.value.source.endswith("nope.png")


def test_directory_is_not_readable(tmp_path):
    with pytest.raises(NotFoundError):
        decode(tmp_path)


def test_empty_bytes_are_corrupt():
    with pytest.raises(CorruptImageError):
        decode(b"")


def test_truncated_jpeg_is_corrupt(logo_jpg):
    data = logo_jpg.read_bytes()
    with pytest.raises(CorruptImageError):
        decode(data[: len(data) // 3])


def test_unknown_source_type():
    with pytest.raises(TypeError):
        read_source(42)


def test_palette_with_transparency_expands_to_rgba():
    img = Image.new("P", (6, 4), 1)
    img.putpalette([0, 0, 0, 255, 0, 0] + [0] * (256 * 3 - 6))
    buffer = decode(_png_bytes(img, transparency=0))
    assert buffer.mode == "RGBA"


def test_palette_without_transparency_expands_to_rgb():
    img = Image.new("P", (6, 4), 1)
    img.putpalette([0, 0, 0, 255, 0, 0] + [0] * (256 * 3 - 6))
    buffer = decode(_png_bytes(img))
    assert buffer.mode == "RGB"
    assert buffer.data[:3] == b"\xff\x00\x00"


def test_bilevel_and_grayscale_become_l():
    assert decode(_png_bytes(Image.new("1", (5, 5), 1))).mode == "L"
    gray = decode(_png_bytes(Image.new("L", (5, 5), 77)))
    assert gray.mode == "L"
    assert set(gray.data) == {77}


def test_cmyk_becomes_rgb():
    buf = io.BytesIO()
    Image.new("CMYK", (8, 8), (0, 0, 0, 0)).save(buf, format="JPEG")
    assert decode(buf.getvalue()).mode == "RGB"


def test_describe_source(tmp_path):
    assert describe_source(b"abcd") == "<4 bytes>"
    assert describe_source(tmp_path / "a.png") == str(tmp_path / "a.png")


def test_integer_grayscale_is_scaled_like_sixteen_bit():
    img = Image.new("I", (2, 1))
    img.putdata([65535, 32768])
    buf = io.BytesIO()
    img.save(buf, format="TIFF")
    buffer = decode(buf.getvalue())
    assert buffer.mode == "L"
    assert list(buffer.data) == [255, 128]


def test_sixteen_bit_png_is_scaled():
    img = Image.new("I;16", (2, 1))
    img.putdata([65535, 32768])
    buffer = decode(_png_bytes(img))
    assert buffer.mode == "L"
    assert list(buffer.data) == [255, 128]
