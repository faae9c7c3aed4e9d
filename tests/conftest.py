"""Shared fixtures.

Test images are generated with Pillow into ``tmp_path`` so the suite does
not depend on binary files in the repository.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
from PIL import Image, ImageDraw

from image_view import InlineExecutor


def _draw_logo(size: tuple[int, int]) -> Image.Image:
    img = Image.new("RGB", size, (255, 255, 255))
    draw = ImageDraw.Draw(img)
    w, h = size
    draw.ellipse((w // 8, h // 8, w // 2, h // 2), fill=(255, 0, 0))
    draw.ellipse((w // 2, h // 8, w - w // 8, h // 2), fill=(0, 255, 0))
    draw.ellipse((w // 4, h // 2, w - w // 4, h - h // 8), fill=(0, 0, 255))
    return img


@pytest.fixture
def logo_jpg(tmp_path: Path) -> Path:
    """A 599x555 JPEG."""
    path = tmp_path / "logo.jpg"
    _draw_logo((599, 555)).save(path, format="JPEG", quality=90)
    return path


@pytest.fixture
def small_png(tmp_path: Path) -> Path:
    """A 40x30 RGBA PNG with a horizontal gradient and varying alpha."""
    img = Image.new("RGBA", (40, 30))
    img.putdata([(x * 6, y * 8, 128, 255 - x * 5) for y in range(30) for x in range(40)])
    path = tmp_path / "small.png"
    img.save(path, format="PNG")
    return path


@pytest.fixture
def inline_executor():
    executor = InlineExecutor()
    yield executor
    executor.shutdown()


@pytest.fixture
def thread_pool():
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)
