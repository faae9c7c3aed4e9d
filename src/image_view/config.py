"""
config.py - settings for image views.

Settings are plain values passed to each ImageView. ``from_env`` reads the
IMAGE_VIEW_* environment variables so hosts can tune encoding without code
changes:

    IMAGE_VIEW_JPEG_QUALITY        1..100 (default 95)
    IMAGE_VIEW_PNG_COMPRESS_LEVEL  0..9   (default 6)
    IMAGE_VIEW_MAX_WORKERS         size of the default worker pool
    IMAGE_VIEW_INCLUDE_DATA        embed raw samples in as_object() (0/1)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_JPEG_QUALITY = 95
DEFAULT_PNG_COMPRESS_LEVEL = 6

ENV_PREFIX = "IMAGE_VIEW_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class ImageViewSettings:
    """Encoding and dispatch options for one or more image views."""
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    png_compress_level: int = DEFAULT_PNG_COMPRESS_LEVEL
    max_workers: Optional[int] = None
    include_data: bool = False

    def __post_init__(self):
        if not 1 <= self.jpeg_quality <= 100:
            raise ValueError(f"jpeg_quality must be in 1..100, got {self.jpeg_quality}")
        if not 0 <= self.png_compress_level <= 9:
            raise ValueError(f"png_compress_level must be in 0..9, got {self.png_compress_level}")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ImageViewSettings":
        """
        Build settings from IMAGE_VIEW_* variables.

        Args:
            environ: Mapping to read from (defaults to os.environ).

        Raises:
            ValueError: If a variable is set but malformed or out of range.
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        quality = _read_int(env, "JPEG_QUALITY")
        if quality is not None:
            kwargs["jpeg_quality"] = quality
        level = _read_int(env, "PNG_COMPRESS_LEVEL")
        if level is not None:
            kwargs["png_compress_level"] = level
        workers = _read_int(env, "MAX_WORKERS")
        if workers is not None:
            kwargs["max_workers"] = workers

        raw = env.get(ENV_PREFIX + "INCLUDE_DATA")
        if raw is not None:
            flag = raw.strip().lower()
            if flag in _TRUE_VALUES:
                kwargs["include_data"] = True
            elif flag in _FALSE_VALUES:
                kwargs["include_data"] = False
            else:
                raise ValueError(f"{ENV_PREFIX}INCLUDE_DATA must be a boolean, got {raw!r}")

        return cls(**kwargs)


def _read_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(ENV_PREFIX + name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
