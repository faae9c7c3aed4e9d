"""
Core functionality for decoding, encoding and dispatching image work.
"""

from .pixel_buffer import PixelBuffer
from .decoder import decode, describe_source
from .encoder import EncodedResult, ImageFormat, encode
from .data_uri import format_data_uri, parse_data_uri
from .projector import project
from .dispatch import Completion, Dispatcher, InlineExecutor, default_executor

__all__ = [
    "PixelBuffer",
    "decode",
    "describe_source",
    "EncodedResult",
    "ImageFormat",
    "encode",
    "format_data_uri",
    "parse_data_uri",
    "project",
    "Completion",
    "Dispatcher",
    "InlineExecutor",
    "default_executor",
]
