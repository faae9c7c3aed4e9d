import logging
import os
from typing import Optional

from rich.logging import RichHandler

LOG_LEVEL_ENV = "IMAGE_VIEW_LOG_LEVEL"

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def resolve_level(level: int, env_value: Optional[str] = None) -> int:
    """
    Return the level named by IMAGE_VIEW_LOG_LEVEL if set, otherwise `level`.
    """
    name = env_value if env_value is not None else os.getenv(LOG_LEVEL_ENV, "")
    return _LEVELS.get(name.strip().lower(), level)


def configure_logging(level: int = logging.INFO, enable_rich: bool = True) -> None:
    """
    Configure the root logger. Meant for applications and scripts; the
    library itself never calls this.
    """
    if enable_rich:
        handlers = [RichHandler(rich_tracebacks=True)]
        fmt = "%(name)s: %(message)s"
    else:
        handlers = [logging.StreamHandler()]
        fmt = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    logging.basicConfig(
        level=resolve_level(level),
        format=fmt,
        handlers=handlers,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """
    Return a named logger (after logging is configured).
    """
    return logging.getLogger(name)
