"""Common helpers for the halfp conversion routines."""
from __future__ import annotations

import logging
import logging.config
from typing import Any, Optional

import numpy as np


class HalfpError(ValueError):
    """Raised for halfp validation or conversion errors."""


LOG_FORMAT = "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the halfp command-line tools."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": LOG_FORMAT},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": "DEBUG",
                    "formatter": "standard",
                    "stream": "ext://sys.stderr",
                },
            },
            "loggers": {
                "": {
                    "level": level.upper(),
                    "handlers": ["console"],
                    "propagate": False,
                },
            },
        }
    )


def as_words(
    buffer: Any,
    dtype: Any,
    count: int,
    writable: bool = False,
    name: str = "buffer",
) -> Optional[np.ndarray]:
    """Reinterpret a caller buffer as count native-order unsigned words.

    The returned array shares memory with ``buffer``. Returns None when
    ``buffer`` is None.
    """
    if buffer is None:
        return None
    if count < 0:
        raise HalfpError(f"Element count must be non-negative, got {count}")
    itemsize = np.dtype(dtype).itemsize
    try:
        raw = memoryview(buffer).cast("B")
    except TypeError as exc:
        raise HalfpError(f"{name} must be a C-contiguous buffer: {exc}") from exc
    if writable and raw.readonly:
        raise HalfpError(f"{name} is read-only")
    needed = count * itemsize
    if raw.nbytes < needed:
        raise HalfpError(f"{name} holds {raw.nbytes} bytes, need {needed} for {count} elements")
    if count == 0:
        return np.empty(0, dtype=dtype)
    return np.frombuffer(raw, dtype=dtype, count=count)
